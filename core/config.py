from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "VitalLog"
    env: str = "dev"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./vitallog.db"

    # The cookie carries a signed session id; the session itself lives server-side.
    session_secret: str = "CHANGE_ME"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "vitallog_session"
    session_ttl_days: int = 7
    session_prune_interval_hours: int = 24
    session_backend: str = "memory"  # "memory" | "redis"
    redis_url: str = "redis://localhost:6379/0"

    password_reset_ttl_minutes: int = 60
    request_timeout_seconds: float = 30.0

    frontend_origin: str = "http://localhost:5173"

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @property
    def cookie_secure(self) -> bool:
        return self.env == "production"


settings = Settings()
