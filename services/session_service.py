import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

from jose import JWTError, jwt  # type: ignore

from models.user import User
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionData:
    sid: str
    user_id: str
    username: str
    created_at: str


class SessionManager:
    """
    Issues and resolves server-side sessions.

    The cookie holds only the session id, signed so that tampered values are
    rejected without touching the store. Every successful resolve pushes the
    expiry out by the full TTL (sliding expiry).
    """

    def __init__(self, store: SessionStore, secret: str, algorithm: str, ttl_seconds: int):
        self.store = store
        self._secret = secret
        self._algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def _sign(self, sid: str) -> str:
        return jwt.encode({"sid": sid}, self._secret, algorithm=self._algorithm)

    def _unsign(self, cookie_value: str) -> str | None:
        try:
            payload = jwt.decode(cookie_value, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None
        sid = payload.get("sid")
        return sid if isinstance(sid, str) and sid else None

    def create(self, user: User) -> tuple[SessionData, str]:
        sid = secrets.token_urlsafe(32)
        data = SessionData(
            sid=sid,
            user_id=str(user.id),
            username=user.username,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.store.set(sid, {"user_id": data.user_id, "username": data.username, "created_at": data.created_at}, self.ttl_seconds)
        return data, self._sign(sid)

    def resolve(self, cookie_value: str | None) -> SessionData | None:
        if not cookie_value:
            return None
        sid = self._unsign(cookie_value)
        if not sid:
            logger.info("Rejected session cookie with bad signature")
            return None
        record = self.store.get(sid)
        if not record:
            return None
        # Rolling renewal
        self.store.set(sid, record, self.ttl_seconds)
        return SessionData(
            sid=sid,
            user_id=record["user_id"],
            username=record["username"],
            created_at=record.get("created_at", ""),
        )

    def destroy(self, cookie_value: str | None) -> None:
        if not cookie_value:
            return
        sid = self._unsign(cookie_value)
        if sid:
            self.store.delete(sid)

    def destroy_sid(self, sid: str) -> None:
        self.store.delete(sid)
