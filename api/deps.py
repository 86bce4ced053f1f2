import logging
from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from core.config import Settings
from core.errors import AuthenticationError
from models.user import User
from services.session_service import SessionManager

logger = logging.getLogger(__name__)


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


DbDep = Annotated[Session, Depends(get_db)]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


def set_session_cookie(response: Response, settings: Settings, cookie_value: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        cookie_value,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, established once per request from the session."""

    user_id: str
    username: str
    session_id: str


def get_auth_context(
    request: Request,
    response: Response,
    db: DbDep,
    settings: SettingsDep,
    sessions: SessionManagerDep,
) -> AuthContext:
    cookie_value = request.cookies.get(settings.session_cookie_name)
    data = sessions.resolve(cookie_value)
    if not data:
        raise AuthenticationError()

    user = db.get(User, data.user_id)
    if not user:
        # Session outlived its user row; end it here.
        logger.warning("Session for missing user id=%s destroyed", data.user_id)
        sessions.destroy_sid(data.sid)
        raise AuthenticationError()

    # Sliding expiry: re-issue the cookie with a fresh max-age.
    set_session_cookie(response, settings, cookie_value)
    return AuthContext(user_id=str(user.id), username=user.username, session_id=data.sid)


AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
