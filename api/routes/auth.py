import logging

from fastapi import APIRouter, Request, Response

from api.deps import (
    AuthContextDep,
    DbDep,
    SessionManagerDep,
    SettingsDep,
    clear_session_cookie,
    set_session_cookie,
)
from core.errors import AuthenticationError
from models.user import User
from schemas.auth import LoginRequest, PasswordReset, PasswordResetRequest, RegisterRequest, UserResponse
from schemas.common import MessageResponse
from services.auth_service import authenticate, register_user, request_password_reset, reset_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
def register(payload: RegisterRequest, response: Response, db: DbDep, settings: SettingsDep, sessions: SessionManagerDep):
    user = register_user(db, username=payload.username, email=payload.email, password=payload.password, name=payload.name)
    # Registration logs the new user in.
    _, cookie_value = sessions.create(user)
    set_session_cookie(response, settings, cookie_value)
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=MessageResponse)
def login(payload: LoginRequest, request: Request, response: Response, db: DbDep, settings: SettingsDep, sessions: SessionManagerDep):
    user = authenticate(db, payload.identifier, payload.password)
    # Drop any session this client already held.
    sessions.destroy(request.cookies.get(settings.session_cookie_name))
    _, cookie_value = sessions.create(user)
    set_session_cookie(response, settings, cookie_value)
    logger.info("User id=%s logged in", user.id)
    return MessageResponse(message="Login successful")


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, response: Response, settings: SettingsDep, sessions: SessionManagerDep):
    sessions.destroy(request.cookies.get(settings.session_cookie_name))
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logout successful")


@router.get("/user", response_model=UserResponse)
def current_user(db: DbDep, ctx: AuthContextDep):
    user = db.get(User, ctx.user_id)
    if not user:
        raise AuthenticationError()
    return UserResponse.model_validate(user)


@router.post("/reset-password-request", response_model=MessageResponse)
def password_reset_request(payload: PasswordResetRequest, db: DbDep, settings: SettingsDep):
    request_password_reset(db, payload.email, ttl_minutes=settings.password_reset_ttl_minutes)
    return MessageResponse(message="Password reset email sent")


@router.post("/reset-password", response_model=MessageResponse)
def password_reset(payload: PasswordReset, db: DbDep):
    reset_password(db, payload.token, payload.new_password)
    return MessageResponse(message="Password reset successful")
