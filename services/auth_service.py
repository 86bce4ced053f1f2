import logging
import secrets
from datetime import datetime, timedelta

from passlib.context import CryptContext # type: ignore
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import AuthenticationError, InternalError, NotFoundError, ValidationError
from models.user import User

logger = logging.getLogger(__name__)

# scrypt is memory-hard; passlib stores the salt and cost parameters inside the hash string.
pwd_context = CryptContext(schemes=["scrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid email/username or password."
INVALID_RESET_TOKEN = "Invalid or expired reset token"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        # Unrecognised or malformed hash
        return False


def normalize_email(email: str) -> str:
    return email.lower().strip()


def find_user_by_identifier(db: Session, identifier: str) -> User | None:
    """Email first, then username."""
    ident = identifier.strip()
    user = db.query(User).filter(User.email == normalize_email(ident)).first()
    if user:
        return user
    return db.query(User).filter(User.username == ident).first()


def authenticate(db: Session, identifier: str, password: str) -> User:
    user = find_user_by_identifier(db, identifier)
    # Same outcome for unknown identifier and wrong password.
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Login failed")
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user


def _find_conflicting_users(db: Session, username: str, email: str) -> list[User]:
    return db.query(User).filter(or_(User.username == username, User.email == email)).all()


def _duplicate_error(existing: list[User], username: str) -> ValidationError:
    if any(u.username == username for u in existing):
        return ValidationError("Username already exists", errors=[{"field": "username", "message": "Username already exists"}])
    if existing:
        return ValidationError("Email already exists", errors=[{"field": "email", "message": "Email already exists"}])
    return ValidationError(
        "Username or email already exists",
        errors=[
            {"field": "username", "message": "Username or email already exists"},
            {"field": "email", "message": "Username or email already exists"},
        ],
    )


def register_user(db: Session, username: str, email: str, password: str, name: str | None = None) -> User:
    username = username.strip()
    email = normalize_email(email)

    existing = _find_conflicting_users(db, username, email)
    if existing:
        raise _duplicate_error(existing, username)

    user = User(username=username, email=email, hashed_password=hash_password(password), name=name, goals=[])
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration; report the same field as the pre-check.
        db.rollback()
        raise _duplicate_error(_find_conflicting_users(db, username, email), username)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("register_user failed for username=%r", username)
        raise InternalError()
    db.refresh(user)
    logger.info("Registered user id=%s username=%s", user.id, user.username)
    return user


def request_password_reset(db: Session, email: str, ttl_minutes: int = 60) -> str:
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if not user:
        raise NotFoundError("User not found")

    token = secrets.token_hex(32)
    user.reset_token = token
    user.reset_token_expires_at = datetime.utcnow() + timedelta(minutes=ttl_minutes)
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("request_password_reset failed for user id=%s", user.id)
        raise InternalError()

    # Delivery (email) is handled outside this service.
    logger.info("Password reset issued for user id=%s", user.id)
    logger.debug("Password reset token for user id=%s: %s", user.id, token)
    return token


def reset_password(db: Session, token: str, new_password: str) -> User:
    user = db.query(User).filter(User.reset_token == token).first()
    if not user or not user.reset_token_expires_at or user.reset_token_expires_at < datetime.utcnow():
        raise ValidationError(INVALID_RESET_TOKEN)

    user.hashed_password = hash_password(new_password)
    user.reset_token = None
    user.reset_token_expires_at = None
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("reset_password failed for user id=%s", user.id)
        raise InternalError()
    logger.info("Password reset completed for user id=%s", user.id)
    return user
