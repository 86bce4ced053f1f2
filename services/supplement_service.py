import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import ConflictError, InternalError, NotFoundError
from models.supplement import Supplement
from schemas.supplement import SupplementCreate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Supplement with this name already exists"


def list_supplements(db: Session, user_id: str) -> list[Supplement]:
    return (
        db.query(Supplement)
        .filter(Supplement.user_id == user_id)
        .order_by(Supplement.created_at.asc())
        .all()
    )


def get_owned_supplement(db: Session, user_id: str, supplement_id: str) -> Supplement:
    s = db.query(Supplement).filter(Supplement.id == supplement_id, Supplement.user_id == user_id).first()
    if not s:
        raise NotFoundError("Supplement not found")
    return s


def _name_taken(db: Session, user_id: str, name: str) -> bool:
    existing = (
        db.query(Supplement.id)
        .filter(Supplement.user_id == user_id, Supplement.name == name)
        .with_for_update()
        .first()
    )
    return existing is not None


def create_supplement(db: Session, user_id: str, payload: SupplementCreate) -> Supplement:
    # Check and insert share one transaction; the (user_id, name) unique
    # constraint rejects whichever concurrent create commits second.
    if _name_taken(db, user_id, payload.name):
        db.rollback()
        raise ConflictError(DUPLICATE_NAME)

    s = Supplement(user_id=user_id, **payload.model_dump())
    db.add(s)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_NAME)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("create_supplement failed for user id=%s", user_id)
        raise InternalError()
    db.refresh(s)
    return s


def mark_taken(db: Session, user_id: str, supplement_id: str) -> Supplement:
    s = get_owned_supplement(db, user_id, supplement_id)
    s.last_taken = datetime.utcnow()
    db.add(s)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("mark_taken failed for user id=%s supplement id=%s", user_id, supplement_id)
        raise InternalError()
    db.refresh(s)
    return s


def delete_supplement(db: Session, user_id: str, supplement_id: str) -> None:
    s = get_owned_supplement(db, user_id, supplement_id)
    db.delete(s)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("delete_supplement failed for user id=%s supplement id=%s", user_id, supplement_id)
        raise InternalError()
