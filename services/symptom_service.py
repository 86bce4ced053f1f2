import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InternalError, NotFoundError
from models.symptom import Symptom
from schemas.symptom import SymptomCreate

logger = logging.getLogger(__name__)


def list_symptoms(db: Session, user_id: str) -> list[Symptom]:
    return (
        db.query(Symptom)
        .filter(Symptom.user_id == user_id)
        .order_by(Symptom.date.asc(), Symptom.created_at.asc())
        .all()
    )


def create_symptom(db: Session, user_id: str, payload: SymptomCreate) -> Symptom:
    s = Symptom(user_id=user_id, **payload.model_dump())
    db.add(s)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("create_symptom failed for user id=%s", user_id)
        raise InternalError()
    db.refresh(s)
    return s


def delete_symptom(db: Session, user_id: str, symptom_id: str) -> None:
    s = db.query(Symptom).filter(Symptom.id == symptom_id, Symptom.user_id == user_id).first()
    if not s:
        raise NotFoundError("Symptom not found")
    db.delete(s)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("delete_symptom failed for user id=%s symptom id=%s", user_id, symptom_id)
        raise InternalError()
