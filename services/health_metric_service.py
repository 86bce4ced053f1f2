import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import InternalError, NotFoundError
from models.health_metric import HealthMetric
from schemas.health_metric import HealthMetricCreate

logger = logging.getLogger(__name__)


def list_metrics(db: Session, user_id: str, metric_type: str | None = None) -> list[HealthMetric]:
    q = db.query(HealthMetric).filter(HealthMetric.user_id == user_id)
    if metric_type:
        q = q.filter(HealthMetric.type == metric_type)
    return q.order_by(HealthMetric.date.asc(), HealthMetric.created_at.asc()).all()


def create_metric(db: Session, user_id: str, payload: HealthMetricCreate) -> HealthMetric:
    m = HealthMetric(user_id=user_id, **payload.model_dump())
    db.add(m)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("create_metric failed for user id=%s type=%s", user_id, payload.type)
        raise InternalError()
    db.refresh(m)
    return m


def delete_metric(db: Session, user_id: str, metric_id: str) -> None:
    m = db.query(HealthMetric).filter(HealthMetric.id == metric_id, HealthMetric.user_id == user_id).first()
    if not m:
        raise NotFoundError("Health metric not found")
    db.delete(m)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("delete_metric failed for user id=%s metric id=%s", user_id, metric_id)
        raise InternalError()
