from fastapi import APIRouter, status

from api.deps import AuthContextDep, DbDep
from schemas.common import MessageResponse
from schemas.health_metric import HealthMetricCreate, HealthMetricResponse, MetricType
from services.health_metric_service import create_metric, delete_metric, list_metrics

router = APIRouter()


@router.get("/health-metrics", response_model=list[HealthMetricResponse])
def get_health_metrics(db: DbDep, ctx: AuthContextDep, type: MetricType | None = None):
    return list_metrics(db, ctx.user_id, metric_type=type)


@router.post("/health-metrics", response_model=HealthMetricResponse, status_code=status.HTTP_201_CREATED)
def post_health_metric(payload: HealthMetricCreate, db: DbDep, ctx: AuthContextDep):
    return create_metric(db, ctx.user_id, payload)


@router.delete("/health-metrics/{metric_id}", response_model=MessageResponse)
def remove_health_metric(metric_id: str, db: DbDep, ctx: AuthContextDep):
    delete_metric(db, ctx.user_id, metric_id)
    return MessageResponse(message="Health metric deleted")
