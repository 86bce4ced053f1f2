from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from schemas.common import CamelModel, to_naive_utc

MetricType = Literal["heart_rate", "sleep", "steps"]


class HealthMetricCreate(CamelModel):
    type: MetricType
    value: float = Field(..., ge=0)
    date: datetime = Field(default_factory=datetime.utcnow)
    source: str = Field("manual", min_length=1, max_length=50)

    @field_validator("date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class HealthMetricResponse(CamelModel):
    id: str
    user_id: str
    type: MetricType
    value: float
    date: datetime
    source: str
