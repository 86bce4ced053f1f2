from datetime import datetime

from pydantic import Field, field_validator

from schemas.common import CamelModel, to_naive_utc


class SymptomCreate(CamelModel):
    category: str = Field(..., min_length=1, max_length=100)
    severity: int = Field(..., ge=1, le=10)
    description: str = Field("", max_length=500)
    # The SPA sends a full ISO timestamp; a bare YYYY-MM-DD is read as midnight.
    date: datetime
    mood: str = Field("Neutral", min_length=1, max_length=50)
    mood_intensity: int = Field(5, ge=1, le=10)

    @field_validator("date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class SymptomResponse(CamelModel):
    id: str
    user_id: str
    category: str
    severity: int
    description: str
    date: datetime
    mood: str
    mood_intensity: int
