from datetime import datetime

from pydantic import Field, model_validator

from schemas.common import CamelModel


class SupplementCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    dosage: str = Field(..., min_length=1, max_length=100)
    frequency: str = Field(..., min_length=1, max_length=100)
    reminder_enabled: bool = False
    reminder_time: str | None = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    notes: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def _normalize(self) -> "SupplementCreate":
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("name must not be blank")
        if not self.reminder_enabled:
            self.reminder_time = None
        return self


class SupplementResponse(CamelModel):
    id: str
    user_id: str
    name: str
    dosage: str
    frequency: str
    reminder_enabled: bool
    reminder_time: str | None = None
    notes: str | None = None
    last_taken: datetime | None = None
