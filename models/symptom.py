import uuid
import datetime as dt

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Symptom(Base):
    __tablename__ = "symptoms"
    __table_args__ = (
        CheckConstraint("severity BETWEEN 1 AND 10", name="ck_symptoms_severity"),
        CheckConstraint("mood_intensity BETWEEN 1 AND 10", name="ck_symptoms_mood_intensity"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), index=True, nullable=False)

    category: Mapped[str] = mapped_column(String, nullable=False)
    severity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[dt.datetime] = mapped_column(DateTime, index=True, nullable=False)

    mood: Mapped[str] = mapped_column(String, nullable=False, default="Neutral")
    mood_intensity: Mapped[int] = mapped_column(Integer, nullable=False, default=5)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
