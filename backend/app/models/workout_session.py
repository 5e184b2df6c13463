"""Logged workout occurrence. Its count per Monday-Sunday week drives the points award."""

import datetime as dt
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import utcnow
from app.core.validation import UNSET
from app.db.base import Base


class WorkoutType(str, Enum):
    CROSSFIT = "crossfit"
    PILATES = "pilates"
    GYM = "gym"
    RUNNING = "running"
    SWIMMING = "swimming"
    YOGA = "yoga"
    OTHER = "other"


class WorkoutSession(Base):
    __tablename__ = "workout_sessions"
    __table_args__ = (Index("ix_workout_sessions_user_id_date", "user_id", "date"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    program_id: Mapped[str | None] = mapped_column(
        ForeignKey("programs.id", ondelete="SET NULL"), nullable=True, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def update_details(
        self,
        type_: str | None = None,
        date_: dt.date | None = None,
        duration: int | None = None,
        program_id: str | None = UNSET,
        notes: str | None = UNSET,
    ) -> None:
        """Apply given values and re-stamp updated_at. program_id and notes accept None to clear."""
        if type_ is not None:
            self.type = type_
        if date_ is not None:
            self.date = date_
        if duration is not None:
            self.duration = duration
        if program_id is not UNSET:
            self.program_id = program_id
        if notes is not UNSET:
            self.notes = notes
        self.updated_at = utcnow()

    def is_in_week(self, week_start: dt.date, week_end: dt.date) -> bool:
        return week_start <= self.date <= week_end
