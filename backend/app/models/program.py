"""Reusable workout template: named, typed, with an ordered list of exercises stored as JSON."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from app.core.ids import utcnow
from app.db.base import Base


class Program(Base):
    __tablename__ = "programs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # [{"name", "sets", "reps", "weight", "duration", "notes"}, ...] in display order
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # JSON columns are not mutation-tracked: always assign a new list.

    def find_exercise(self, name: str) -> dict | None:
        for exercise in self.exercises or []:
            if exercise.get("name") == name:
                return exercise
        return None

    def add_exercise(self, exercise: dict) -> None:
        self.exercises = [*(self.exercises or []), exercise]
        self.updated_at = utcnow()

    def remove_exercise(self, name: str) -> None:
        self.exercises = [e for e in (self.exercises or []) if e.get("name") != name]
        self.updated_at = utcnow()

    def update_exercise(self, name: str, changes: dict) -> None:
        self.exercises = [
            {**e, **changes} if e.get("name") == name else e for e in (self.exercises or [])
        ]
        self.updated_at = utcnow()

    def replace_exercises(self, exercises: list[dict]) -> None:
        self.exercises = list(exercises)
        self.updated_at = utcnow()

    def update_details(
        self,
        name: str | None = None,
        type_: str | None = None,
        description: str | None = None,
    ) -> None:
        if name:
            self.name = name
        if type_:
            self.type = type_
        if description is not None:
            self.description = description
        self.updated_at = utcnow()
