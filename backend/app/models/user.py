from __future__ import annotations

from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.errors import InsufficientPointsError, ValidationError
from app.core.ids import utcnow
from app.db.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("points >= 0", name="ck_users_points_non_negative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def apply_points_delta(self, delta: int) -> None:
        """Single mutator of the balance. Precondition: points + delta >= 0, else InsufficientPointsError."""
        if self.points + delta < 0:
            raise InsufficientPointsError(required=-delta, available=self.points)
        self.points += delta
        self.updated_at = utcnow()

    def add_points(self, points: int) -> None:
        if points < 0:
            raise ValidationError("Points to add must be >= 0")
        self.apply_points_delta(points)

    def use_points(self, points: int) -> None:
        if points < 0:
            raise ValidationError("Points to use must be >= 0")
        self.apply_points_delta(-points)
