from __future__ import annotations

from datetime import date, datetime
from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import utcnow
from app.db.base import Base


class WeeklyPointsAward(Base):
    """Points already granted to a user for one Monday-start week. Never decreases."""

    __tablename__ = "weekly_points_awards"
    __table_args__ = (UniqueConstraint("user_id", "week_start", name="uq_weekly_points_awards_user_week"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_start: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    points_awarded: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def raise_to(self, points: int) -> None:
        if points > self.points_awarded:
            self.points_awarded = points
            self.updated_at = utcnow()
