from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import utcnow
from app.db.base import Base

MIN_TIER = 1
MAX_TIER = 5


class Reward(Base):
    __tablename__ = "rewards"
    __table_args__ = (
        CheckConstraint("tier BETWEEN 1 AND 5", name="ck_rewards_tier_range"),
        CheckConstraint("points_cost > 0", name="ck_rewards_points_cost_positive"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tier: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    points_cost: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def update_details(
        self,
        name: str | None = None,
        description: str | None = None,
        tier: int | None = None,
        points_cost: int | None = None,
        image_url: str | None = None,
    ) -> None:
        if name:
            self.name = name
        if description is not None:
            self.description = description
        if tier is not None:
            self.tier = tier
        if points_cost is not None:
            self.points_cost = points_cost
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = utcnow()
