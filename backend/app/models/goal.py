"""User-defined points target, optionally paying out a reward when completed."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.errors import ValidationError
from app.core.ids import utcnow
from app.core.validation import UNSET
from app.db.base import Base


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("points_required > 0", name="ck_goals_points_required_positive"),
        CheckConstraint("points_accumulated >= 0", name="ck_goals_points_accumulated_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    points_required: Mapped[int] = mapped_column(Integer, nullable=False)
    points_accumulated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    reward_id: Mapped[str | None] = mapped_column(
        ForeignKey("rewards.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def add_points(self, points: int) -> None:
        """Accumulate points; completed flips to True the first time the threshold is reached."""
        if points <= 0:
            raise ValidationError("Points added to a goal must be > 0")
        self.points_accumulated += points
        if self.points_accumulated >= self.points_required and not self.completed:
            self.completed = True
        self.updated_at = utcnow()

    def reset(self) -> None:
        self.points_accumulated = 0
        self.completed = False
        self.updated_at = utcnow()

    def update_details(
        self,
        name: str | None = None,
        points_required: int | None = None,
        description: str | None = UNSET,
        reward_id: str | None = UNSET,
    ) -> None:
        # Lowering points_required does not complete the goal; completion happens only on add_points.
        if name:
            self.name = name
        if points_required is not None:
            self.points_required = points_required
        if description is not UNSET:
            self.description = description
        if reward_id is not UNSET:
            self.reward_id = reward_id
        self.updated_at = utcnow()

    def is_completed(self) -> bool:
        return self.completed
