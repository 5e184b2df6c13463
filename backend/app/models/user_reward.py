from __future__ import annotations

from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.ids import utcnow
from app.db.base import Base


class UserReward(Base):
    """Per-user unlock state of a reward. At most one row per (user, reward); unlocked is one-way."""

    __tablename__ = "user_rewards"
    __table_args__ = (UniqueConstraint("user_id", "reward_id", name="uq_user_rewards_user_reward"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reward_id: Mapped[str] = mapped_column(
        ForeignKey("rewards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    unlocked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def unlock(self, now: datetime | None = None) -> None:
        if self.unlocked:
            return
        now = now or utcnow()
        self.unlocked = True
        self.unlocked_at = now
        self.updated_at = now

    def is_unlocked(self) -> bool:
        return self.unlocked
