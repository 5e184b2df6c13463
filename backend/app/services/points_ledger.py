"""
Points ledger: credits the weekly award to the user's balance exactly once per (user, week).

The weekly_points_awards marker stores what was already granted for a week;
only the difference between the freshly computed award and the marker is
credited, so re-running the award for an unchanged week is a no-op.
"""

import logging
from datetime import date

from app.core.errors import NotFoundError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.metrics import POINTS_AWARDED
from app.core.weeks import week_start_for
from app.models.user import User
from app.models.weekly_points_award import WeeklyPointsAward
from app.repositories.base import Repositories
from app.services.points_calculator import calculate_weekly_points

logger = logging.getLogger(__name__)


def apply_points_delta(user: User, delta: int) -> User:
    """Every balance change goes through here. Raises InsufficientPointsError if points + delta < 0."""
    user.apply_points_delta(delta)
    return user


async def award_points_for_week(
    repos: Repositories,
    user_id: str,
    week_start: date,
    *,
    id_generator: IdGenerator = uuid_id,
) -> User:
    """
    Compute the week's points and credit what has not been granted yet.
    Returns the (possibly unchanged) user. Raises NotFoundError if the user does not exist.
    """
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    monday = week_start_for(week_start)
    if monday != week_start:
        logger.debug("Points: week_start %s normalised to Monday %s", week_start, monday)

    earned = await calculate_weekly_points(repos.sessions, user_id, monday)
    award = await repos.weekly_awards.get_for_week(user_id, monday)
    already_awarded = award.points_awarded if award else 0
    delta = earned - already_awarded
    if delta <= 0:
        if earned < already_awarded:
            # Sessions removed after the award: points are kept, the marker stays at its high-water mark.
            logger.info(
                "Points: user_id=%s week=%s now earns %s but %s already granted; nothing to do",
                user_id, monday, earned, already_awarded,
            )
        return user

    apply_points_delta(user, delta)
    await repos.users.save(user)

    if award is None:
        now = utcnow()
        await repos.weekly_awards.add(
            WeeklyPointsAward(
                id=id_generator(),
                user_id=user_id,
                week_start=monday,
                points_awarded=earned,
                created_at=now,
                updated_at=now,
            )
        )
    else:
        award.raise_to(earned)
        await repos.weekly_awards.save(award)

    POINTS_AWARDED.inc(delta)
    logger.info("Points: user_id=%s week=%s +%s (balance %s)", user_id, monday, delta, user.points)
    return user
