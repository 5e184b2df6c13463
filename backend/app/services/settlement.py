"""Weekly settlement over all users, one transaction per user."""

import logging
from datetime import date

from app.core.weeks import week_start_for
from app.db.session import async_session_maker
from app.repositories import SqlRepositories
from app.services.orchestrator import settle_week

logger = logging.getLogger(__name__)


async def settle_all_users(week_start: date) -> dict[str, int]:
    """
    Run settle_week for every user. A failing user is rolled back and logged;
    the others still settle. Returns {user_id: points_earned} for users that settled.
    """
    week_start = week_start_for(week_start)
    async with async_session_maker() as session:
        user_ids = [u.id for u in await SqlRepositories(session).users.list_all()]

    earned: dict[str, int] = {}
    for uid in user_ids:
        async with async_session_maker() as session:
            try:
                update = await settle_week(SqlRepositories(session), uid, week_start)
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.exception("Settlement: user_id=%s week=%s failed: %s", uid, week_start, e)
                continue
        earned[uid] = update.points_earned
        if update.points_earned:
            logger.info("Settlement: user_id=%s week=%s +%s points", uid, week_start, update.points_earned)
    logger.info("Settlement: week=%s settled %s/%s users", week_start, len(earned), len(user_ids))
    return earned
