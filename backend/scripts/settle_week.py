#!/usr/bin/env python3
"""One-off: settle weekly points for all users (same job the scheduler runs on Mondays).
Usage: python scripts/settle_week.py [YYYY-MM-DD]   (any day of the week; default: last week)"""
import asyncio
import logging
import sys
from datetime import date

from app.core.weeks import previous_week_start, week_start_for
from app.services.settlement import settle_all_users


async def main():
    if len(sys.argv) > 1:
        try:
            week_start = week_start_for(date.fromisoformat(sys.argv[1]))
        except ValueError:
            print(f"Invalid date {sys.argv[1]!r}; expected YYYY-MM-DD")
            sys.exit(2)
    else:
        week_start = previous_week_start(date.today())

    earned = await settle_all_users(week_start)
    print(f"=== Week of {week_start.isoformat()} ===")
    for user_id, points in earned.items():
        print(f"{user_id}: +{points}")
    print(f"Users settled: {len(earned)}, points awarded: {sum(earned.values())}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(main())
