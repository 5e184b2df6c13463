"""ISO week helpers: weeks start on Monday and include Sunday."""

from datetime import date, timedelta

DAYS_IN_WEEK = 7


def week_start_for(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())


def week_end_for(week_start: date) -> date:
    """Last day (inclusive) of the week starting at week_start."""
    return week_start + timedelta(days=DAYS_IN_WEEK - 1)


def previous_week_start(today: date) -> date:
    return week_start_for(today) - timedelta(days=DAYS_IN_WEEK)
