from datetime import date, datetime
from zoneinfo import ZoneInfo

from attendance_tracker.core.config import settings


def get_now() -> datetime:
    """
    Current local wall-clock time as a naive datetime.

    Every rule that talks about "today" or an hour of the day reads the time
    through this dependency, so tests can pin it with `dependency_overrides`.
    """
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def is_weekend(day: date) -> bool:
    # weekday: 5=Saturday, 6=Sunday
    return day.weekday() >= 5


def weekday_name(day: date) -> str:
    return day.strftime("%A")


def time_period(now: datetime) -> str:
    """Label for the part of the working day `now` falls in."""
    if now.hour < 12:
        return "morning"
    elif now.hour < 15:
        return "afternoon"
    else:
        return "evening"
