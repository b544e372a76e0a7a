"""Date seed computation at the service boundary.

The pipeline itself never reads the clock: callers pass a date seed in.
Only the scheduled pre-generation trigger derives "today" here.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from balance_game.config import settings


def format_date_seed(day: date) -> str:
    """Format a day as ``YYYY-M-D`` (no zero padding), e.g. ``2024-5-1``."""
    return f"{day.year}-{day.month}-{day.day}"


def today_seed(tz_name: str | None = None, now: datetime | None = None) -> str:
    """Date seed of the current day in the deployment's time zone.

    Args:
        tz_name: IANA time zone. Defaults to settings.timezone.
        now: Instant to convert instead of the current time.

    Returns:
        The date seed for that local day
    """
    tz = ZoneInfo(tz_name or settings.timezone)
    current = now.astimezone(tz) if now is not None else datetime.now(tz)
    return format_date_seed(current.date())
