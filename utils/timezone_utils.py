"""
timezone_utils.py: Timezone resolution and relative date labels for the digest.

Every calendar-day comparison here is made on local dates in the display
timezone, never on raw day-of-month numbers.
"""

from datetime import datetime, date, time, timezone as dt_timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger("gcaldigest")

# Fallback timezone when a configured name cannot be resolved
FALLBACK_TIMEZONE = "UTC"

# Common timezone mappings for user-friendly configuration
COMMON_TIMEZONE_ALIASES = {
    "est": "America/New_York",
    "cst": "America/Chicago",
    "mst": "America/Denver",
    "pst": "America/Los_Angeles",
    "edt": "America/New_York",
    "cdt": "America/Chicago",
    "mdt": "America/Denver",
    "pdt": "America/Los_Angeles",
    "msk": "Europe/Moscow",
    "gmt": "UTC",
    "utc": "UTC"
}

# Smallest aware instant; used to sort unparseable starts first
MIN_INSTANT = datetime.min.replace(tzinfo=dt_timezone.utc)


def get_timezone(tz_name: str) -> ZoneInfo:
    """
    Get a ZoneInfo object for the specified timezone name.

    Args:
        tz_name: IANA timezone name or one of COMMON_TIMEZONE_ALIASES

    Returns:
        ZoneInfo object for the timezone

    Falls back to UTC if the timezone is invalid.
    """
    if not tz_name:
        return ZoneInfo(FALLBACK_TIMEZONE)

    tz_name = tz_name.strip()
    alias = COMMON_TIMEZONE_ALIASES.get(tz_name.lower())
    if alias:
        tz_name = alias

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Invalid timezone '{tz_name}', falling back to {FALLBACK_TIMEZONE}: {e}")
        return ZoneInfo(FALLBACK_TIMEZONE)


def local_midnight(day: date, tz: ZoneInfo) -> datetime:
    """Midnight at the start of ``day`` in ``tz``."""
    return datetime.combine(day, time.min, tzinfo=tz)


def parse_rfc3339(dt_str: str) -> Optional[datetime]:
    """
    Parse an RFC3339 timestamp with offset ('Z' or +HH:MM).

    Returns None for empty, malformed, or offset-less strings.
    """
    if not dt_str:
        return None
    dt_str = dt_str.strip()
    if dt_str.endswith(('Z', 'z')):
        dt_str = dt_str[:-1] + '+00:00'
    try:
        dt = datetime.fromisoformat(dt_str)
    except ValueError as e:
        logger.debug(f"Error parsing timestamp '{dt_str}': {e}")
        return None
    if dt.tzinfo is None:
        return None
    return dt


def parse_calendar_date(date_str: str, tz: ZoneInfo) -> Optional[datetime]:
    """Parse a YYYY-MM-DD string as local midnight in ``tz``."""
    if not date_str:
        return None
    try:
        return local_midnight(date.fromisoformat(date_str.strip()), tz)
    except ValueError as e:
        logger.debug(f"Error parsing date '{date_str}': {e}")
        return None


def days_between(instant: datetime, now: datetime, tz: ZoneInfo) -> int:
    """Number of calendar days from ``now`` to ``instant`` as seen in ``tz``."""
    return (instant.astimezone(tz).date() - now.astimezone(tz).date()).days


def pretty_date(instant: datetime, now: datetime, tz: ZoneInfo) -> str:
    """
    Render an instant relative to ``now`` in the display timezone.

    Examples (tz local, now = Thu 2024-03-14 10:00):
        2024-03-14 18:30 -> "Today, 18:30:00"
        2024-03-15 09:00 -> "Tomorrow, 09:00:00"
        2024-03-20 14:00 -> "Wed, 20 Mar 14:00:00"
    """
    local = instant.astimezone(tz)
    delta = days_between(instant, now, tz)
    if delta == 0:
        return local.strftime("Today, %H:%M:%S")
    if delta == 1:
        return local.strftime("Tomorrow, %H:%M:%S")
    return local.strftime("%a, %d %b %H:%M:%S")
