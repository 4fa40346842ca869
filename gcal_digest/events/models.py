"""
models.py: Event and fetch-window data structures.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from utils.timezone_utils import local_midnight

UNTITLED_EVENT = "Untitled Event"


@dataclass(frozen=True)
class Event:
    """A single calendar occurrence; exactly one of start_date / start_time is set."""
    title: str
    description: Optional[str]
    start_date: Optional[str]
    start_time: Optional[str]
    source_id: str

    def __post_init__(self):
        if bool(self.start_date) == bool(self.start_time):
            raise ValueError(
                f"Event '{self.title}' must have exactly one of start_date/start_time "
                f"(got date={self.start_date!r}, dateTime={self.start_time!r})"
            )

    @property
    def is_all_day(self) -> bool:
        return bool(self.start_date)

    @classmethod
    def from_api(cls, item: Dict[str, Any], source_id: str) -> "Event":
        """Build an Event from a Google Calendar API event resource."""
        start = item.get("start") or {}
        date_str = start.get("date")
        time_str = start.get("dateTime")
        # Timed events win if the server ever sends both
        if date_str and time_str:
            date_str = None
        return cls(
            title=item.get("summary") or UNTITLED_EVENT,
            description=item.get("description") or None,
            start_date=date_str,
            start_time=time_str,
            source_id=source_id,
        )


@dataclass(frozen=True)
class FetchWindow:
    """Half-open interval [start, end) of aware datetimes."""
    start: datetime
    end: datetime

    @classmethod
    def for_day(cls, today: date, tz: ZoneInfo, days: int) -> "FetchWindow":
        return cls(start=local_midnight(today, tz), end=local_midnight(today + timedelta(days=days), tz))

    def rfc3339(self):
        return self.start.isoformat(), self.end.isoformat()
