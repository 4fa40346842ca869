"""
merging.py: Combine per-source event lists into one chronological sequence.
"""
from datetime import datetime
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from utils.logging import logger
from utils.timezone_utils import MIN_INSTANT, parse_calendar_date, parse_rfc3339
from .models import Event

DROP_INVALID = "drop"
SORT_INVALID_FIRST = "first"
INVALID_START_POLICIES = (DROP_INVALID, SORT_INVALID_FIRST)


def effective_instant(event: Event, tz: ZoneInfo) -> Optional[datetime]:
    """Local midnight for all-day events, the literal instant for timed ones; None if unparseable."""
    if event.start_date:
        return parse_calendar_date(event.start_date, tz)
    return parse_rfc3339(event.start_time)


# --- merge_events ---
# Orders the concatenated per-source events ascending by effective instant.
# The sort is stable, so ties keep source-fetch order. No deduplication.
# Args:
#     events: All fetched events, in source order.
#     tz: Display timezone used to anchor all-day events.
#     invalid_policy: "drop" discards events with an unparseable start (logged),
#                     "first" keeps them at the front of the list.
# Returns: A new list of events.
def merge_events(events: Iterable[Event], tz: ZoneInfo, invalid_policy: str = DROP_INVALID) -> List[Event]:
    if invalid_policy not in INVALID_START_POLICIES:
        raise ValueError(f"Unknown invalid start policy: {invalid_policy}")
    keyed = []
    for event in events:
        instant = effective_instant(event, tz)
        if instant is None:
            raw = event.start_date or event.start_time
            if invalid_policy == DROP_INVALID:
                logger.warning(f"Dropping event '{event.title}' from {event.source_id}: unparseable start '{raw}'")
                continue
            logger.warning(f"Event '{event.title}' from {event.source_id} has unparseable start '{raw}', sorting first")
            instant = MIN_INSTANT
        keyed.append((instant, event))
    keyed.sort(key=lambda pair: pair[0])
    merged = [event for _, event in keyed]
    logger.debug(f"Merged {len(merged)} events")
    return merged
