# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                          PLAIN-TEXT DIGEST FORMATTER                       ║
# ║ Turns the merged, chronologically ordered events into the digest text.     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
from datetime import datetime
from typing import List, Sequence
from zoneinfo import ZoneInfo

# Local application imports
from gcal_digest.events.models import Event
from gcal_digest.events.merging import effective_instant
from utils.timezone_utils import pretty_date

DESCRIPTION_INDENT = " " * 8
UNKNOWN_TIME_LABEL = "Unknown time"

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FORMATTERS                                                                 ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- format_event_lines ---
# Formats one event as "[<label>] <title>", an optional indented description,
# and a trailing blank line.
# Args:
#     event: The event to format.
#     now: Reference moment for Today/Tomorrow labels.
#     tz: Display timezone.
# Returns: The event's block of text.
def format_event_lines(event: Event, now: datetime, tz: ZoneInfo) -> str:
    instant = effective_instant(event, tz)
    label = pretty_date(instant, now, tz) if instant is not None else UNKNOWN_TIME_LABEL
    lines: List[str] = [f"[{label}] {event.title}"]
    if event.description:
        lines.append(f"{DESCRIPTION_INDENT}{event.description}")
    return "\n".join(lines) + "\n\n"

# --- render_digest ---
# Concatenates every event block in order. No events means an empty digest.
def render_digest(events: Sequence[Event], now: datetime, tz: ZoneInfo) -> str:
    return "".join(format_event_lines(event, now, tz) for event in events)
