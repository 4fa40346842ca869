"""
event_fetching.py: Query each configured Google Calendar for the lookout window.
"""
import http.client
from typing import Any, Dict, List, Sequence

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import Error as GoogleApiError

from utils.logging import logger
from .models import Event, FetchWindow

MAX_RESULTS_PER_PAGE = 2500

# Errors that count as "this source failed":
#   GoogleApiError       - HttpError and other client library errors
#   HTTPException        - IncompleteRead / BadStatusLine re-raised by httplib2
#   ValueError           - non-JSON response body (json.JSONDecodeError)
FETCH_ERRORS = (
    GoogleApiError,
    GoogleAuthError,
    httplib2.HttpLib2Error,
    http.client.HTTPException,
    OSError,
    ValueError,
)


def list_calendar_items(service, calendar_id: str, window: FetchWindow) -> List[Dict[str, Any]]:
    """All raw event items of one calendar inside the window, following pagination."""
    time_min, time_max = window.rfc3339()
    items: List[Dict[str, Any]] = []
    params = dict(
        calendarId=calendar_id,
        showDeleted=False,
        timeMin=time_min,
        timeMax=time_max,
        singleEvents=True,
        orderBy="startTime",
        maxResults=MAX_RESULTS_PER_PAGE,
    )
    while True:
        result = service.events().list(**params).execute()
        items.extend(result.get("items", []))
        page_token = result.get("nextPageToken")
        if not page_token:
            return items
        params["pageToken"] = page_token


def parse_items(items: Sequence[Dict[str, Any]], calendar_id: str) -> List[Event]:
    events = []
    for item in items:
        try:
            events.append(Event.from_api(item, calendar_id))
        except ValueError as e:
            logger.warning(f"Skipping event {item.get('id', '?')} from {calendar_id}: {e}")
    return events


# --- fetch_events ---
# Fetches events from every calendar in order. The first failing calendar
# stops the loop: its events and those of all later calendars are absent,
# events already fetched are kept. No retries.
# Args:
#     service: Google Calendar v3 service (googleapiclient resource).
#     calendar_ids: Calendars to query, in order.
#     window: [start, end) range of event start times.
# Returns: Events in source order, then server order.
def fetch_events(service, calendar_ids: Sequence[str], window: FetchWindow) -> List[Event]:
    events: List[Event] = []
    for calendar_id in calendar_ids:
        logger.debug(f"Fetching events for calendar {calendar_id} from {window.start} to {window.end}")
        try:
            items = list_calendar_items(service, calendar_id, window)
        except FETCH_ERRORS as e:
            logger.error(f"Error fetching events from calendar {calendar_id}, skipping remaining calendars: {e}")
            break
        parsed = parse_items(items, calendar_id)
        logger.info(f"Fetched {len(parsed)} events from calendar {calendar_id}")
        events.extend(parsed)
    return events
