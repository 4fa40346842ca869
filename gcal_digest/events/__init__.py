"""
events package: fetching, parsing and merging of calendar events,
re-exporting from submodules.
"""
from .models import Event, FetchWindow
from .merging import merge_events, effective_instant
from .event_fetching import fetch_events

__all__ = [
    'Event', 'FetchWindow',
    'merge_events', 'effective_instant',
    'fetch_events',
]
