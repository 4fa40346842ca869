"""
Test suite for merging per-source events into chronological order.
"""
import random
from datetime import datetime

import pytest

from gcal_digest.events.merging import effective_instant, merge_events
from gcal_digest.events.models import Event
from utils.timezone_utils import MIN_INSTANT


def timed(title, start, source="a"):
    return Event(title=title, description=None, start_date=None, start_time=start, source_id=source)


def all_day(title, day, source="a"):
    return Event(title=title, description=None, start_date=day, start_time=None, source_id=source)


def test_all_day_event_anchors_to_local_midnight(tz):
    assert effective_instant(all_day("x", "2024-03-16"), tz) == datetime(2024, 3, 16, tzinfo=tz)


def test_merge_interleaves_sources_chronologically(tz):
    source_a = [timed("A1", "2024-03-14T12:00:00+03:00"), timed("A2", "2024-03-18T09:00:00+03:00")]
    source_b = [all_day("B1", "2024-03-15", "b"), timed("B2", "2024-03-14T08:00:00Z", "b")]
    merged = merge_events(source_a + source_b, tz)
    assert [e.title for e in merged] == ["B2", "A1", "B1", "A2"]


def test_all_day_sorts_before_timed_event_on_same_day(tz):
    merged = merge_events([timed("lunch", "2024-03-15T13:00:00+03:00"), all_day("holiday", "2024-03-15")], tz)
    assert [e.title for e in merged] == ["holiday", "lunch"]


def test_ties_keep_input_order(tz):
    events = [
        timed("first", "2024-03-14T15:00:00+03:00", "a"),
        timed("second", "2024-03-14T12:00:00Z", "b"),
        timed("third", "2024-03-14T15:00:00+03:00", "c"),
    ]
    assert [e.title for e in merge_events(events, tz)] == ["first", "second", "third"]


def test_no_deduplication_across_sources(tz):
    events = [timed("sync", "2024-03-14T12:00:00Z", "a"), timed("sync", "2024-03-14T12:00:00Z", "b")]
    merged = merge_events(events, tz)
    assert len(merged) == 2
    assert [e.source_id for e in merged] == ["a", "b"]


def test_merge_keeps_length_and_order_for_random_input(tz):
    rng = random.Random(7)
    sources = []
    for source in "abc":
        events = []
        for i in range(rng.randint(0, 12)):
            day = rng.randint(14, 28)
            if rng.random() < 0.3:
                events.append(all_day(f"{source}{i}", f"2024-03-{day:02d}", source))
            else:
                hour = rng.randint(0, 23)
                events.append(timed(f"{source}{i}", f"2024-03-{day:02d}T{hour:02d}:15:00+03:00", source))
        sources.append(events)
    flat = [e for events in sources for e in events]

    merged = merge_events(flat, tz)

    assert len(merged) == sum(len(events) for events in sources)
    instants = [effective_instant(e, tz) for e in merged]
    assert all(a <= b for a, b in zip(instants, instants[1:]))


def test_unparseable_start_is_dropped_by_default(tz):
    events = [timed("ok", "2024-03-14T12:00:00Z"), timed("broken", "yesterday-ish")]
    assert [e.title for e in merge_events(events, tz)] == ["ok"]


def test_unparseable_start_sorts_first_when_requested(tz):
    events = [timed("ok", "2024-03-14T12:00:00Z"), all_day("broken", "2024-02-30")]
    merged = merge_events(events, tz, invalid_policy="first")
    assert [e.title for e in merged] == ["broken", "ok"]
    assert effective_instant(merged[0], tz) is None
    assert MIN_INSTANT < datetime(1970, 1, 1, tzinfo=tz)


def test_unknown_policy_is_rejected(tz):
    with pytest.raises(ValueError):
        merge_events([], tz, invalid_policy="explode")


def test_event_requires_exactly_one_start():
    with pytest.raises(ValueError):
        Event(title="x", description=None, start_date=None, start_time=None, source_id="a")
    with pytest.raises(ValueError):
        Event(title="x", description=None, start_date="2024-03-14",
              start_time="2024-03-14T10:00:00Z", source_id="a")


def test_event_from_api_defaults():
    event = Event.from_api({"start": {"date": "2024-03-16"}, "description": ""}, "cal")
    assert event.title == "Untitled Event"
    assert event.description is None
    assert event.is_all_day
    assert event.source_id == "cal"
