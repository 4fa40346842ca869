"""
Shared test fixtures: a fixed clock and an in-memory Google Calendar service.
"""
import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

MOSCOW = ZoneInfo("Europe/Moscow")


class _FakeListRequest:
    def __init__(self, service, params):
        self.service = service
        self.params = params

    def execute(self):
        calendar_id = self.params["calendarId"]
        self.service.executed.append(calendar_id)
        response = self.service.responses[calendar_id]
        if isinstance(response, Exception):
            raise response
        token = self.params.get("pageToken")
        index = int(token.split("-")[1]) if token else 0
        page = {"items": response[index]}
        if index + 1 < len(response):
            page["nextPageToken"] = f"page-{index + 1}"
        return page


class FakeCalendarService:
    """Mimics service.events().list(**params).execute().

    responses maps a calendar id to either a list of pages (each a list of
    raw event items) or an exception to raise.
    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.executed = []

    def events(self):
        return self

    def list(self, **params):
        self.calls.append(params)
        return _FakeListRequest(self, params)


def timed_item(summary, start, description=None):
    item = {"summary": summary, "start": {"dateTime": start}}
    if description:
        item["description"] = description
    return item


def all_day_item(summary, day):
    return {"summary": summary, "start": {"date": day}}


@pytest.fixture
def tz():
    return MOSCOW


@pytest.fixture
def now():
    # Thursday
    return datetime(2024, 3, 14, 10, 0, tzinfo=MOSCOW)
