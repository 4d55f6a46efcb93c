"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Dict, List, Optional

import pytest

from calendar_invoicer.config import GoogleSettings, SessionSettings
from calendar_invoicer.domain import RawEvent


class FakeRequest:
    def __init__(self, response: Dict[str, Any]) -> None:
        self.response = response

    def execute(self) -> Dict[str, Any]:
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeCollection:
    """Stands in for ``service.calendarList()`` / ``service.events()``."""

    def __init__(self, pages: List[Any]) -> None:
        self.pages = list(pages)
        self.calls: List[Dict[str, Any]] = []

    def list(self, **params: Any) -> FakeRequest:
        self.calls.append(dict(params))
        return FakeRequest(self.pages.pop(0))


class FakeCalendarService:
    def __init__(self, calendars: List[Any], events: Optional[List[Any]] = None) -> None:
        self.calendar_list = FakeCollection(calendars)
        self.event_list = FakeCollection(events or [])

    def calendarList(self) -> FakeCollection:  # noqa: N802
        return self.calendar_list

    def events(self) -> FakeCollection:
        return self.event_list


@pytest.fixture
def google_settings() -> GoogleSettings:
    return GoogleSettings(
        client_id="client-id.apps.googleusercontent.com",
        client_secret="client-secret",
        redirect_host="127.0.0.1",
        scopes=("https://www.googleapis.com/auth/calendar.readonly",),
    )


@pytest.fixture
def session_settings() -> SessionSettings:
    return SessionSettings(utc_offset="-05:00", auth_timeout=0.0, fetch_timeout=5.0)


@pytest.fixture
def billable_event() -> RawEvent:
    return RawEvent(
        summary="Acme-ProjectX",
        description="Sprint planning",
        start="2024-03-01T09:00:00-05:00",
        end="2024-03-01T17:00:00-05:00",
        color_id="1",
    )
