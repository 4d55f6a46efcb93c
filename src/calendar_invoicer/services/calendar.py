from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import SessionSettings
from ..core.dates import resolve
from ..core.messages import FETCH, Events, FetchFailed, MessageChannel, TimedOut
from ..domain import DateRange, Month, RawEvent

logger = logging.getLogger(__name__)


class NoCalendarError(LookupError):
    """Raised when the account exposes no calendars."""


def build_calendar_service(token: str, *, timeout: Optional[float] = None) -> Any:
    """Google Calendar v3 client authorised with a bare bearer token."""

    http = AuthorizedHttp(Credentials(token=token), http=httplib2.Http(timeout=timeout or None))
    return build("calendar", "v3", http=http, cache_discovery=False)


def _collect(method: Callable[..., Any], **params: Any) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    page_token: Optional[str] = None
    while True:
        if page_token:
            params["pageToken"] = page_token
        response = method(**params).execute()
        items.extend(response.get("items", []))
        page_token = response.get("nextPageToken")
        if not page_token:
            return items


def list_calendars(service: Any) -> List[Dict[str, Any]]:
    return _collect(service.calendarList().list)


def list_events(service: Any, calendar_id: str, date_range: DateRange) -> List[RawEvent]:
    # The range ends at midnight on the last day; extend to cover that whole day.
    time_max = date_range.end + timedelta(days=1)
    records = _collect(
        service.events().list,
        calendarId=calendar_id,
        timeMin=date_range.start.isoformat(),
        timeMax=time_max.isoformat(),
        singleEvents=True,
        orderBy="startTime",
    )
    return [RawEvent.from_api(record) for record in records]


class EventFetchWorker:
    """Fetches one month of events from the first calendar and reports over the channel."""

    def __init__(
        self,
        channel: MessageChannel,
        token: str,
        year: int,
        month: Month,
        settings: SessionSettings,
        *,
        service_factory: Callable[..., Any] = build_calendar_service,
    ) -> None:
        self.channel = channel
        self.token = token
        self.year = year
        self.month = Month.from_value(month)
        self.settings = settings
        self._service_factory = service_factory
        self._thread: Optional[threading.Thread] = None

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(
            target=self.run, name=f"fetch-{self.year}-{self.month.code}", daemon=True
        )
        self._thread.start()
        return self._thread

    def fetch(self) -> List[RawEvent]:
        date_range = resolve(self.year, self.month, utc_offset=self.settings.utc_offset)
        service = self._service_factory(self.token, timeout=self.settings.fetch_timeout)
        calendars = list_calendars(service)
        if not calendars:
            raise NoCalendarError("No calendars available for this account.")
        calendar = calendars[0]
        logger.info(
            "Fetching events for %s %s from calendar %s",
            self.month.label,
            self.year,
            calendar.get("summary") or calendar.get("id"),
        )
        return list_events(service, calendar["id"], date_range)

    def run(self) -> None:
        try:
            events = self.fetch()
        except TimeoutError:
            logger.warning("Timed out fetching events for %s-%s", self.year, self.month.code)
            self.channel.send(TimedOut(FETCH))
        except HttpError as exc:
            logger.exception("Calendar API rejected the request")
            self.channel.send(FetchFailed(f"Calendar API error {exc.resp.status}: {exc.reason}"))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Fetching events failed")
            self.channel.send(FetchFailed(str(exc) or type(exc).__name__))
        else:
            logger.info("Received %d events", len(events))
            self.channel.send(Events(tuple(events)))
