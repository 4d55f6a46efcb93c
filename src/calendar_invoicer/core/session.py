"""UI-facing session state, updated one channel message per tick."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from ..domain import InvoiceLine, Month
from .billing import classify_all
from .messages import (
    AUTHORIZATION,
    AuthFailed,
    AuthToken,
    Events,
    FetchFailed,
    MessageChannel,
    OauthUrl,
    SessionMessage,
    TimedOut,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    oauth_url: str = ""
    auth_key: str = ""
    year: Optional[int] = None
    month: Optional[Month] = None
    waiting_for_events: bool = False
    loaded_events: bool = False
    loaded_period: Optional[Tuple[int, Month]] = None
    invoice_lines: List[InvoiceLine] = field(default_factory=list)
    auth_failed: bool = False
    last_error: str = ""


class SessionController:
    """Single-threaded owner of session state.

    ``launcher`` starts the background workers. It needs
    ``start_auth(channel)`` returning a handle with ``cancel()``, and
    ``start_fetch(channel, token, year, month)``. Workers only ever talk back
    through ``channel``.
    """

    def __init__(self, channel: MessageChannel, launcher: Any) -> None:
        self.channel = channel
        self.launcher = launcher
        self.state = SessionState()
        self._auth_handle: Any = None
        self._pending_period: Optional[Tuple[int, Month]] = None

    # ------------------------------------------------------------------ lifecycle

    def start(self) -> None:
        if self._auth_handle is not None:
            return
        self._auth_handle = self.launcher.start_auth(self.channel)

    def shutdown(self) -> None:
        if self._auth_handle is not None:
            self._auth_handle.cancel()
        self.channel.close()

    # ------------------------------------------------------------------ message handling

    def tick(self) -> Optional[SessionMessage]:
        message = self.channel.try_receive()
        if message is not None:
            self.apply(message)
        return message

    def apply(self, message: SessionMessage) -> None:
        state = self.state
        if isinstance(message, OauthUrl):
            state.oauth_url = message.url
        elif isinstance(message, AuthToken):
            state.auth_key = message.token
        elif isinstance(message, Events):
            state.invoice_lines = classify_all(message.events)
            state.loaded_period = self._pending_period
            state.loaded_events = self._pending_period == self.selected_period
            state.waiting_for_events = False
            state.last_error = ""
            logger.info("%d of %d events are billable", len(state.invoice_lines), len(message.events))
        elif isinstance(message, FetchFailed):
            self._fetch_failed(message.reason)
        elif isinstance(message, AuthFailed):
            self._auth_failed(message.reason)
        elif isinstance(message, TimedOut):
            if message.operation == AUTHORIZATION:
                self._auth_failed("Timed out waiting for sign-in.")
            else:
                self._fetch_failed("Timed out waiting for the calendar service.")
        else:
            raise TypeError(f"Unhandled session message: {message!r}")

    def _fetch_failed(self, reason: str) -> None:
        logger.warning("Fetch failed: %s", reason)
        self.state.waiting_for_events = False
        self.state.last_error = reason

    def _auth_failed(self, reason: str) -> None:
        logger.warning("Sign-in failed: %s", reason)
        self.state.auth_failed = True
        self.state.last_error = reason

    # ------------------------------------------------------------------ user actions

    @property
    def selected_period(self) -> Optional[Tuple[int, Month]]:
        if self.state.year is None or self.state.month is None:
            return None
        return self.state.year, self.state.month

    def select_month(self, year: int, month: Union[Month, int, str]) -> None:
        period = (int(year), Month.from_value(month))
        if period == self.selected_period:
            return
        self.state.year, self.state.month = period
        self.state.loaded_events = period == self.state.loaded_period

    @property
    def can_fetch(self) -> bool:
        return bool(self.state.auth_key) and self.selected_period is not None and not self.state.waiting_for_events

    def request_fetch(self) -> bool:
        if not self.can_fetch:
            return False
        year, month = self.selected_period
        self.state.waiting_for_events = True
        self.state.last_error = ""
        self._pending_period = (year, month)
        logger.info("Requesting events for %s %s", month.label, year)
        self.launcher.start_fetch(self.channel, self.state.auth_key, year, month)
        return True

    # ------------------------------------------------------------------ presentation

    def status_text(self) -> str:
        state = self.state
        if state.auth_failed:
            return f"Sign-in failed: {state.last_error}"
        if not state.auth_key:
            if not state.oauth_url:
                return "Waiting for oauth url to be generated..."
            return "Click here to log in:"
        if state.waiting_for_events:
            return "Loading..."
        if state.last_error:
            return f"Could not load events: {state.last_error}"
        if state.month is None:
            return "Select a month to get started"
        if state.loaded_events:
            return f"{len(state.invoice_lines)} invoice lines for {state.month.label} {state.year}"
        return f"Load events for {state.month.label} {state.year}"
