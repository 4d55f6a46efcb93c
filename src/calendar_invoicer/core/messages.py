"""Messages sent from background workers to the session controller."""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..domain import RawEvent

logger = logging.getLogger(__name__)

AUTHORIZATION = "authorization"
FETCH = "fetch"


class SessionMessage:
    """Base class of every message the controller can receive."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class OauthUrl(SessionMessage):
    url: str


@dataclass(frozen=True, slots=True)
class AuthToken(SessionMessage):
    token: str


@dataclass(frozen=True, slots=True)
class Events(SessionMessage):
    events: Tuple[RawEvent, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class AuthFailed(SessionMessage):
    reason: str


@dataclass(frozen=True, slots=True)
class FetchFailed(SessionMessage):
    reason: str


@dataclass(frozen=True, slots=True)
class TimedOut(SessionMessage):
    operation: str


class MessageChannel:
    """Unbounded, non-blocking hand-off from worker threads to the controller."""

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[SessionMessage]" = queue.SimpleQueue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: SessionMessage) -> bool:
        if self._closed:
            logger.warning("Dropping %s: receiver is gone", type(message).__name__)
            return False
        self._queue.put(message)
        return True

    def try_receive(self) -> Optional[SessionMessage]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def receive(self, timeout: Optional[float] = None) -> Optional[SessionMessage]:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed = True
