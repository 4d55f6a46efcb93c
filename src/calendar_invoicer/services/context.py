from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..core.messages import MessageChannel
from ..domain import Month
from .auth import AuthSessionWorker
from .calendar import EventFetchWorker


@dataclass(slots=True)
class ServiceContext:
    """Starts background workers with the shared application settings."""

    settings: AppSettings = field(default_factory=get_settings)

    def start_auth(self, channel: MessageChannel) -> AuthSessionWorker:
        worker = AuthSessionWorker(
            channel,
            self.settings.google,
            timeout=self.settings.session.auth_timeout,
        )
        worker.start()
        return worker

    def start_fetch(self, channel: MessageChannel, token: str, year: int, month: Month) -> EventFetchWorker:
        worker = EventFetchWorker(channel, token, year, month, self.settings.session)
        worker.start()
        return worker
