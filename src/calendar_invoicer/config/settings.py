from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from platformdirs import user_documents_dir

load_dotenv()

APP_NAME = "Calendar Invoicer"
APP_AUTHOR = "CalendarInvoicer"
CALENDAR_READONLY_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or empty."""


@dataclass(frozen=True)
class GoogleSettings:
    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_host: str
    scopes: Tuple[str, ...]

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.client_id:
            missing.append("GOOGLE_CLIENT_ID")
        if not self.client_secret:
            missing.append("GOOGLE_CLIENT_SECRET")
        return missing

    def client_config(self) -> Dict[str, Any]:
        """Installed-app client config in the shape google-auth-oauthlib expects."""

        if not self.is_configured:
            raise ConfigurationError(
                f"Google OAuth client is not configured. Set {', '.join(self.missing_env_vars)}."
            )
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [f"http://{self.redirect_host}"],
            }
        }


@dataclass(frozen=True)
class SessionSettings:
    utc_offset: str
    auth_timeout: float
    fetch_timeout: float


@dataclass(frozen=True)
class ExportSettings:
    output_dir: Path


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    tick_interval_ms: int


@dataclass(frozen=True)
class AppSettings:
    google: GoogleSettings
    session: SessionSettings
    export: ExportSettings
    ui: UiSettings


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _scopes_from_env(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    scopes = tuple(scope.strip() for scope in raw.split(",") if scope.strip())
    return scopes or (CALENDAR_READONLY_SCOPE,)


def load_settings() -> AppSettings:
    """Build settings from the current environment without caching."""

    google = GoogleSettings(
        client_id=os.getenv("GOOGLE_CLIENT_ID"),
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET"),
        redirect_host=os.getenv("GOOGLE_REDIRECT_HOST", "127.0.0.1"),
        scopes=_scopes_from_env("GOOGLE_CALENDAR_SCOPES"),
    )

    session = SessionSettings(
        utc_offset=os.getenv("INVOICER_UTC_OFFSET", "-05:00"),
        auth_timeout=_float_from_env("INVOICER_AUTH_TIMEOUT_SECONDS", 0.0),
        fetch_timeout=_float_from_env("INVOICER_FETCH_TIMEOUT_SECONDS", 60.0),
    )

    export = ExportSettings(
        output_dir=Path(os.getenv("INVOICER_EXPORT_DIR") or user_documents_dir()),
    )

    ui = UiSettings(
        app_name=os.getenv("INVOICER_APP_NAME", "Calendar to CSV"),
        tick_interval_ms=_int_from_env("INVOICER_TICK_INTERVAL_MS", 100),
    )

    return AppSettings(google=google, session=session, export=export, ui=ui)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()
