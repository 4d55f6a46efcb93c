"""Session pipeline: date ranges, billing rules, messages and the controller."""

from .billing import DEFAULT_RATE, RATE_TABLE, classify, classify_all
from .dates import DEFAULT_UTC_OFFSET, DateParseError, end_of_range, parse_timestamp, resolve, start_of_range
from .messages import (
    AuthFailed,
    AuthToken,
    Events,
    FetchFailed,
    MessageChannel,
    OauthUrl,
    SessionMessage,
    TimedOut,
)
from .session import SessionController, SessionState

__all__ = [
    "DEFAULT_RATE",
    "DEFAULT_UTC_OFFSET",
    "RATE_TABLE",
    "AuthFailed",
    "AuthToken",
    "DateParseError",
    "Events",
    "FetchFailed",
    "MessageChannel",
    "OauthUrl",
    "SessionController",
    "SessionMessage",
    "SessionState",
    "TimedOut",
    "classify",
    "classify_all",
    "end_of_range",
    "parse_timestamp",
    "resolve",
    "start_of_range",
]
