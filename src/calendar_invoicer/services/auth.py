from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, InvalidStateError
from concurrent.futures import TimeoutError as FutureTimeoutError
from enum import Enum
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

from google_auth_oauthlib.flow import Flow

from ..config import ConfigurationError, GoogleSettings
from ..core.messages import AUTHORIZATION, AuthFailed, AuthToken, MessageChannel, OauthUrl, TimedOut

logger = logging.getLogger(__name__)


class AuthorizationError(RuntimeError):
    """Raised when the OAuth redirect carries an error instead of a code."""


class AuthState(str, Enum):
    IDLE = "idle"
    LISTENER_STARTING = "listener_starting"
    AWAITING_USER_AUTHORIZATION = "awaiting_user_authorization"
    TOKEN_ACQUIRED = "token_acquired"
    FAILED = "failed"
    CANCELLED = "cancelled"


class _CallbackServer(HTTPServer):
    def __init__(self, address: tuple[str, int], result: "Future[str]") -> None:
        super().__init__(address, _OAuthHandler)
        self.result = result

    def resolve(self, code: Optional[str], error: Optional[str]) -> None:
        try:
            if error:
                self.result.set_exception(AuthorizationError(error))
            else:
                self.result.set_result(code)
        except InvalidStateError:
            logger.debug("Ignoring repeated OAuth redirect")


class _OAuthHandler(BaseHTTPRequestHandler):
    server: _CallbackServer

    def do_GET(self):  # noqa: N802
        params = parse_qs(urlparse(self.path).query)
        code = (params.get("code") or [None])[0]
        error = (params.get("error") or [None])[0]
        if not code and not error:
            self.send_response(404)
            self.end_headers()
            return
        message = "Authentication complete. You may close this window." if not error else "Authentication failed."
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.end_headers()
        self.wfile.write(f"<html><body><h2>{message}</h2></body></html>".encode("utf-8"))
        self.server.resolve(code, error)

    def log_message(self, fmt: str, *args):
        logger.debug("OAuth callback: " + fmt, *args)


class OAuthCallbackListener:
    """Loopback HTTP server that resolves a one-shot future with the redirect code."""

    def __init__(self, host: str = "127.0.0.1") -> None:
        self.host = host
        self.result: "Future[str]" = Future()
        self._server: Optional[_CallbackServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> str:
        if self._server is None:
            raise RuntimeError("Listener has not been started.")
        host, port = self._server.server_address[:2]
        return f"{host}:{port}"

    def start(self) -> str:
        """Bind an ephemeral port and serve from a daemon thread; returns ``host:port``."""

        self._server = _CallbackServer((self.host, 0), self.result)
        self._thread = threading.Thread(
            target=self._server.serve_forever, name="oauth-callback", daemon=True
        )
        self._thread.start()
        return self.address

    def wait(self, timeout: Optional[float] = None) -> str:
        return self.result.result(timeout=timeout)

    def cancel(self) -> None:
        self.result.cancel()

    def shutdown(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._server = None


def build_flow(settings: GoogleSettings, redirect_uri: str) -> Flow:
    return Flow.from_client_config(
        settings.client_config(),
        scopes=list(settings.scopes),
        redirect_uri=redirect_uri,
    )


class AuthSessionWorker:
    """Runs the loopback OAuth flow and reports progress over the channel.

    Sends ``OauthUrl`` once the listener is bound and ``AuthToken`` once the
    redirect code has been exchanged. Failures replace the missing message
    with ``AuthFailed`` or ``TimedOut``.
    """

    def __init__(
        self,
        channel: MessageChannel,
        settings: GoogleSettings,
        *,
        timeout: float = 0.0,
        flow_factory: Callable[[GoogleSettings, str], Flow] = build_flow,
        listener_factory: Callable[[str], OAuthCallbackListener] = OAuthCallbackListener,
    ) -> None:
        if not settings.is_configured:
            raise ConfigurationError(
                f"Google OAuth client is not configured. Set {', '.join(settings.missing_env_vars)}."
            )
        self.channel = channel
        self.settings = settings
        self.timeout = timeout
        self.state = AuthState.IDLE
        self._flow_factory = flow_factory
        self._listener = listener_factory(settings.redirect_host)
        self._thread: Optional[threading.Thread] = None

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.run, name="auth-session", daemon=True)
        self._thread.start()
        return self._thread

    def cancel(self) -> None:
        self._listener.cancel()

    def run(self) -> None:
        self.state = AuthState.LISTENER_STARTING
        try:
            host = self._listener.start()
        except OSError as exc:
            logger.exception("Could not bind the OAuth callback listener")
            self._fail(f"Could not start the OAuth callback listener: {exc}")
            return

        try:
            self._authorize(host)
        except CancelledError:
            logger.info("Authorization cancelled")
            self.state = AuthState.CANCELLED
        except FutureTimeoutError:
            logger.warning("No OAuth redirect within %.0f seconds", self.timeout)
            self.state = AuthState.FAILED
            self.channel.send(TimedOut(AUTHORIZATION))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Authorization failed")
            self._fail(str(exc) or type(exc).__name__)
        finally:
            self._listener.shutdown()

    def _authorize(self, host: str) -> None:
        flow = self._flow_factory(self.settings, f"http://{host}/")
        url, _state = flow.authorization_url(access_type="offline", prompt="consent")
        self.state = AuthState.AWAITING_USER_AUTHORIZATION
        logger.info("OAuth URL ready, waiting for the redirect on %s", host)
        self.channel.send(OauthUrl(url))

        code = self._listener.wait(self.timeout or None)
        flow.fetch_token(code=code)
        token = flow.credentials.token
        if not token:
            raise AuthorizationError("Token exchange returned no access token.")
        self.state = AuthState.TOKEN_ACQUIRED
        logger.info("Access token received")
        self.channel.send(AuthToken(token))

    def _fail(self, reason: str) -> None:
        self.state = AuthState.FAILED
        self.channel.send(AuthFailed(reason))
