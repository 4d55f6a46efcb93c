import urllib.error
import urllib.request
from types import SimpleNamespace
from urllib.parse import quote

import pytest

from calendar_invoicer.config import ConfigurationError, GoogleSettings
from calendar_invoicer.core.messages import AUTHORIZATION, AuthFailed, AuthToken, MessageChannel, OauthUrl, TimedOut
from calendar_invoicer.services.auth import AuthSessionWorker, AuthState, OAuthCallbackListener, build_flow


class FakeFlow:
    def __init__(self, redirect_uri: str) -> None:
        self.redirect_uri = redirect_uri
        self.codes = []
        self.credentials = SimpleNamespace(token=None)

    def authorization_url(self, **kwargs):
        return f"https://accounts.example/auth?redirect_uri={quote(self.redirect_uri, safe='')}", "state"

    def fetch_token(self, code: str) -> None:
        self.codes.append(code)
        self.credentials.token = f"token-for-{code}"


class BrokenListener(OAuthCallbackListener):
    def start(self) -> str:
        raise OSError("Address already in use")


def _worker(google_settings, **kwargs):
    flows = []

    def factory(settings, redirect_uri):
        flows.append(FakeFlow(redirect_uri))
        return flows[-1]

    channel = MessageChannel()
    worker = AuthSessionWorker(channel, google_settings, flow_factory=factory, **kwargs)
    return worker, channel, flows


def _redirect(url: str) -> None:
    with urllib.request.urlopen(url, timeout=5) as response:
        assert response.status == 200


def test_worker_emits_url_then_token(google_settings) -> None:
    worker, channel, flows = _worker(google_settings)
    thread = worker.start()

    first = channel.receive(timeout=5)
    assert isinstance(first, OauthUrl)
    assert worker.state is AuthState.AWAITING_USER_AUTHORIZATION
    redirect_uri = flows[0].redirect_uri
    assert redirect_uri.startswith("http://127.0.0.1:")
    assert quote(redirect_uri, safe="") in first.url

    _redirect(f"{redirect_uri}?code=abc&scope=calendar.readonly")
    thread.join(timeout=5)

    assert channel.receive(timeout=5) == AuthToken("token-for-abc")
    assert flows[0].codes == ["abc"]
    assert worker.state is AuthState.TOKEN_ACQUIRED
    assert channel.try_receive() is None


def test_redirect_error_becomes_auth_failed(google_settings) -> None:
    worker, channel, flows = _worker(google_settings)
    thread = worker.start()
    assert isinstance(channel.receive(timeout=5), OauthUrl)

    _redirect(f"{flows[0].redirect_uri}?error=access_denied")
    thread.join(timeout=5)

    assert channel.receive(timeout=5) == AuthFailed("access_denied")
    assert worker.state is AuthState.FAILED


def test_requests_without_code_are_ignored(google_settings) -> None:
    worker, channel, flows = _worker(google_settings)
    thread = worker.start()
    assert isinstance(channel.receive(timeout=5), OauthUrl)

    with pytest.raises(urllib.error.HTTPError):
        urllib.request.urlopen(f"{flows[0].redirect_uri}favicon.ico", timeout=5)
    assert worker.state is AuthState.AWAITING_USER_AUTHORIZATION

    _redirect(f"{flows[0].redirect_uri}?code=xyz")
    thread.join(timeout=5)
    assert channel.receive(timeout=5) == AuthToken("token-for-xyz")


def test_no_redirect_within_timeout(google_settings) -> None:
    worker, channel, _ = _worker(google_settings, timeout=0.2)

    worker.run()

    assert isinstance(channel.try_receive(), OauthUrl)
    assert channel.try_receive() == TimedOut(AUTHORIZATION)
    assert worker.state is AuthState.FAILED


def test_cancel_stops_waiting_silently(google_settings) -> None:
    worker, channel, _ = _worker(google_settings)
    thread = worker.start()
    assert isinstance(channel.receive(timeout=5), OauthUrl)

    worker.cancel()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert worker.state is AuthState.CANCELLED
    assert channel.try_receive() is None


def test_listener_bind_failure_reports_auth_failed(google_settings) -> None:
    worker, channel, flows = _worker(google_settings, listener_factory=BrokenListener)

    worker.run()

    message = channel.try_receive()
    assert isinstance(message, AuthFailed)
    assert "Address already in use" in message.reason
    assert flows == []
    assert channel.try_receive() is None


def test_worker_refuses_empty_client_credentials() -> None:
    settings = GoogleSettings(client_id="", client_secret=None, redirect_host="127.0.0.1", scopes=("scope",))

    with pytest.raises(ConfigurationError, match="GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET"):
        AuthSessionWorker(MessageChannel(), settings)


def test_build_flow_targets_redirect_uri(google_settings) -> None:
    flow = build_flow(google_settings, "http://127.0.0.1:5000/")

    url, _state = flow.authorization_url(access_type="offline", prompt="consent")

    assert url.startswith("https://accounts.google.com/o/oauth2/auth?")
    assert "client_id=client-id.apps.googleusercontent.com" in url
    assert "redirect_uri=http%3A%2F%2F127.0.0.1%3A5000%2F" in url
    assert "calendar.readonly" in url
