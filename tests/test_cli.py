import argparse
import csv

import pytest

from calendar_invoicer.cli import build_parser, run_export
from calendar_invoicer.core.messages import AuthFailed, AuthToken, Events, FetchFailed, MessageChannel, OauthUrl
from calendar_invoicer.core.session import SessionController
from calendar_invoicer.domain import Month


class ScriptedLauncher:
    """Answers worker launches by pushing canned messages onto the channel."""

    def __init__(self, auth_messages, fetch_messages) -> None:
        self.auth_messages = auth_messages
        self.fetch_messages = fetch_messages
        self.fetches = []

    def start_auth(self, channel):
        for message in self.auth_messages:
            channel.send(message)
        return self

    def start_fetch(self, channel, token, year, month):
        self.fetches.append((token, year, month))
        for message in self.fetch_messages:
            channel.send(message)

    def cancel(self) -> None:
        pass


def _args(**overrides):
    values = {"year": 2024, "month": Month.MARCH, "output_dir": None, "open_browser": False}
    values.update(overrides)
    return argparse.Namespace(**values)


def test_parser_accepts_month_names_and_numbers() -> None:
    parser = build_parser()

    assert parser.parse_args(["export", "--month", "march"]).month is Month.MARCH
    assert parser.parse_args(["export", "--month", "12", "--year", "2023"]).month is Month.DECEMBER
    with pytest.raises(SystemExit):
        parser.parse_args(["export", "--month", "Smarch"])


def test_export_runs_session_to_csv(tmp_path, billable_event, capsys) -> None:
    launcher = ScriptedLauncher(
        [OauthUrl("https://auth.example/u"), AuthToken("t")],
        [Events((billable_event,))],
    )
    controller = SessionController(MessageChannel(), launcher)

    code = run_export(controller, _args(), tmp_path)

    assert code == 0
    assert launcher.fetches == [("t", 2024, Month.MARCH)]
    out = capsys.readouterr().out
    assert "Sign in to continue: https://auth.example/u" in out
    with (tmp_path / "2024-03-invoice.csv").open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[1] == ["2024-03-01", "Acme", "ProjectX", "8", "Sprint planning", "50", "400"]


def test_export_fails_when_fetch_fails(tmp_path, capsys) -> None:
    launcher = ScriptedLauncher([OauthUrl("u"), AuthToken("t")], [FetchFailed("network down")])
    controller = SessionController(MessageChannel(), launcher)

    assert run_export(controller, _args(), tmp_path) == 1
    assert "Could not load events: network down" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_export_fails_when_sign_in_fails(tmp_path, capsys) -> None:
    launcher = ScriptedLauncher([AuthFailed("listener could not bind")], [])
    controller = SessionController(MessageChannel(), launcher)

    assert run_export(controller, _args(), tmp_path) == 1
    assert launcher.fetches == []
    assert "Sign-in failed: listener could not bind" in capsys.readouterr().out
