from __future__ import annotations

import argparse
import logging
import time
import webbrowser
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .bootstrap import configure_logging
from .config import ConfigurationError, get_settings
from .core import MessageChannel, SessionController
from .domain import Month
from .services import ServiceContext, export_invoice

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1


def _month(value: str) -> Month:
    try:
        return Month.from_value(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calendar Invoicer command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("gui", help="Launch the desktop GUI.")

    export_parser = subparsers.add_parser("export", help="Sign in, fetch one month and write the invoice CSV.")
    export_parser.add_argument("--year", type=int, default=date.today().year)
    export_parser.add_argument("--month", type=_month, required=True, help="Month number or name.")
    export_parser.add_argument("--output-dir", type=Path, default=None)
    export_parser.add_argument("--open-browser", action="store_true", help="Open the sign-in URL automatically.")

    return parser


def run_export(controller: SessionController, args: argparse.Namespace, output_dir: Path) -> int:
    """Drive the session controller headlessly until the month is exported or something fails."""

    controller.start()
    controller.select_month(args.year, args.month)
    announced = False
    while True:
        if controller.tick() is None:
            time.sleep(POLL_INTERVAL)
            continue
        state = controller.state
        if state.auth_failed:
            print(controller.status_text())
            return 1
        if state.oauth_url and not announced:
            announced = True
            print(f"Sign in to continue: {state.oauth_url}")
            if args.open_browser:
                webbrowser.open(state.oauth_url)
        if state.waiting_for_events:
            continue
        if state.last_error:
            print(controller.status_text())
            return 1
        if state.loaded_events:
            path = export_invoice(state.invoice_lines, args.year, args.month, output_dir)
            print(f"Wrote {len(state.invoice_lines)} invoice lines to {path}")
            return 0
        if state.auth_key:
            controller.request_fetch()


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    logger.info("Calendar Invoicer CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "gui":
        from .ui.app import run_gui

        run_gui()
        return 0
    if args.command == "export":
        settings = get_settings()
        controller = SessionController(MessageChannel(), ServiceContext(settings))
        try:
            return run_export(controller, args, args.output_dir or settings.export.output_dir)
        except ConfigurationError as exc:
            parser.exit(1, f"{exc}\n")
        finally:
            controller.shutdown()
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
