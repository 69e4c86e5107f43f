from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .commands import describe as cmd_describe
from .commands import listing as cmd_listing
from .commands import lookup as cmd_lookup
from .commands import state as cmd_state
from .config import Settings, find_config
from .errors import MaskedFastmailError
from .models import AliasState
from .providers import FastmailClient

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

USAGE_EXAMPLES = """\
examples:
  # Create or get alias for a website:
  masked-fastmail example.com

  # Enable an existing alias:
  masked-fastmail --enable user.1234@fastmail.com

requires FASTMAIL_ACCOUNT_ID and FASTMAIL_API_KEY environment variables to be set.
"""


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color or not sys.stderr.isatty():
            return message
        return f"{color}{message}{C_RESET}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="masked-fastmail",
        description="Manage Fastmail masked email aliases",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("identifier", nargs="?", help="Domain/URL, or alias email for state updates")
    parser.add_argument(
        "description",
        nargs="?",
        help="Description for a newly created alias (optional)",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Show version information")
    parser.add_argument("--config", type=Path, help="Path to an optional config YAML")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log raw API requests and responses (token redacted)",
    )
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("-e", "--enable", action="store_true", help="Enable alias")
    actions.add_argument("-d", "--disable", action="store_true", help="Disable alias (send to trash)")
    actions.add_argument("--delete", action="store_true", help="Delete alias (bounce messages)")
    actions.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List all aliases for a domain without creating new ones",
    )
    actions.add_argument(
        "--set-description",
        metavar="TEXT",
        default=None,
        help="Update the description for an alias",
    )
    return parser


def configure_logging(level_name: str, debug: bool) -> None:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    if debug:
        logging.getLogger("masked_fastmail.providers").setLevel(logging.DEBUG)
        root_logger.setLevel(min(log_level, logging.DEBUG))


def create_client(config_path: Optional[Path]) -> FastmailClient:
    settings = Settings.from_env(path=find_config(config_path))
    return FastmailClient(settings.provider)


def _target_state(args: argparse.Namespace) -> Optional[AliasState]:
    if args.enable:
        return AliasState.ENABLED
    if args.disable:
        return AliasState.DISABLED
    if args.delete:
        return AliasState.DELETED
    return None


def run(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"Version:\t{__version__}")
        return 0

    configure_logging(args.log_level, args.debug)

    if not args.identifier:
        parser.error("specify a domain/alias, optionally followed by a description")

    new_state = _target_state(args)
    set_description = args.set_description is not None
    requires_single_arg = new_state is not None or args.list or set_description
    if requires_single_arg and args.description is not None:
        parser.error("this operation accepts exactly one identifier (alias or domain)")

    client = create_client(args.config)

    if set_description:
        cmd_describe.run(client, args.identifier, args.set_description)
    elif new_state is not None:
        cmd_state.run(client, args.identifier, new_state)
    elif args.list:
        cmd_listing.run(client, args.identifier)
    else:
        cmd_lookup.run(client, args.identifier, args.description)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        code = run(argv)
    except MaskedFastmailError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    raise SystemExit(code)


if __name__ == "__main__":  # pragma: no cover
    main()
