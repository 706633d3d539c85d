"""Application entry point for the redscope bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.http_fetcher import HttpxPageFetcher
from adapters.telegram_mapper import build_context
from adapters.telegram_replier import TelegramReplier
from client import bot_token, build_client
from core.models import ResolveFailed
from core.processor import ReferenceProcessor
from core.replies import format_failure, format_resolved
from core.resolver import resolve_and_verify

NAME = "REDSCOPE"
FONT = "tarty-1"

# Text after the reference is ignored: "/redmineinfo #45 please".
QUERY_PATTERN = r"(?s)^/redmineinfo(?:@\w+)?(?:\s+(\S+).*)?\s*$"
HELP_PATTERN = r"^/redminehelp(?:@\w+)?(?:\s+(\S+))?\s*$"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict, extra: Optional[list[str]] = None) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = [value for value in (extra or []) if value]
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.load_logging_config()
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    # The tracker password ends up in debug output of the HTTP layer.
    tracker_password = settings.load_tracker_config().http.basic_auth_password
    secrets = _collect_redaction_values(config, [tracker_password])
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/redscope.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting redscope")

    # Validate config.json up front; afterwards it is re-read per message.
    config = settings.load_tracker_config()
    logger.info("%s channel mapping(s) are loaded", len(config.channel_map))

    client = build_client()
    processor = ReferenceProcessor(
        fetcher=HttpxPageFetcher(),
        replier=TelegramReplier(client),
        config_provider=settings.load_tracker_config,
    )

    # The passive handler sees every message, including commands; the
    # processor skips anything addressed to the bot.
    @client.on(events.NewMessage(incoming=True))
    async def on_message(event) -> None:
        try:
            context = await build_context(event.message)
            await processor.handle(context)
        except Exception:
            logger.exception("Error while processing message")

    @client.on(events.NewMessage(incoming=True, pattern=QUERY_PATTERN))
    async def on_query(event) -> None:
        try:
            context = await build_context(event.message)
            await processor.handle_query(context, event.pattern_match.group(1))
        except Exception:
            logger.exception("Error while handling redmineinfo")

    @client.on(events.NewMessage(incoming=True, pattern=HELP_PATTERN))
    async def on_help(event) -> None:
        try:
            context = await build_context(event.message)
            await processor.handle_help(context, event.pattern_match.group(1))
        except Exception:
            logger.exception("Error while handling redminehelp")

    # Explicit lifecycle management makes start/shutdown behavior obvious.
    client.start(bot_token=bot_token())
    logger.info("Client connected. Listening for incoming messages...")
    client.run_until_disconnected()


def _setup() -> None:
    _print_banner()
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()


def _lookup(channel: str, ref: str) -> int:
    """Resolve one reference from the shell to check the configuration."""

    _configure_logging()
    outcome = resolve_and_verify(ref, channel, settings.load_tracker_config(), HttpxPageFetcher())
    if isinstance(outcome, ResolveFailed):
        print(format_failure("you", outcome.message))
        return 1
    print(format_resolved("you", ref, outcome.url, outcome.title))
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="redscope")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("config", help="Launch the config TUI")
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Resolve one reference for a channel and print the reply.",
    )
    lookup_parser.add_argument("channel", help="Channel key, e.g. @puppet_dev or chat_id:-100123")
    lookup_parser.add_argument("ref", help="Reference such as '#45', 'r10' or 'wiki:FooBar'")

    args = parser.parse_args(argv)
    if args.command in {"setup", "config"}:
        _setup()
        return
    if args.command == "lookup":
        raise SystemExit(_lookup(args.channel, args.ref))
    _run()


if __name__ == "__main__":
    main()
