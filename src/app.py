"""Application entry point for the chatfilter CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Iterable, List, Optional, Sequence

from art import tprint
from rich.console import Console
from rich.table import Table
from rich.text import Text

import settings
from adapters.static_store import StaticConfigStore
from core.matcher import compile_matcher, try_match
from core.models import REPLACE, FilterResult
from core.processor import ChatFilter

NAME = "CHATFILTER"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _log_file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/chatfilter.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging() -> None:
    """Install console and/or rotating-file handlers from the logging section.

    Nothing is installed unless ``logging.enabled`` is true. Console output
    goes to stderr so JSON verdicts on stdout stay machine-readable.
    """

    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_log_file_handler(file_cfg))
    if not handlers:
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def build_store() -> StaticConfigStore:
    """Build the configuration store from the loaded config.json."""

    return StaticConfigStore(settings.FILTER_SETTINGS, settings.RULES_CONFIG)


def verdict_code(result: FilterResult) -> str:
    """Map a result to the code a chat-send endpoint would respond with."""

    if result.blocked:
        return "MESSAGE_BLOCKED"
    if not result.text.strip():
        return "EMPTY_AFTER_FILTER"
    if result.flagged:
        return "FLAGGED"
    return "OK"


async def _filter_all(chat_filter: ChatFilter, texts: Iterable[str]) -> List[FilterResult]:
    # Messages are independent, so they are filtered concurrently.
    return list(await asyncio.gather(*(chat_filter.apply_filter(text) for text in texts)))


def _check(texts: Sequence[str], console: Console) -> int:
    store = build_store()
    results = asyncio.run(_filter_all(ChatFilter(store, store), texts))
    for result in results:
        console.print_json(data=result.as_dict())
    return 1 if any(result.blocked for result in results) else 0


def _scan(console: Console) -> int:
    if sys.stdin.isatty():
        raise RuntimeError("scan reads messages from stdin; pipe text into it")

    texts = [line.rstrip("\n") for line in sys.stdin]
    store = build_store()
    results = asyncio.run(_filter_all(ChatFilter(store, store), texts))

    table = Table(title="Chat filter verdicts")
    table.add_column("#", justify="right")
    table.add_column("verdict")
    table.add_column("text")
    for index, result in enumerate(results, start=1):
        table.add_row(str(index), verdict_code(result), Text(result.text))
    console.print(table)

    blocked = sum(1 for result in results if result.blocked)
    LOGGER.info("Scan complete: messages=%s, blocked=%s", len(results), blocked)
    return 1 if blocked else 0


def _rules(console: Console, test_text: Optional[str]) -> int:
    store = build_store()
    rules = asyncio.run(store.get_active_rules())
    LOGGER.info("%s active rules are loaded", len(rules))

    table = Table(title="Active moderation rules")
    table.add_column("#", justify="right")
    table.add_column("action")
    table.add_column("pattern")
    table.add_column("replacement")
    table.add_column("mode")
    if test_text is not None:
        table.add_column("matched")

    for index, rule in enumerate(rules, start=1):
        matcher = compile_matcher(rule.pattern)
        row = [
            str(index),
            rule.action,
            Text(rule.pattern),
            Text(rule.replacement if rule.action == REPLACE else ""),
            matcher.mode if matcher else "skipped",
        ]
        if test_text is not None:
            row.append("yes" if try_match(rule, test_text).matched else "no")
        table.add_row(*row)
    console.print(table)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="chatfilter")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Filter messages given as arguments")
    check_parser.add_argument("texts", nargs="+", metavar="TEXT")
    subparsers.add_parser("scan", help="Filter one message per stdin line")
    rules_parser = subparsers.add_parser("rules", help="List the active rules")
    rules_parser.add_argument("--test", metavar="TEXT", help="Show which rules match TEXT")

    args = parser.parse_args(argv)
    _configure_logging()
    console = Console()

    if args.command == "check":
        return _check(args.texts, console)
    if args.command == "scan":
        _print_banner()
        return _scan(console)
    if args.command == "rules":
        _print_banner()
        return _rules(console, args.test)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
