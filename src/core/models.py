"""Core domain models.

These dataclasses are shared across the core and adapters so that store
adapters and calling surfaces never pass raw rows into the filter.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

BLOCK = "block"
REPLACE = "replace"
FLAG = "flag"

ACTIONS = frozenset({BLOCK, REPLACE, FLAG})

DEFAULT_REPLACEMENT = "***"


@dataclass(frozen=True)
class ModerationRule:
    """An active moderation rule: a pattern plus the action taken on match."""

    pattern: str
    action: str
    replacement: str = DEFAULT_REPLACEMENT


@dataclass(frozen=True)
class FilterResult:
    """Verdict for one message."""

    ok: bool
    text: str
    blocked: bool
    flagged: bool

    def as_dict(self) -> dict:
        return asdict(self)
