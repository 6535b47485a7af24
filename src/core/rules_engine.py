"""Rule normalization and the ordered action pipeline (core domain)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping

from core.matcher import compile_matcher
from core.models import BLOCK, DEFAULT_REPLACEMENT, FLAG, REPLACE, FilterResult, ModerationRule

LOGGER = logging.getLogger(__name__)


def build_rules(rows: Iterable[Mapping[str, Any]]) -> List[ModerationRule]:
    """Normalize raw rule rows into ModerationRule objects.

    Inactive rows are dropped, a non-string pattern becomes an empty (no-op)
    pattern and a missing or empty replacement falls back to ``"***"``.
    Row order is preserved as given.
    """

    rules: List[ModerationRule] = []
    for row in rows:
        if not row.get("is_active", True):
            continue
        pattern = row.get("pattern")
        replacement = row.get("replacement")
        action = row.get("action")
        rules.append(
            ModerationRule(
                pattern=pattern if isinstance(pattern, str) else "",
                action=action if isinstance(action, str) else "",
                replacement=(
                    replacement
                    if isinstance(replacement, str) and replacement
                    else DEFAULT_REPLACEMENT
                ),
            )
        )
    return rules


@dataclass(frozen=True)
class _ScanState:
    """Running state carried from one rule to the next."""

    text: str
    flagged: bool = False
    blocked: bool = False

    def to_result(self) -> FilterResult:
        if self.blocked:
            return FilterResult(ok=False, text="", blocked=True, flagged=self.flagged)
        return FilterResult(ok=True, text=self.text, blocked=False, flagged=self.flagged)


def _step(state: _ScanState, rule: ModerationRule) -> _ScanState:
    matcher = compile_matcher(rule.pattern)
    if matcher is None or not matcher.matches(state.text):
        return state

    if rule.action == BLOCK:
        LOGGER.debug("Block rule %r matched (%s)", rule.pattern, matcher.mode)
        return replace(state, text="", blocked=True)
    if rule.action == REPLACE:
        return replace(state, text=matcher.replace_all(state.text, rule.replacement))
    if rule.action == FLAG:
        LOGGER.debug("Flag rule %r matched (%s)", rule.pattern, matcher.mode)
        return replace(state, flagged=True)

    LOGGER.debug("Ignoring unknown action %r for pattern %r", rule.action, rule.pattern)
    return state


def apply_rules(text: str, rules: Iterable[ModerationRule]) -> FilterResult:
    """Fold the rules over the text, left to right.

    Matching logic:
    - block: stop at once; in-progress rewrites are discarded but an earlier
      flag is kept.
    - replace: rewrite every match; later rules see the rewritten text.
    - flag: mark the message and keep going.
    """

    state = _ScanState(text=text)
    for rule in rules:
        state = _step(state, rule)
        if state.blocked:
            break
    return state.to_result()
