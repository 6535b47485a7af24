"""Pattern compilation and matching (core domain).

Each rule pattern compiles once into either a regex matcher or, when the
pattern is not valid regex syntax, a literal substring matcher. Callers only
see the shared ``matches`` / ``replace_all`` interface.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from core.models import ModerationRule

LOGGER = logging.getLogger(__name__)

REGEX = "regex"
LITERAL = "literal"


@dataclass(frozen=True)
class RegexMatcher:
    """Case-insensitive regex over the whole text."""

    compiled: re.Pattern

    mode = REGEX

    def matches(self, text: str) -> bool:
        return self.compiled.search(text) is not None

    def replace_all(self, text: str, replacement: str) -> str:
        # A callable keeps the replacement literal: no group expansion and no
        # re.error for stray backslashes in stored replacements.
        return self.compiled.sub(lambda _match: replacement, text)


@dataclass(frozen=True)
class LiteralMatcher:
    """Case-insensitive substring fallback for patterns that fail to compile."""

    pattern: str

    mode = LITERAL

    def _hit(self, text: str, index: int) -> bool:
        return text[index:index + len(self.pattern)].lower() == self.pattern.lower()

    def matches(self, text: str) -> bool:
        return any(self._hit(text, index) for index in range(len(text)))

    def replace_all(self, text: str, replacement: str) -> str:
        """Replace every non-overlapping occurrence, scanning left to right."""

        width = len(self.pattern)
        parts = []
        index = 0
        while index < len(text):
            if self._hit(text, index):
                parts.append(replacement)
                index += width
            else:
                parts.append(text[index])
                index += 1
        return "".join(parts)


Matcher = Union[RegexMatcher, LiteralMatcher]


@dataclass(frozen=True)
class MatchOutcome:
    """Whether a rule matched, and which matcher decided it."""

    matched: bool
    mode: Optional[str]


@lru_cache(maxsize=512)
def compile_matcher(pattern: str) -> Optional[Matcher]:
    """Compile a rule pattern, or return None for an empty pattern.

    Results are cached per pattern string, so hot rule sets are compiled
    once per process rather than once per message.
    """

    if not pattern:
        return None
    try:
        return RegexMatcher(re.compile(pattern, re.IGNORECASE))
    except (re.error, OverflowError) as exc:
        LOGGER.warning("Pattern %r is not a valid regex (%s); matching it literally", pattern, exc)
        return LiteralMatcher(pattern)


def try_match(rule: ModerationRule, text: str) -> MatchOutcome:
    """Test a single rule against the current text."""

    matcher = compile_matcher(rule.pattern)
    if matcher is None:
        return MatchOutcome(matched=False, mode=None)
    return MatchOutcome(matched=matcher.matches(text), mode=matcher.mode)
