"""Filter settings and their resolution from a raw settings payload.

The settings payload comes from a generic key/value store, so its shape is
not trusted: each field is validated on its own and anything malformed
quietly keeps the default.
"""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_ENABLED = True
DEFAULT_MAX_LENGTH = 80

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class FilterSettings:
    """Settings snapshot consumed by a single filter invocation."""

    enabled: bool = DEFAULT_ENABLED
    max_length: int = DEFAULT_MAX_LENGTH


def _parse_int_prefix(value: str) -> Optional[int]:
    """Parse a leading base-10 integer ("42px" -> 42), or return None."""

    match = _INT_PREFIX.match(value)
    if not match:
        return None
    try:
        parsed = int(match.group(1))
    except ValueError:
        # Digit strings past the interpreter's int conversion limit.
        return None
    # Anything a double cannot hold counts as infinite, not as a length.
    if abs(parsed) > sys.float_info.max:
        return None
    return parsed


def _resolve_max_length(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid length.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        parsed = _parse_int_prefix(value)
        if parsed is not None and parsed > 0:
            return parsed
    return None


def resolve_settings(raw: Optional[Mapping[str, Any]]) -> FilterSettings:
    """Build FilterSettings from a raw payload, falling back to defaults.

    - ``enabled`` is honored only when it is a real boolean.
    - ``max_message_length`` may be a number (used verbatim) or a numeric
      string (used only when it parses to a positive integer).
    """

    if not isinstance(raw, Mapping):
        return FilterSettings()

    enabled = raw.get("enabled")
    if not isinstance(enabled, bool):
        enabled = DEFAULT_ENABLED

    max_length = _resolve_max_length(raw.get("max_message_length"))
    if max_length is None:
        max_length = DEFAULT_MAX_LENGTH

    return FilterSettings(enabled=enabled, max_length=max_length)
