"""Message normalization and the moderation gate (core domain)."""

from __future__ import annotations

# Whitespace and line terminators trimmed from message edges. Unlike a bare
# str.strip() this includes the BOM and leaves the \x1c-\x1f separators alone.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def normalize_message(raw_text: str, max_length: int) -> str:
    """Trim surrounding whitespace and clip to ``max_length`` characters.

    Clipping ignores word boundaries. A non-positive limit keeps nothing.
    """

    trimmed = raw_text.strip(TRIM_CHARS)
    if max_length <= 0:
        return ""
    if len(trimmed) > max_length:
        return trimmed[:max_length]
    return trimmed


def should_evaluate_rules(enabled: bool, text: str) -> bool:
    """Return False when rule evaluation should be bypassed."""

    return enabled and text != ""
