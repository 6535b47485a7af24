"""Static configuration store adapter.

Implements the core SettingsPort and RulesPort from in-memory data, usually
the ``chat_filter`` and ``rules`` sections of config.json.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from core.models import ModerationRule
from core.rules_engine import build_rules


def _priority(row: Mapping[str, Any]) -> int:
    value = row.get("priority")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


class StaticConfigStore:
    """Read-only store that satisfies both configuration ports."""

    def __init__(
        self,
        settings_value: Optional[Mapping[str, Any]],
        rule_rows: Iterable[Mapping[str, Any]],
    ) -> None:
        self._settings_value = settings_value
        # Stable sort: rows without a priority keep their file order.
        ordered = sorted(rule_rows, key=_priority)
        self._rules: List[ModerationRule] = build_rules(ordered)

    async def get_filter_settings(self) -> Optional[Mapping[str, Any]]:
        """Return the raw ``chat_filter`` value, or None when absent."""

        return self._settings_value

    async def get_active_rules(self) -> List[ModerationRule]:
        """Return a copy of the active rules in evaluation order."""

        return list(self._rules)
