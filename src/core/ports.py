"""Ports (interfaces) used by the core filter.

Ports define the minimal read contracts for the configuration store so that
the filter can be reused with different backends and tested with fixed
inputs.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from core.models import ModerationRule


class SettingsPort(Protocol):
    """Read access to the ``chat_filter`` settings value."""

    async def get_filter_settings(self) -> Optional[Mapping[str, Any]]:
        ...


class RulesPort(Protocol):
    """Read access to the active moderation rules, in evaluation order."""

    async def get_active_rules(self) -> Sequence[ModerationRule]:
        ...
