"""Core chat filter pipeline.

This module is store-agnostic. It only relies on ports for settings and
rules, so any configuration backend can feed it.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config import resolve_settings
from core.models import FilterResult
from core.normalize import normalize_message, should_evaluate_rules
from core.ports import RulesPort, SettingsPort
from core.rules_engine import apply_rules

LOGGER = logging.getLogger(__name__)


def _passthrough(text: str) -> FilterResult:
    return FilterResult(ok=True, text=text, blocked=False, flagged=False)


class ChatFilter:
    """Orchestrates settings, normalization, gating and rule evaluation."""

    def __init__(self, settings: SettingsPort, rules: RulesPort) -> None:
        self._settings = settings
        self._rules = rules

    async def apply_filter(self, raw_text: Optional[str]) -> FilterResult:
        """Run one inbound message through the filter."""

        settings = resolve_settings(await self._settings.get_filter_settings())

        # Length limiting applies even when moderation is switched off.
        text = normalize_message(raw_text or "", settings.max_length)
        if not should_evaluate_rules(settings.enabled, text):
            return _passthrough(text)

        # Rules are only fetched once we know they will be evaluated.
        rules = await self._rules.get_active_rules()
        if not rules:
            return _passthrough(text)

        result = apply_rules(text, rules)
        if result.blocked:
            LOGGER.info("Message blocked by chat filter")
        elif result.flagged:
            LOGGER.info("Message flagged by chat filter")
        return result
