from __future__ import annotations

import asyncio

from adapters.static_store import StaticConfigStore


def test_settings_value_is_passed_through() -> None:
    store = StaticConfigStore({"enabled": False}, [])

    assert asyncio.run(store.get_filter_settings()) == {"enabled": False}
    assert asyncio.run(StaticConfigStore(None, []).get_filter_settings()) is None


def test_rules_are_active_only_and_ordered_by_priority() -> None:
    store = StaticConfigStore(
        None,
        [
            {"pattern": "b", "action": "flag"},
            {"pattern": "a", "action": "flag", "priority": -1},
            {"pattern": "off", "action": "block", "is_active": False},
            {"pattern": "c", "action": "flag"},
        ],
    )

    rules = asyncio.run(store.get_active_rules())

    assert [rule.pattern for rule in rules] == ["a", "b", "c"]


def test_active_rules_are_returned_as_a_copy() -> None:
    store = StaticConfigStore(None, [{"pattern": "a", "action": "flag"}])

    first = asyncio.run(store.get_active_rules())
    first.clear()

    assert len(asyncio.run(store.get_active_rules())) == 1
