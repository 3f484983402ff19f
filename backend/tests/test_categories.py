"""Tests for the tool category taxonomy and its lookup tables."""

from __future__ import annotations

from vibecraft.protocol.categories import (
    CATEGORY_ICON_MAP,
    CATEGORY_SOUND_MAP,
    CATEGORY_STATION_MAP,
    ToolCategory,
    coerce_category,
    get_icon_for_category,
    get_sound_for_category,
    get_station_for_category,
)

WRENCH = "\U0001F527"


# ── 1. Totality ─────────────────────────────────────────────────


def test_every_category_has_station_sound_and_icon():
    for category in ToolCategory:
        assert category in CATEGORY_STATION_MAP
        assert category in CATEGORY_SOUND_MAP
        assert category in CATEGORY_ICON_MAP
        assert get_station_for_category(category)
        assert get_sound_for_category(category)
        assert get_icon_for_category(category)


def test_category_values_are_the_closed_set():
    assert {c.value for c in ToolCategory} == {
        "read", "write", "edit", "execute", "search",
        "network", "delegate", "plan", "interact", "other",
    }


def test_station_table():
    assert get_station_for_category(ToolCategory.READ) == "bookshelf"
    assert get_station_for_category(ToolCategory.WRITE) == "desk"
    assert get_station_for_category(ToolCategory.EDIT) == "workbench"
    assert get_station_for_category(ToolCategory.EXECUTE) == "terminal"
    assert get_station_for_category(ToolCategory.SEARCH) == "scanner"
    assert get_station_for_category(ToolCategory.NETWORK) == "antenna"
    assert get_station_for_category(ToolCategory.DELEGATE) == "portal"
    assert get_station_for_category(ToolCategory.PLAN) == "taskboard"
    assert get_station_for_category(ToolCategory.INTERACT) == "center"


def test_sound_table_uses_legacy_sound_names():
    assert get_sound_for_category(ToolCategory.EXECUTE) == "bash"
    assert get_sound_for_category(ToolCategory.SEARCH) == "grep"
    assert get_sound_for_category(ToolCategory.NETWORK) == "webfetch"
    assert get_sound_for_category(ToolCategory.DELEGATE) == "task"
    assert get_sound_for_category(ToolCategory.PLAN) == "todo"
    assert get_sound_for_category(ToolCategory.INTERACT) == "notification"


# ── 2. Fallbacks at unvalidated boundaries ──────────────────────


def test_lookups_accept_plain_strings():
    assert get_station_for_category("read") == "bookshelf"
    assert get_icon_for_category("delegate") == "\U0001F916"


def test_unrecognized_category_falls_back_to_other():
    assert get_station_for_category("teleport") == "center"
    assert get_sound_for_category("teleport") == "read"
    assert get_icon_for_category("teleport") == WRENCH


def test_coerce_category():
    assert coerce_category(ToolCategory.PLAN) is ToolCategory.PLAN
    assert coerce_category("search") is ToolCategory.SEARCH
    assert coerce_category(None) is ToolCategory.OTHER
    assert coerce_category("") is ToolCategory.OTHER
    assert coerce_category({"not": "hashable"}) is ToolCategory.OTHER
