"""Tool category taxonomy.

Different frameworks name their tools differently, but every tool performs an
operation that falls into one of these categories. The lookup tables map a
category to the station it is visualized at, the sound it plays and the icon
shown for it. Every lookup falls back to the ``other`` entry.
"""

from __future__ import annotations

import enum


class ToolCategory(str, enum.Enum):
    READ = "read"
    WRITE = "write"
    EDIT = "edit"
    EXECUTE = "execute"
    SEARCH = "search"
    NETWORK = "network"
    DELEGATE = "delegate"
    PLAN = "plan"
    INTERACT = "interact"
    OTHER = "other"


CATEGORY_STATION_MAP: dict[ToolCategory, str] = {
    ToolCategory.READ: "bookshelf",
    ToolCategory.WRITE: "desk",
    ToolCategory.EDIT: "workbench",
    ToolCategory.EXECUTE: "terminal",
    ToolCategory.SEARCH: "scanner",
    ToolCategory.NETWORK: "antenna",
    ToolCategory.DELEGATE: "portal",
    ToolCategory.PLAN: "taskboard",
    ToolCategory.INTERACT: "center",
    ToolCategory.OTHER: "center",
}

CATEGORY_SOUND_MAP: dict[ToolCategory, str] = {
    ToolCategory.READ: "read",
    ToolCategory.WRITE: "write",
    ToolCategory.EDIT: "edit",
    ToolCategory.EXECUTE: "bash",
    ToolCategory.SEARCH: "grep",
    ToolCategory.NETWORK: "webfetch",
    ToolCategory.DELEGATE: "task",
    ToolCategory.PLAN: "todo",
    ToolCategory.INTERACT: "notification",
    ToolCategory.OTHER: "read",  # fallback
}

CATEGORY_ICON_MAP: dict[ToolCategory, str] = {
    ToolCategory.READ: "\U0001F4D6",
    ToolCategory.WRITE: "\U0001F4DD",
    ToolCategory.EDIT: "✏️",
    ToolCategory.EXECUTE: "\U0001F4BB",
    ToolCategory.SEARCH: "\U0001F50D",
    ToolCategory.NETWORK: "\U0001F310",
    ToolCategory.DELEGATE: "\U0001F916",
    ToolCategory.PLAN: "\U0001F4CB",
    ToolCategory.INTERACT: "❓",
    ToolCategory.OTHER: "\U0001F527",
}


def coerce_category(value: object) -> ToolCategory:
    """Return the matching category, or ``OTHER`` for anything unrecognized."""
    if isinstance(value, ToolCategory):
        return value
    try:
        return ToolCategory(value)
    except (ValueError, TypeError):
        return ToolCategory.OTHER


def get_station_for_category(category: ToolCategory | str) -> str:
    return CATEGORY_STATION_MAP[coerce_category(category)]


def get_sound_for_category(category: ToolCategory | str) -> str:
    return CATEGORY_SOUND_MAP[coerce_category(category)]


def get_icon_for_category(category: ToolCategory | str) -> str:
    return CATEGORY_ICON_MAP[coerce_category(category)]
