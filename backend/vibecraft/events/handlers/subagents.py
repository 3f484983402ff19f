"""Sub-agent event handlers.

Tracks which sub-agents are active under each parent agent so a renderer can
materialize and remove their zones. Driven both by explicit subagent_spawn /
subagent_end events and by delegate-category tool events from sources that
only report the tool call. Spawning is keyed by the correlation id, so a
source that sends both forms does not produce two sub-agents.
"""

from __future__ import annotations

import logging
from typing import Any

from vibecraft.events.bus import EventBus
from vibecraft.protocol.categories import ToolCategory
from vibecraft.protocol.events import (
    AgentEndEvent,
    SubagentEndEvent,
    SubagentSpawnEvent,
    ToolEndEvent,
    ToolStartEvent,
)

logger = logging.getLogger(__name__)


class SubagentTracker:
    def __init__(self) -> None:
        # parent agent id -> {sub-agent key: description}
        self._active: dict[str, dict[str, str | None]] = {}

    def spawn(self, parent_id: str, key: str, description: str | None = None) -> None:
        children = self._active.setdefault(parent_id, {})
        if key not in children:
            logger.debug(f"Sub-agent '{key}' spawned under '{parent_id}'")
        children[key] = description or children.get(key)

    def remove(self, parent_id: str, key: str) -> bool:
        children = self._active.get(parent_id)
        if not children or key not in children:
            return False
        del children[key]
        if not children:
            del self._active[parent_id]
        return True

    def clear(self, parent_id: str) -> None:
        self._active.pop(parent_id, None)

    def active(self, parent_id: str) -> dict[str, str | None]:
        return dict(self._active.get(parent_id, {}))

    def count(self, parent_id: str) -> int:
        return len(self._active.get(parent_id, ()))


def _tracker(ctx: Any) -> SubagentTracker | None:
    return getattr(ctx, "subagents", None)


def on_subagent_spawn(event: SubagentSpawnEvent, ctx: Any) -> None:
    tracker = _tracker(ctx)
    if tracker is None:
        return
    tracker.spawn(event.parent_agent_id, event.tool_use_id or event.id, event.description)


def on_subagent_end(event: SubagentEndEvent, ctx: Any) -> None:
    tracker = _tracker(ctx)
    if tracker is None:
        return
    tracker.remove(event.agent_id, event.tool_use_id or event.id)


def on_delegate_start(event: ToolStartEvent, ctx: Any) -> None:
    tracker = _tracker(ctx)
    if tracker is None or event.tool.category != ToolCategory.DELEGATE:
        return
    description = event.context
    if description is None and event.input:
        value = event.input.get("description")
        description = value if isinstance(value, str) else None
    tracker.spawn(event.agent_id, event.tool.id, description)


def on_delegate_end(event: ToolEndEvent, ctx: Any) -> None:
    tracker = _tracker(ctx)
    if tracker is None or event.tool.category != ToolCategory.DELEGATE:
        return
    tracker.remove(event.agent_id, event.tool.id)


def on_agent_end(event: AgentEndEvent, ctx: Any) -> None:
    tracker = _tracker(ctx)
    if tracker is not None:
        tracker.clear(event.agent_id)


def register_subagent_handlers(bus: EventBus) -> None:
    bus.on("tool_start", on_delegate_start)
    bus.on("tool_end", on_delegate_end)
    bus.on("subagent_spawn", on_subagent_spawn)
    bus.on("subagent_end", on_subagent_end)
    bus.on("agent_end", on_agent_end)
