"""Pass-through adapter for payloads already in the canonical shape.

Any framework that emits canonical JSON needs no custom adapter: this one
validates the payload, fills in ``id``/``timestamp`` and tool defaults, and
hands it back unchanged otherwise. It is always last in registry order.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from vibecraft.adapters.base import EventAdapter, RawEvent
from vibecraft.protocol.categories import ToolCategory, coerce_category
from vibecraft.protocol.events import (
    EVENT_TYPES,
    AgentEvent,
    new_event_id,
    parse_event,
)

logger = logging.getLogger(__name__)

_TOOL_EVENT_TYPES = ("tool_start", "tool_end")


class GenericAdapter(EventAdapter):
    name = "generic"

    def can_handle(self, raw: RawEvent) -> bool:
        return (
            isinstance(raw.get("agentId"), str)
            and isinstance(raw.get("source"), str)
            and raw.get("type") in EVENT_TYPES
        )

    def categorize(self, tool_name: str) -> ToolCategory:
        # Canonical events carry their category in tool info already
        return ToolCategory.OTHER

    def normalize(self, raw: RawEvent) -> list[AgentEvent]:
        if raw.get("type") not in EVENT_TYPES:
            return []

        payload: dict[str, Any] = dict(raw)
        # Falsy ids and timestamps are treated as absent
        if not payload.get("id"):
            payload.pop("id", None)
        if not payload.get("timestamp"):
            payload.pop("timestamp", None)

        if payload["type"] in _TOOL_EVENT_TYPES:
            tool = payload.get("tool")
            if not isinstance(tool, dict) or not isinstance(tool.get("name"), str):
                logger.debug(f"Dropping {payload['type']} without tool name")
                return []
            tool = dict(tool)
            tool["category"] = coerce_category(tool.get("category")).value
            if not tool.get("id"):
                tool["id"] = new_event_id()
            payload["tool"] = tool

        try:
            return [parse_event(payload)]
        except ValidationError as e:
            logger.debug(
                f"Dropping malformed {payload['type']} event: {e.error_count()} error(s)"
            )
            return []
