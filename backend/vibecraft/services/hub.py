"""Ingestion pipeline: raw payload -> adapters -> correlation -> event bus.

Normalization and dispatch run to completion on the calling task; nothing in
here awaits. Transport concerns (HTTP bodies, status codes) stay in the
routers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from vibecraft.adapters.generic import GenericAdapter
from vibecraft.adapters.registry import AdapterRegistry, create_default_registry
from vibecraft.events.bus import EventBus
from vibecraft.events.context import DispatchContext
from vibecraft.events.handlers.subagents import register_subagent_handlers
from vibecraft.events.tracking import ToolInvocationTracker
from vibecraft.protocol.events import (
    AgentEndEvent,
    AgentEvent,
    ToolEndEvent,
    ToolStartEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """Outcome of one ingest call.

    ``recognized`` is False when no adapter claimed the payload. A recognized
    payload with no events was filtered on purpose (or failed validation).
    """

    recognized: bool
    events: list[AgentEvent] = field(default_factory=list)

    @property
    def dispatched(self) -> int:
        return len(self.events)


class EventHub:
    def __init__(
        self,
        registry: AdapterRegistry | None = None,
        bus: EventBus | None = None,
        tracker: ToolInvocationTracker | None = None,
        context: Any = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.bus = bus or EventBus()
        self.tracker = tracker or ToolInvocationTracker()
        self.context = context if context is not None else DispatchContext()
        self._canonical = GenericAdapter()

    def ingest(self, raw: Any) -> IngestResult:
        """Legacy path: auto-detect the format of any raw payload."""
        events = self.registry.normalize_event(raw)
        if events is None:
            return IngestResult(recognized=False)
        self.publish(events)
        return IngestResult(recognized=True, events=events)

    def ingest_canonical(self, raw: Any) -> IngestResult:
        """Path for payloads that must already be canonical events."""
        if not isinstance(raw, dict) or not self._canonical.can_handle(raw):
            return IngestResult(recognized=False)
        events = self._canonical.normalize(raw)
        self.publish(events)
        return IngestResult(recognized=True, events=events)

    def publish(self, events: list[AgentEvent]) -> None:
        """Correlate tool events and dispatch every event in order.

        Duplicate tool ids are checked for the whole batch before anything
        is dispatched, so a rejected batch has no partial effect. An
        agent_end releases whatever the agent left open.
        """
        for event in events:
            if isinstance(event, ToolStartEvent):
                self.tracker.check_start(event)

        for event in events:
            if isinstance(event, ToolStartEvent):
                self.tracker.start(event)
            elif isinstance(event, ToolEndEvent):
                elapsed = self.tracker.end(event)
                if event.duration is None and elapsed is not None:
                    event.duration = elapsed
            elif isinstance(event, AgentEndEvent):
                self.tracker.reset(event.agent_id)
            self.bus.emit(event, self.context)


def create_hub() -> EventHub:
    hub = EventHub()
    register_subagent_handlers(hub.bus)
    return hub
