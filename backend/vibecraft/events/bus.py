"""Typed publish/subscribe dispatch of canonical events.

Handlers subscribe to exactly one event type and are called synchronously,
in registration order, with ``(event, context)``. The context is whatever the
caller of ``emit`` supplies (session state, feature flags, ...); the bus never
looks inside it, which keeps handler groups decoupled from one another.

A handler that raises stops the dispatch of that event and the exception
reaches the caller of ``emit``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from vibecraft.protocol.events import EVENT_TYPES, AgentEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[AgentEvent, Any], None]
"""Handler callback type: (event, context) -> None"""


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def on(self, event_type: str, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for one canonical event type.

        Returns:
            Unsubscribe function. Call to remove the handler.
        """
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type '{event_type}'")
        self._handlers.setdefault(event_type, []).append(handler)

        def unsubscribe() -> None:
            self.off(event_type, handler)

        return unsubscribe

    def off(self, event_type: str, handler: EventHandler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        # Replace rather than mutate so an in-flight dispatch keeps its list
        self._handlers[event_type] = [h for h in handlers if h is not handler]
        return True

    def emit(self, event: AgentEvent, context: Any = None) -> None:
        handlers = self._handlers.get(event.type)
        if not handlers:
            return
        logger.debug(f"Dispatching {event.type} {event.id} to {len(handlers)} handler(s)")
        # Snapshot: registrations made by a handler apply from the next event
        for handler in tuple(handlers):
            handler(event, context)

    def emit_all(self, events: Iterable[AgentEvent], context: Any = None) -> None:
        for event in events:
            self.emit(event, context)

    def handler_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, ()))

    def clear(self) -> None:
        self._handlers.clear()
