from __future__ import annotations

import logging
from typing import Iterable, Mapping

from vibecraft.adapters.base import EventAdapter, RawEvent
from vibecraft.adapters.claude_code import ClaudeCodeAdapter
from vibecraft.adapters.generic import GenericAdapter
from vibecraft.protocol.events import AgentEvent

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Ordered adapters with first-match auto-detection.

    Order matters: more specific adapters come first. Adapters registered
    later are placed in front of the existing ones so that custom adapters
    can shadow the built-ins without modifying them.
    """

    def __init__(self, adapters: Iterable[EventAdapter] = ()) -> None:
        self._adapters: list[EventAdapter] = list(adapters)

    @property
    def adapters(self) -> tuple[EventAdapter, ...]:
        return tuple(self._adapters)

    def register_adapter(self, adapter: EventAdapter) -> None:
        """Insert an adapter ahead of every adapter already registered."""
        self._adapters.insert(0, adapter)
        logger.info(f"Registered event adapter '{adapter.name}'")

    def with_adapter(self, adapter: EventAdapter) -> AdapterRegistry:
        """Return a new registry with ``adapter`` in front; self is unchanged."""
        return AdapterRegistry([adapter, *self._adapters])

    def get_adapter(self, name: str) -> EventAdapter | None:
        for adapter in self._adapters:
            if adapter.name == name:
                return adapter
        return None

    def detect(self, raw: RawEvent) -> EventAdapter | None:
        """Return the first adapter that claims the payload."""
        if not isinstance(raw, Mapping):
            return None
        for adapter in tuple(self._adapters):
            if adapter.can_handle(raw):
                return adapter
        return None

    def normalize_event(self, raw: RawEvent) -> list[AgentEvent] | None:
        """Auto-detect the source format and normalize the payload.

        Returns None when no adapter recognizes the payload. An empty list
        means the payload was recognized and deliberately filtered.
        """
        adapter = self.detect(raw)
        if adapter is None:
            logger.debug(f"No adapter recognizes event type {_describe(raw)}")
            return None
        return adapter.normalize(raw)

    def __len__(self) -> int:
        return len(self._adapters)


def create_default_registry() -> AdapterRegistry:
    return AdapterRegistry([ClaudeCodeAdapter(), GenericAdapter()])


def _describe(raw: object) -> str:
    if isinstance(raw, Mapping):
        return repr(raw.get("type"))
    return type(raw).__name__
