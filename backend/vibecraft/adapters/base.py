from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from vibecraft.protocol.categories import ToolCategory
from vibecraft.protocol.events import AgentEvent

RawEvent = Mapping[str, Any]


class EventAdapter(ABC):
    """Translator from one framework's native event shape to canonical events.

    Subclasses must set: name
    Subclasses implement: can_handle(), categorize(), normalize()

    Adapters are stateless. None of the three operations may raise for
    malformed input: detection answers False, categorization answers
    ``ToolCategory.OTHER`` and normalization returns an empty list.
    """

    name: str = ""

    @abstractmethod
    def can_handle(self, raw: RawEvent) -> bool:
        """Cheap structural test used for auto-detection.

        Looks only at the presence and shape of distinguishing fields and
        never attempts a full normalization to decide.
        """
        ...

    @abstractmethod
    def categorize(self, tool_name: str) -> ToolCategory:
        """Map a framework-specific tool name to its category."""
        ...

    @abstractmethod
    def normalize(self, raw: RawEvent) -> list[AgentEvent]:
        """Translate a raw payload into zero or more canonical events.

        An empty list means the payload was recognized but should be
        silently dropped, either because the adapter does not surface that
        event or because the payload failed validation. Several events are
        returned, in dispatch order, when one native action stands for more
        than one canonical event.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
