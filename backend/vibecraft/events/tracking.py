from __future__ import annotations

import logging
from collections import OrderedDict

from vibecraft.config import settings
from vibecraft.errors import DuplicateToolInvocationError
from vibecraft.protocol.events import ToolEndEvent, ToolStartEvent

logger = logging.getLogger(__name__)


class ToolInvocationTracker:
    """Outstanding tool invocations per agent, keyed by correlation id.

    A tool_start whose id is still outstanding for the same agent is
    rejected instead of overwriting the earlier invocation.
    """

    def __init__(self, max_per_agent: int | None = None) -> None:
        self.max_per_agent = max_per_agent or settings.MAX_TRACKED_TOOLS_PER_AGENT
        # agent_id -> {tool_id: start timestamp ms}
        self._open: dict[str, OrderedDict[str, int]] = {}

    def check_start(self, event: ToolStartEvent) -> None:
        """Raise if the event would reuse an outstanding id. Records nothing."""
        if event.tool.id in self._open.get(event.agent_id, ()):
            raise DuplicateToolInvocationError(event.agent_id, event.tool.id)

    def start(self, event: ToolStartEvent) -> None:
        self.check_start(event)
        open_tools = self._open.setdefault(event.agent_id, OrderedDict())
        open_tools[event.tool.id] = event.timestamp
        if len(open_tools) > self.max_per_agent:
            evicted, _ = open_tools.popitem(last=False)
            logger.warning(
                f"Agent '{event.agent_id}' has more than {self.max_per_agent} "
                f"open tool invocations, forgetting '{evicted}'"
            )

    def end(self, event: ToolEndEvent) -> int | None:
        """Close an invocation. Returns elapsed ms, or None if it was not open."""
        open_tools = self._open.get(event.agent_id)
        if not open_tools or event.tool.id not in open_tools:
            return None
        started_at = open_tools.pop(event.tool.id)
        if not open_tools:
            del self._open[event.agent_id]
        return max(0, event.timestamp - started_at)

    def outstanding(self, agent_id: str) -> list[str]:
        return list(self._open.get(agent_id, ()))

    def reset(self, agent_id: str) -> None:
        """Forget every outstanding invocation of an agent that has ended."""
        self._open.pop(agent_id, None)

    def __len__(self) -> int:
        return len(self._open)
