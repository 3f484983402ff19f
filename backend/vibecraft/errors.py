from __future__ import annotations


class VibecraftError(Exception):
    """Base class for errors raised by the event protocol service."""


class DuplicateToolInvocationError(VibecraftError):
    """A tool_start reused a correlation id that is still outstanding."""

    def __init__(self, agent_id: str, tool_id: str) -> None:
        self.agent_id = agent_id
        self.tool_id = tool_id
        super().__init__(
            f"Tool invocation '{tool_id}' is already in progress for agent '{agent_id}'"
        )


class ClientError(VibecraftError):
    """Raised by the client SDK when the server rejects a request."""
