from __future__ import annotations

from typing import Any

from pydantic import Field

from vibecraft.protocol.events import WireModel


class AgentRegistration(WireModel):
    """What an agent sends when it registers with the server."""

    name: str = Field(min_length=1)
    framework: str = Field(min_length=1)
    cwd: str | None = None
    metadata: dict[str, Any] | None = None


class RegisteredAgent(AgentRegistration):
    """A registration accepted by the server. Immutable once created."""

    model_config = {"frozen": True}

    agent_id: str
    registered_at: int
