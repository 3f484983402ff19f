"""Canonical agent events.

Every consumer is written against these types, independent of the framework
that produced the activity. The ``type`` tag alone determines which variant a
payload is; ``AgentEvent`` is a pydantic discriminated union on it.

Wire payloads use camelCase keys (``agentId``, ``toolUseId``), Python code
uses snake_case attributes. Keys that are not part of a variant are kept as
extra fields so a pass-through round trip loses nothing.
"""

from __future__ import annotations

import math
import time
import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from vibecraft.protocol.categories import ToolCategory

EVENT_TYPES: tuple[str, ...] = (
    "tool_start",
    "tool_end",
    "agent_idle",
    "agent_thinking",
    "user_input",
    "agent_start",
    "agent_end",
    "notification",
    "subagent_spawn",
    "subagent_end",
)

StartTrigger = Literal["startup", "resume", "user_input", "other"]
NotificationLevel = Literal["info", "warning", "error", "success"]


def new_event_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def _whole_ms(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value):
        return round(value)
    return value


# Durations are whole milliseconds on the wire; fractional reports are rounded
DurationMs = Annotated[int, BeforeValidator(_whole_ms)]


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class ToolInfo(WireModel):
    name: str
    category: ToolCategory = ToolCategory.OTHER
    # Correlation key matching a tool_start with its tool_end
    id: str = Field(default_factory=new_event_id)


class BaseEvent(WireModel):
    id: str = Field(default_factory=new_event_id)
    timestamp: int = Field(default_factory=now_ms)
    agent_id: str
    source: str
    cwd: str | None = None
    metadata: dict[str, Any] | None = None


# ── Tool events ─────────────────────────────────────────────────


class ToolStartEvent(BaseEvent):
    type: Literal["tool_start"] = "tool_start"
    tool: ToolInfo
    input: dict[str, Any] | None = None
    context: str | None = None


class ToolEndEvent(BaseEvent):
    type: Literal["tool_end"] = "tool_end"
    tool: ToolInfo
    success: bool
    duration: DurationMs | None = None
    output: dict[str, Any] | None = None


# ── Agent lifecycle ─────────────────────────────────────────────


class AgentIdleEvent(BaseEvent):
    type: Literal["agent_idle"] = "agent_idle"
    reason: str | None = None
    response: str | None = None


class AgentThinkingEvent(BaseEvent):
    type: Literal["agent_thinking"] = "agent_thinking"


class AgentStartEvent(BaseEvent):
    type: Literal["agent_start"] = "agent_start"
    trigger: StartTrigger | None = None


class AgentEndEvent(BaseEvent):
    type: Literal["agent_end"] = "agent_end"
    reason: str | None = None


# ── User interaction and notifications ──────────────────────────


class UserInputEvent(BaseEvent):
    type: Literal["user_input"] = "user_input"
    text: str


class NotificationEvent(BaseEvent):
    type: Literal["notification"] = "notification"
    message: str
    level: NotificationLevel | None = None


# ── Sub-agents ──────────────────────────────────────────────────


class SubagentSpawnEvent(BaseEvent):
    type: Literal["subagent_spawn"] = "subagent_spawn"
    parent_agent_id: str
    description: str | None = None
    tool_use_id: str | None = None


class SubagentEndEvent(BaseEvent):
    type: Literal["subagent_end"] = "subagent_end"
    tool_use_id: str | None = None


AgentEvent = Annotated[
    Union[
        ToolStartEvent,
        ToolEndEvent,
        AgentIdleEvent,
        AgentThinkingEvent,
        AgentStartEvent,
        AgentEndEvent,
        UserInputEvent,
        NotificationEvent,
        SubagentSpawnEvent,
        SubagentEndEvent,
    ],
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[AgentEvent] = TypeAdapter(AgentEvent)


def parse_event(data: dict[str, Any]) -> AgentEvent:
    """Validate a wire payload into its canonical variant.

    Raises ``pydantic.ValidationError`` if the payload is not well formed.
    """
    return _event_adapter.validate_python(data)


def to_wire(event: BaseEvent) -> dict[str, Any]:
    """Serialize an event to its camelCase JSON-compatible form.

    Top-level keys whose value is None are omitted, so an explicit null and
    an absent key produce the same wire payload.
    """
    return event.model_dump(mode="json", by_alias=True, exclude_none=True)
