from vibecraft.protocol.categories import (
    CATEGORY_ICON_MAP,
    CATEGORY_SOUND_MAP,
    CATEGORY_STATION_MAP,
    ToolCategory,
    coerce_category,
    get_icon_for_category,
    get_sound_for_category,
    get_station_for_category,
)
from vibecraft.protocol.events import (
    EVENT_TYPES,
    AgentEndEvent,
    AgentEvent,
    AgentIdleEvent,
    AgentStartEvent,
    AgentThinkingEvent,
    BaseEvent,
    NotificationEvent,
    SubagentEndEvent,
    SubagentSpawnEvent,
    ToolEndEvent,
    ToolInfo,
    ToolStartEvent,
    UserInputEvent,
    parse_event,
    to_wire,
)
from vibecraft.protocol.registration import AgentRegistration, RegisteredAgent

__all__ = [
    "CATEGORY_ICON_MAP",
    "CATEGORY_SOUND_MAP",
    "CATEGORY_STATION_MAP",
    "EVENT_TYPES",
    "AgentEndEvent",
    "AgentEvent",
    "AgentIdleEvent",
    "AgentRegistration",
    "AgentStartEvent",
    "AgentThinkingEvent",
    "BaseEvent",
    "NotificationEvent",
    "RegisteredAgent",
    "SubagentEndEvent",
    "SubagentSpawnEvent",
    "ToolCategory",
    "ToolEndEvent",
    "ToolInfo",
    "ToolStartEvent",
    "UserInputEvent",
    "coerce_category",
    "get_icon_for_category",
    "get_sound_for_category",
    "get_station_for_category",
    "parse_event",
    "to_wire",
]
