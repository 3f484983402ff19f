from vibecraft.events.bus import EventBus, EventHandler
from vibecraft.events.context import DispatchContext
from vibecraft.events.tracking import ToolInvocationTracker

__all__ = ["DispatchContext", "EventBus", "EventHandler", "ToolInvocationTracker"]
