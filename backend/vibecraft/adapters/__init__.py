"""Adapters normalizing framework-specific events into canonical events."""

from vibecraft.adapters.base import EventAdapter, RawEvent
from vibecraft.adapters.claude_code import ClaudeCodeAdapter
from vibecraft.adapters.generic import GenericAdapter
from vibecraft.adapters.registry import AdapterRegistry, create_default_registry

__all__ = [
    "AdapterRegistry",
    "ClaudeCodeAdapter",
    "EventAdapter",
    "GenericAdapter",
    "RawEvent",
    "create_default_registry",
]
