from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from vibecraft.events.handlers.subagents import SubagentTracker


@dataclass
class DispatchContext:
    """Per-process state shared by handler groups at dispatch time.

    The bus passes this through untouched; only handlers read or update it.
    """

    subagents: SubagentTracker = field(default_factory=SubagentTracker)
    flags: dict[str, Any] = field(default_factory=dict)
