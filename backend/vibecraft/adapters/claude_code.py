"""Claude Code adapter.

Normalizes Claude Code hook events (pre_tool_use, post_tool_use, stop, ...)
into canonical events. Tool names are categorized through a direct table of
the built-in tools, with a substring heuristic as a second tier for MCP tools
whose names are only known at runtime.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal, get_args
from urllib.parse import urlsplit

from pydantic import Field, ValidationError

from vibecraft.adapters.base import EventAdapter, RawEvent
from vibecraft.constants import (
    CLAUDE_CODE_SOURCE,
    CONTEXT_ELLIPSIS,
    CONTEXT_MAX_CHARS,
    DELEGATE_TOOL_NAME,
    MCP_TOOL_PREFIX,
    PLAN_CONTEXT_LABEL,
    TOOL_EVENT_ID_SUFFIX,
)
from vibecraft.protocol.categories import ToolCategory
from vibecraft.protocol.events import (
    AgentEndEvent,
    AgentEvent,
    AgentIdleEvent,
    AgentStartEvent,
    AgentThinkingEvent,
    DurationMs,
    NotificationEvent,
    StartTrigger,
    SubagentEndEvent,
    SubagentSpawnEvent,
    ToolEndEvent,
    ToolInfo,
    ToolStartEvent,
    UserInputEvent,
    WireModel,
    new_event_id,
    now_ms,
)

logger = logging.getLogger(__name__)

HookEventType = Literal[
    "pre_tool_use",
    "post_tool_use",
    "stop",
    "subagent_stop",
    "session_start",
    "session_end",
    "user_prompt_submit",
    "notification",
    "pre_compact",
]

HOOK_EVENT_TYPES: frozenset[str] = frozenset(get_args(HookEventType))

# ── Tool categorization ─────────────────────────────────────────

CLAUDE_TOOL_CATEGORIES: dict[str, ToolCategory] = {
    "Read": ToolCategory.READ,
    "Write": ToolCategory.WRITE,
    "Edit": ToolCategory.EDIT,
    "Bash": ToolCategory.EXECUTE,
    "Grep": ToolCategory.SEARCH,
    "Glob": ToolCategory.SEARCH,
    "WebFetch": ToolCategory.NETWORK,
    "WebSearch": ToolCategory.NETWORK,
    "Task": ToolCategory.DELEGATE,
    "TodoWrite": ToolCategory.PLAN,
    "AskUserQuestion": ToolCategory.INTERACT,
    "NotebookEdit": ToolCategory.EDIT,
}

# Fallback tier for MCP tools, evaluated in order against the lower-cased
# name. The first rule with a matching substring wins.
MCP_CATEGORY_RULES: tuple[tuple[tuple[str, ...], ToolCategory], ...] = (
    (("browser", "playwright"), ToolCategory.INTERACT),
    (("search", "query"), ToolCategory.SEARCH),
    (("fetch", "http", "api"), ToolCategory.NETWORK),
    (("read", "get"), ToolCategory.READ),
    (("write", "create", "set"), ToolCategory.WRITE),
    (("edit", "update", "modify"), ToolCategory.EDIT),
    (("run", "exec"), ToolCategory.EXECUTE),
)


def categorize_mcp_tool(tool_name: str) -> ToolCategory:
    lower = tool_name.lower()
    for needles, category in MCP_CATEGORY_RULES:
        if any(needle in lower for needle in needles):
            return category
    return ToolCategory.OTHER


# ── Context extraction ──────────────────────────────────────────


def _truncate(text: str) -> str:
    if len(text) > CONTEXT_MAX_CHARS:
        return text[:CONTEXT_MAX_CHARS] + CONTEXT_ELLIPSIS
    return text


def _str_field(tool_input: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = tool_input.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _file_context(tool_input: dict[str, Any]) -> str | None:
    path = _str_field(tool_input, "file_path", "notebook_path")
    if path is None:
        return None
    return path.rsplit("/", 1)[-1] or path


def _command_context(tool_input: dict[str, Any]) -> str | None:
    command = _str_field(tool_input, "command")
    if command is None:
        return None
    return _truncate(command.split("\n", 1)[0])


def _grep_context(tool_input: dict[str, Any]) -> str | None:
    pattern = _str_field(tool_input, "pattern")
    return f"/{pattern}/" if pattern else None


def _glob_context(tool_input: dict[str, Any]) -> str | None:
    return _str_field(tool_input, "pattern")


def _url_context(tool_input: dict[str, Any]) -> str | None:
    url = _str_field(tool_input, "url")
    if url is None:
        return None
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        hostname = None
    return hostname or url[:CONTEXT_MAX_CHARS]


def _web_search_context(tool_input: dict[str, Any]) -> str | None:
    query = _str_field(tool_input, "query")
    return f'"{query}"' if query else None


def _task_context(tool_input: dict[str, Any]) -> str | None:
    return _str_field(tool_input, "description")


def _plan_context(tool_input: dict[str, Any]) -> str | None:
    return PLAN_CONTEXT_LABEL


CONTEXT_EXTRACTORS: dict[str, Callable[[dict[str, Any]], str | None]] = {
    "Read": _file_context,
    "Write": _file_context,
    "Edit": _file_context,
    "NotebookEdit": _file_context,
    "Bash": _command_context,
    "Grep": _grep_context,
    "Glob": _glob_context,
    "WebFetch": _url_context,
    "WebSearch": _web_search_context,
    "Task": _task_context,
    "TodoWrite": _plan_context,
}


def extract_context(tool_name: str, tool_input: dict[str, Any]) -> str | None:
    """Short human-readable summary of what a tool is operating on."""
    extractor = CONTEXT_EXTRACTORS.get(tool_name)
    if extractor is None:
        return None
    return extractor(tool_input)


def map_start_source(source: str | None) -> StartTrigger:
    """Claude Code session sources: startup/resume pass through, the rest
    (clear, compact, ...) collapse to ``other``."""
    if source in ("startup", "resume"):
        return source
    return "other"


# ── Native payload ──────────────────────────────────────────────


class ClaudeHookPayload(WireModel):
    """Shape of a hook event as posted by the Claude Code hook script."""

    type: HookEventType
    session_id: str = Field(min_length=1)
    id: str | None = None
    timestamp: int | None = None
    cwd: str | None = None

    tool: str | None = None
    tool_input: dict[str, Any] | None = None
    tool_use_id: str | None = None
    tool_response: Any = None
    success: bool = True
    duration: DurationMs | None = None

    response: str | None = None
    source: str | None = None
    reason: str | None = None
    prompt: str | None = None
    message: str | None = None
    trigger: str | None = None


class ClaudeCodeAdapter(EventAdapter):
    name = CLAUDE_CODE_SOURCE

    def can_handle(self, raw: RawEvent) -> bool:
        event_type = raw.get("type")
        if not isinstance(event_type, str) or not raw.get("sessionId"):
            return False
        return event_type in HOOK_EVENT_TYPES

    def categorize(self, tool_name: str) -> ToolCategory:
        if not isinstance(tool_name, str):
            return ToolCategory.OTHER
        if tool_name in CLAUDE_TOOL_CATEGORIES:
            return CLAUDE_TOOL_CATEGORIES[tool_name]
        if tool_name.startswith(MCP_TOOL_PREFIX):
            return categorize_mcp_tool(tool_name)
        return ToolCategory.OTHER

    def normalize(self, raw: RawEvent) -> list[AgentEvent]:
        try:
            hook = ClaudeHookPayload.model_validate(dict(raw))
            return self._translate(hook)
        except ValidationError as e:
            logger.debug(
                f"Dropping malformed Claude Code '{raw.get('type')}' hook: "
                f"{e.error_count()} error(s)"
            )
            return []

    def _translate(self, hook: ClaudeHookPayload) -> list[AgentEvent]:
        base: dict[str, Any] = {
            "id": hook.id or new_event_id(),
            "timestamp": hook.timestamp or now_ms(),
            "agent_id": hook.session_id,
            "source": CLAUDE_CODE_SOURCE,
            "cwd": hook.cwd,
        }

        event_type = hook.type
        if event_type == "pre_tool_use":
            return self._tool_start(hook, base)
        if event_type == "post_tool_use":
            return self._tool_end(hook, base)
        if event_type == "stop":
            return [AgentIdleEvent(**base, reason="stop", response=hook.response)]
        if event_type == "subagent_stop":
            return [AgentIdleEvent(**base, reason="subagent_stop")]
        if event_type == "session_start":
            return [AgentStartEvent(**base, trigger=map_start_source(hook.source))]
        if event_type == "session_end":
            return [AgentEndEvent(**base, reason=hook.reason)]
        if event_type == "user_prompt_submit":
            return [UserInputEvent(**base, text=hook.prompt or "")]
        if event_type == "notification":
            return [NotificationEvent(**base, message=hook.message or "", level="info")]
        if event_type == "pre_compact":
            # Compaction is internal processing
            return [AgentThinkingEvent(**base, metadata={"trigger": hook.trigger})]
        return []

    def _tool_info(self, hook: ClaudeHookPayload) -> ToolInfo:
        return ToolInfo(
            name=hook.tool,
            category=self.categorize(hook.tool),
            id=hook.tool_use_id or _fallback_tool_use_id(hook),
        )

    def _tool_start(self, hook: ClaudeHookPayload, base: dict[str, Any]) -> list[AgentEvent]:
        if not hook.tool:
            return []
        tool_input = hook.tool_input or {}
        tool = self._tool_info(hook)

        if hook.tool != DELEGATE_TOOL_NAME:
            return [
                ToolStartEvent(
                    **base,
                    tool=tool,
                    input=tool_input,
                    context=extract_context(hook.tool, tool_input),
                )
            ]

        # A delegate call is both a tool action at the originating station
        # and the birth of a sub-agent.
        tool_start = ToolStartEvent(
            **{**base, "id": base["id"] + TOOL_EVENT_ID_SUFFIX},
            tool=tool,
            input=tool_input,
            context=extract_context(hook.tool, tool_input),
        )
        spawn = SubagentSpawnEvent(
            **base,
            parent_agent_id=hook.session_id,
            description=_task_context(tool_input),
            tool_use_id=tool.id,
        )
        return [tool_start, spawn]

    def _tool_end(self, hook: ClaudeHookPayload, base: dict[str, Any]) -> list[AgentEvent]:
        if not hook.tool:
            return []
        tool = self._tool_info(hook)

        if hook.tool != DELEGATE_TOOL_NAME:
            return [
                ToolEndEvent(
                    **base,
                    tool=tool,
                    success=hook.success,
                    duration=hook.duration,
                    output=_tool_output(hook.tool_response),
                )
            ]

        tool_end = ToolEndEvent(
            **{**base, "id": base["id"] + TOOL_EVENT_ID_SUFFIX},
            tool=tool,
            success=hook.success,
            duration=hook.duration,
        )
        end = SubagentEndEvent(**base, tool_use_id=tool.id)
        return [tool_end, end]


def _fallback_tool_use_id(hook: ClaudeHookPayload) -> str:
    # Shared by the pre and post hooks of one invocation so they still pair up
    return f"{hook.session_id}:{hook.tool}"


def _tool_output(response: Any) -> dict[str, Any] | None:
    if response is None or response == "":
        return None
    if isinstance(response, dict):
        return response
    return {"result": response}
