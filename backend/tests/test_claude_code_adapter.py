"""Tests for the Claude Code hook adapter.

Covers detection, the two categorization tiers, context extraction and the
hook -> canonical event translation, including the delegate tool that turns
into two events.
"""

from __future__ import annotations

import pytest

from vibecraft.adapters.claude_code import (
    ClaudeCodeAdapter,
    categorize_mcp_tool,
    extract_context,
    map_start_source,
)
from vibecraft.protocol.categories import (
    ToolCategory,
    get_icon_for_category,
    get_sound_for_category,
    get_station_for_category,
)
from vibecraft.protocol.events import (
    AgentEndEvent,
    AgentIdleEvent,
    AgentStartEvent,
    AgentThinkingEvent,
    NotificationEvent,
    SubagentEndEvent,
    SubagentSpawnEvent,
    ToolEndEvent,
    ToolStartEvent,
    UserInputEvent,
    to_wire,
)

# Documented direct table for the built-in tools
KNOWN_TOOLS = {
    "Read": "read",
    "Write": "write",
    "Edit": "edit",
    "Bash": "execute",
    "Grep": "search",
    "Glob": "search",
    "WebFetch": "network",
    "WebSearch": "network",
    "Task": "delegate",
    "TodoWrite": "plan",
    "AskUserQuestion": "interact",
    "NotebookEdit": "edit",
}


@pytest.fixture
def adapter() -> ClaudeCodeAdapter:
    return ClaudeCodeAdapter()


def hook(event_type: str, **fields) -> dict:
    return {"type": event_type, "sessionId": "s1", **fields}


# ── 1. Detection ────────────────────────────────────────────────


def test_can_handle_hook_events(adapter):
    for event_type in (
        "pre_tool_use", "post_tool_use", "stop", "subagent_stop",
        "session_start", "session_end", "user_prompt_submit",
        "notification", "pre_compact",
    ):
        assert adapter.can_handle(hook(event_type))


def test_can_handle_requires_session_id(adapter):
    assert not adapter.can_handle({"type": "pre_tool_use"})
    assert not adapter.can_handle({"type": "pre_tool_use", "sessionId": ""})


def test_can_handle_rejects_foreign_types(adapter):
    assert not adapter.can_handle(hook("tool_start"))
    assert not adapter.can_handle(hook(["pre_tool_use"]))


# ── 2. Categorization ───────────────────────────────────────────


def test_known_tools_use_direct_table(adapter):
    for name, category in KNOWN_TOOLS.items():
        assert adapter.categorize(name) == ToolCategory(category), name


def test_mcp_heuristics_in_priority_order(adapter):
    assert adapter.categorize("mcp__playwright__browser_click") == ToolCategory.INTERACT
    assert adapter.categorize("mcp__github__search_issues") == ToolCategory.SEARCH
    assert adapter.categorize("mcp__slack__fetch_messages") == ToolCategory.NETWORK
    assert adapter.categorize("mcp__fs__read_file") == ToolCategory.READ
    assert adapter.categorize("mcp__notes__create_note") == ToolCategory.WRITE
    assert adapter.categorize("mcp__tracker__modify_ticket") == ToolCategory.EDIT
    assert adapter.categorize("mcp__db__run_migration") == ToolCategory.EXECUTE


def test_earlier_heuristic_rule_wins():
    # Contains both "search" and "read"; the search rule is checked first
    assert categorize_mcp_tool("mcp__docs__search_and_read") == ToolCategory.SEARCH


def test_heuristics_only_apply_to_mcp_tools(adapter):
    assert adapter.categorize("SearchEverything") == ToolCategory.OTHER


def test_unknown_mcp_tool_documented_fallback(adapter):
    category = adapter.categorize("mcp__custom__foo")
    assert category == ToolCategory.OTHER
    assert get_station_for_category(category) == "center"
    assert get_sound_for_category(category) == "read"
    assert get_icon_for_category(category) == "\U0001F527"


def test_categorize_never_raises(adapter):
    assert adapter.categorize("") == ToolCategory.OTHER
    assert adapter.categorize(None) == ToolCategory.OTHER


# ── 3. Context extraction ───────────────────────────────────────


def test_file_tools_use_base_name():
    assert extract_context("Read", {"file_path": "/a/b.txt"}) == "b.txt"
    assert extract_context("NotebookEdit", {"notebook_path": "/n/x.ipynb"}) == "x.ipynb"
    assert extract_context("Write", {"file_path": "plain.md"}) == "plain.md"


def test_bash_uses_truncated_first_line():
    assert extract_context("Bash", {"command": "ls -la\necho done"}) == "ls -la"
    long = "x" * 40
    assert extract_context("Bash", {"command": long}) == "x" * 30 + "..."
    assert extract_context("Bash", {"command": "y" * 30}) == "y" * 30


def test_search_and_network_context():
    assert extract_context("Grep", {"pattern": "TODO"}) == "/TODO/"
    assert extract_context("Glob", {"pattern": "**/*.py"}) == "**/*.py"
    assert extract_context("WebFetch", {"url": "https://example.com/a/b"}) == "example.com"
    assert extract_context("WebFetch", {"url": "not a url"}) == "not a url"
    assert extract_context("WebSearch", {"query": "pydantic"}) == '"pydantic"'


def test_plan_and_delegate_context():
    assert extract_context("TodoWrite", {}) == "Updating tasks"
    assert extract_context("Task", {"description": "review"}) == "review"


def test_missing_values_give_no_context():
    assert extract_context("Read", {}) is None
    assert extract_context("Bash", {"command": ""}) is None
    assert extract_context("Grep", {"pattern": 3}) is None
    assert extract_context("mcp__custom__foo", {"file_path": "/a"}) is None


def test_start_source_mapping():
    assert map_start_source("startup") == "startup"
    assert map_start_source("resume") == "resume"
    assert map_start_source("clear") == "other"
    assert map_start_source("compact") == "other"
    assert map_start_source(None) == "other"


# ── 4. Tool hooks ───────────────────────────────────────────────


def test_pre_tool_use_read(adapter):
    events = adapter.normalize(
        hook("pre_tool_use", tool="Read", toolInput={"file_path": "/a/b.txt"}, toolUseId="t1")
    )
    assert len(events) == 1
    event = events[0]
    assert isinstance(event, ToolStartEvent)
    assert event.tool.name == "Read"
    assert event.tool.category == ToolCategory.READ
    assert event.tool.id == "t1"
    assert event.context == "b.txt"
    assert event.agent_id == "s1"
    assert event.source == "claude-code"
    assert event.id and event.timestamp > 0


def test_pre_tool_use_without_context_omits_it(adapter):
    [event] = adapter.normalize(hook("pre_tool_use", tool="mcp__custom__foo", toolUseId="t9"))
    assert event.context is None
    assert "context" not in to_wire(event)


def test_delegate_tool_yields_tool_start_and_spawn(adapter):
    events = adapter.normalize(
        hook("pre_tool_use", id="e2", tool="Task", toolInput={"description": "x"}, toolUseId="t2")
    )
    assert [e.type for e in events] == ["tool_start", "subagent_spawn"]

    tool_start, spawn = events
    assert isinstance(tool_start, ToolStartEvent)
    assert tool_start.tool.category == ToolCategory.DELEGATE
    assert tool_start.id == "e2_tool"
    assert tool_start.metadata is None

    assert isinstance(spawn, SubagentSpawnEvent)
    assert spawn.id == "e2"
    assert spawn.parent_agent_id == "s1"
    assert spawn.description == "x"
    assert spawn.tool_use_id == "t2"


def test_post_tool_use(adapter):
    [event] = adapter.normalize(
        hook(
            "post_tool_use",
            tool="Bash",
            toolUseId="t3",
            success=False,
            duration=120,
            toolResponse={"stderr": "boom"},
        )
    )
    assert isinstance(event, ToolEndEvent)
    assert event.tool.category == ToolCategory.EXECUTE
    assert event.success is False
    assert event.duration == 120
    assert event.output == {"stderr": "boom"}


def test_post_tool_use_wraps_plain_response(adapter):
    [event] = adapter.normalize(hook("post_tool_use", tool="Read", toolUseId="t4", toolResponse="text"))
    assert event.output == {"result": "text"}
    assert event.success is True


def test_delegate_tool_end_yields_subagent_end(adapter):
    events = adapter.normalize(hook("post_tool_use", tool="Task", toolUseId="t2", success=True))
    assert [e.type for e in events] == ["tool_end", "subagent_end"]
    assert isinstance(events[1], SubagentEndEvent)
    assert events[1].tool_use_id == "t2"
    assert events[0].id == events[1].id + "_tool"


def test_missing_tool_use_id_is_shared_by_start_and_end(adapter):
    [start] = adapter.normalize(hook("pre_tool_use", tool="Read"))
    [end] = adapter.normalize(hook("post_tool_use", tool="Read"))
    assert start.tool.id == end.tool.id == "s1:Read"


def test_fractional_duration_is_rounded(adapter):
    [event] = adapter.normalize(hook("post_tool_use", tool="Bash", toolUseId="t5", duration=12.6))
    assert event.duration == 13
    assert isinstance(event.duration, int)


# ── 5. Lifecycle hooks ──────────────────────────────────────────


def test_stop_and_subagent_stop(adapter):
    [idle] = adapter.normalize(hook("stop", response="done"))
    assert isinstance(idle, AgentIdleEvent)
    assert idle.reason == "stop"
    assert idle.response == "done"

    [sub_idle] = adapter.normalize(hook("subagent_stop"))
    assert sub_idle.reason == "subagent_stop"


def test_session_start_and_end(adapter):
    [start] = adapter.normalize(hook("session_start", source="resume"))
    assert isinstance(start, AgentStartEvent)
    assert start.trigger == "resume"

    [cleared] = adapter.normalize(hook("session_start", source="clear"))
    assert cleared.trigger == "other"

    [end] = adapter.normalize(hook("session_end", reason="logout"))
    assert isinstance(end, AgentEndEvent)
    assert end.reason == "logout"


def test_prompt_notification_and_compaction(adapter):
    [prompt] = adapter.normalize(hook("user_prompt_submit", prompt="fix it"))
    assert isinstance(prompt, UserInputEvent)
    assert prompt.text == "fix it"

    [empty_prompt] = adapter.normalize(hook("user_prompt_submit"))
    assert empty_prompt.text == ""

    [note] = adapter.normalize(hook("notification", message="waiting"))
    assert isinstance(note, NotificationEvent)
    assert note.message == "waiting"
    assert note.level == "info"

    [thinking] = adapter.normalize(hook("pre_compact", trigger="auto"))
    assert isinstance(thinking, AgentThinkingEvent)
    assert thinking.metadata == {"trigger": "auto"}


def test_cwd_and_timestamp_carry_over(adapter):
    [event] = adapter.normalize(hook("stop", cwd="/repo", timestamp=1700000000000, id="e5"))
    assert event.cwd == "/repo"
    assert event.timestamp == 1700000000000
    assert event.id == "e5"


# ── 6. Malformed input is filtered, never raised ────────────────


def test_tool_hook_without_tool_is_filtered(adapter):
    assert adapter.normalize(hook("pre_tool_use")) == []
    assert adapter.normalize(hook("post_tool_use", tool="")) == []


def test_invalid_field_shapes_are_filtered(adapter):
    assert adapter.normalize(hook("pre_tool_use", tool="Read", toolInput="oops")) == []
    assert adapter.normalize({"type": "stop", "sessionId": 42}) == []
    assert adapter.normalize(hook("unknown_hook")) == []
