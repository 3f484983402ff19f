"""Constants for the event protocol layer.

Single source of truth for magic numbers and identifiers shared by the
adapters, the hub and the client SDK.
"""

# ---------------------------------------------------------------------------
# Native framework
# ---------------------------------------------------------------------------
CLAUDE_CODE_SOURCE = "claude-code"
DELEGATE_TOOL_NAME = "Task"
MCP_TOOL_PREFIX = "mcp__"
TOOL_EVENT_ID_SUFFIX = "_tool"

# ---------------------------------------------------------------------------
# Context strings
# ---------------------------------------------------------------------------
CONTEXT_MAX_CHARS = 30
CONTEXT_ELLIPSIS = "..."
PLAN_CONTEXT_LABEL = "Updating tasks"

# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------
AGENT_ID_LENGTH = 12
DEFAULT_SDK_SOURCE = "custom"
DEFAULT_SERVER_URL = "http://localhost:4003"
SDK_REQUEST_TIMEOUT_SECONDS = 10.0
