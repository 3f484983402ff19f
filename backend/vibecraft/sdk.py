"""Minimal client for agents reporting activity to a Vibecraft server.

Sends canonical events over HTTP::

    async with VibecraftClient("http://localhost:4003") as client:
        await client.register("My Agent", "custom")
        await client.tool_start(name="readFile", category="read", id="tool-1")
        await client.tool_end(name="readFile", category="read", id="tool-1", success=True)
        await client.idle()
"""

from __future__ import annotations

from typing import Any

import httpx

from vibecraft.constants import (
    DEFAULT_SDK_SOURCE,
    DEFAULT_SERVER_URL,
    SDK_REQUEST_TIMEOUT_SECONDS,
)
from vibecraft.errors import ClientError
from vibecraft.protocol.categories import ToolCategory, coerce_category
from vibecraft.protocol.events import new_event_id, now_ms


class VibecraftClient:
    def __init__(
        self,
        url: str = DEFAULT_SERVER_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=SDK_REQUEST_TIMEOUT_SECONDS)
        self.agent_id: str | None = None
        self.source: str = DEFAULT_SDK_SOURCE

    async def __aenter__(self) -> VibecraftClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def register(
        self,
        name: str,
        framework: str,
        metadata: dict[str, Any] | None = None,
        cwd: str | None = None,
    ) -> str:
        """Register with the server and return the assigned agent id."""
        self.source = framework
        body: dict[str, Any] = {"name": name, "framework": framework}
        if metadata is not None:
            body["metadata"] = metadata
        if cwd is not None:
            body["cwd"] = cwd

        data = await self._post("/v2/agents/register", body)
        self.agent_id = data["agent"]["agentId"]
        return self.agent_id

    def set_agent_id(self, agent_id: str, source: str = DEFAULT_SDK_SOURCE) -> None:
        """Use a known agent id instead of registering."""
        self.agent_id = agent_id
        self.source = source

    # ── Events ──────────────────────────────────────────────────

    async def tool_start(
        self,
        name: str,
        category: ToolCategory | str,
        id: str,
        input: dict[str, Any] | None = None,
        context: str | None = None,
    ) -> None:
        await self._send(
            {
                "type": "tool_start",
                "tool": _tool(name, category, id),
                "input": input,
                "context": context,
            }
        )

    async def tool_end(
        self,
        name: str,
        category: ToolCategory | str,
        id: str,
        success: bool,
        duration: int | None = None,
        output: dict[str, Any] | None = None,
    ) -> None:
        await self._send(
            {
                "type": "tool_end",
                "tool": _tool(name, category, id),
                "success": success,
                "duration": duration,
                "output": output,
            }
        )

    async def idle(self, reason: str | None = None, response: str | None = None) -> None:
        await self._send({"type": "agent_idle", "reason": reason, "response": response})

    async def thinking(self) -> None:
        await self._send({"type": "agent_thinking"})

    async def user_input(self, text: str) -> None:
        await self._send({"type": "user_input", "text": text})

    async def start(self, trigger: str | None = None) -> None:
        await self._send({"type": "agent_start", "trigger": trigger})

    async def end(self, reason: str | None = None) -> None:
        await self._send({"type": "agent_end", "reason": reason})

    async def notify(self, message: str, level: str | None = None) -> None:
        await self._send({"type": "notification", "message": message, "level": level})

    async def subagent_spawn(self, tool_use_id: str, description: str | None = None) -> None:
        await self._send(
            {
                "type": "subagent_spawn",
                "parentAgentId": self._require_agent_id(),
                "description": description,
                "toolUseId": tool_use_id,
            }
        )

    async def subagent_end(self, tool_use_id: str) -> None:
        await self._send({"type": "subagent_end", "toolUseId": tool_use_id})

    # ── Internal ────────────────────────────────────────────────

    def _require_agent_id(self) -> str:
        if not self.agent_id:
            raise ClientError("Agent not registered. Call register() or set_agent_id() first.")
        return self.agent_id

    async def _send(self, partial: dict[str, Any]) -> None:
        event = {k: v for k, v in partial.items() if v is not None}
        event.update(
            id=new_event_id(),
            timestamp=now_ms(),
            agentId=self._require_agent_id(),
            source=self.source,
        )
        await self._post("/v2/event", event)

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(f"{self.base_url}{path}", json=body)
        except httpx.HTTPError as e:
            raise ClientError(f"Request to {path} failed: {e}") from e
        if response.is_error:
            raise ClientError(
                f"Request to {path} failed: {response.status_code} {response.reason_phrase}"
            )
        return response.json()


def _tool(name: str, category: ToolCategory | str, id: str) -> dict[str, str]:
    return {"name": name, "category": coerce_category(category).value, "id": id}
