from __future__ import annotations

import json
import uuid

from vibecraft.constants import AGENT_ID_LENGTH
from vibecraft.db import get_db
from vibecraft.protocol.events import now_ms
from vibecraft.protocol.registration import AgentRegistration, RegisteredAgent


def _from_row(row) -> RegisteredAgent:
    return RegisteredAgent(
        agent_id=row["agent_id"],
        name=row["name"],
        framework=row["framework"],
        cwd=row["cwd"],
        metadata=json.loads(row["metadata"]) if row["metadata"] else None,
        registered_at=row["registered_at"],
    )


async def register_agent(registration: AgentRegistration) -> RegisteredAgent:
    agent = RegisteredAgent(
        agent_id=uuid.uuid4().hex[:AGENT_ID_LENGTH],
        name=registration.name,
        framework=registration.framework,
        cwd=registration.cwd,
        metadata=registration.metadata,
        registered_at=now_ms(),
    )

    db = await get_db()
    try:
        await db.execute(
            """INSERT INTO agents (agent_id, name, framework, cwd, metadata, registered_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (agent.agent_id, agent.name, agent.framework, agent.cwd,
             json.dumps(agent.metadata) if agent.metadata is not None else None,
             agent.registered_at),
        )
        await db.commit()
    finally:
        await db.close()

    return agent


async def get_agent(agent_id: str) -> RegisteredAgent | None:
    db = await get_db()
    try:
        cursor = await db.execute("SELECT * FROM agents WHERE agent_id = ?", (agent_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return _from_row(row)
    finally:
        await db.close()


async def list_agents() -> list[RegisteredAgent]:
    db = await get_db()
    try:
        cursor = await db.execute("SELECT * FROM agents ORDER BY registered_at DESC")
        rows = await cursor.fetchall()
        return [_from_row(r) for r in rows]
    finally:
        await db.close()
