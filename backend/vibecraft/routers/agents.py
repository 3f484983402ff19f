from __future__ import annotations

from fastapi import APIRouter, HTTPException

from vibecraft.protocol.registration import AgentRegistration
from vibecraft.services import agents as agent_svc

router = APIRouter(prefix="/v2/agents", tags=["agents"])


@router.post("/register")
async def register_agent(body: AgentRegistration):
    agent = await agent_svc.register_agent(body)
    return {"ok": True, "agent": agent.model_dump(by_alias=True, exclude_none=True)}


@router.get("")
async def list_agents():
    agents = await agent_svc.list_agents()
    return [a.model_dump(by_alias=True, exclude_none=True) for a in agents]


@router.get("/{agent_id}")
async def get_agent(agent_id: str):
    agent = await agent_svc.get_agent(agent_id)
    if agent is None:
        raise HTTPException(404, "Agent not found")
    return agent.model_dump(by_alias=True, exclude_none=True)
