from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from vibecraft.errors import DuplicateToolInvocationError
from vibecraft.services.hub import EventHub, IngestResult

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


def get_hub(request: Request) -> EventHub:
    return request.app.state.hub


def _dispatch(ingest, raw: Any) -> IngestResult:
    try:
        return ingest(raw)
    except DuplicateToolInvocationError as e:
        logger.warning(str(e))
        raise HTTPException(409, str(e))


@router.post("/v2/event")
async def post_event(raw: Any = Body(...), hub: EventHub = Depends(get_hub)):
    """Accept an event already in canonical form; id/timestamp are optional."""
    result = _dispatch(hub.ingest_canonical, raw)
    if not result.recognized or not result.events:
        raise HTTPException(400, "Invalid event")
    return {"ok": True, "events": result.dispatched}


@router.post("/event")
async def post_legacy_event(raw: Any = Body(...), hub: EventHub = Depends(get_hub)):
    """Accept a raw event in any supported format and auto-detect it."""
    result = _dispatch(hub.ingest, raw)
    if not result.recognized:
        raise HTTPException(400, "Unrecognized event format")
    return {"ok": True, "events": result.dispatched}
