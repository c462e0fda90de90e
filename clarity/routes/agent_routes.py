from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..agent import Agent
from ..ai import GenerationUnavailable
from ..deps import get_agent
from ..models import AgentRequest, AgentResponse

log = logging.getLogger("clarity.routes.agent")
router = APIRouter(prefix="/api", tags=["agent"])


@router.post("/agent", response_model=AgentResponse)
def ask_agent(req: AgentRequest, agent: Agent = Depends(get_agent)):
    log.info(
        "agent message chars=%d history=%d location=%s",
        len(req.message), len(req.conversation_history or []), bool(req.location),
    )
    try:
        return agent.respond(req)
    except GenerationUnavailable as e:
        log.error("agent failed cause=%s", e.last_error)
        return JSONResponse(status_code=500, content={"success": False, "error": "Agent failed"})
