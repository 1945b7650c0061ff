from typing import Any

from fastapi import APIRouter, Depends, Request

from ..core.chat import ChatRequestHandler
from ..types import AgentResponse, AgentStatusResponse
from .deps import get_chat_handler

router = APIRouter()


async def read_json(request: Request) -> Any:
    """Body as parsed JSON, or None when it is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/agent", response_model=AgentResponse, response_model_exclude_none=True)
async def agent_endpoint(
    request: Request,
    handler: ChatRequestHandler = Depends(get_chat_handler),
) -> AgentResponse:
    """Send one message to the agent configured by the supplied API keys.

    Always answers 200; failures come back as ``{"error": ..., "kind": ...}``.
    """
    return await handler.handle(await read_json(request))


@router.get("/agent", response_model=AgentStatusResponse)
async def agent_status() -> AgentStatusResponse:
    return AgentStatusResponse(message="AgentKit API is running. Use POST to interact with the agent.")
