from fastapi import APIRouter, Depends

from ..cache import AgentSessionCache
from ..config import settings
from ..types import HealthResponse
from .deps import get_session_cache

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def health_check(cache: AgentSessionCache = Depends(get_session_cache)) -> HealthResponse:
    """Liveness plus the number of agents held by the session cache"""
    summary = settings.summary()
    return HealthResponse(
        status="healthy",
        cached_agents=cache.size(),
        default_network=summary["default_network"],
        model=summary["model"],
    )
