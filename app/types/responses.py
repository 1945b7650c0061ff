from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class AgentResponse(BaseModel):
    """Exactly one of ``response`` or ``error`` is set."""

    response: Optional[str] = Field(default=None, description="Aggregated agent reply")
    error: Optional[str] = Field(default=None, description="Human-readable failure")
    kind: Optional[str] = Field(default=None, description="Failure category when error is set")

    @classmethod
    def failure(cls, message: str, kind: str) -> "AgentResponse":
        return cls(error=message, kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None


class ValidateKeysResponse(BaseModel):
    valid: bool = Field(description="Whether the credentials passed all checks")
    error: Optional[str] = Field(default=None, description="Rejection reason")
    message: Optional[str] = Field(default=None, description="Confirmation text")


class AgentStatusResponse(BaseModel):
    message: str = Field(description="Static status text")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthResponse(BaseModel):
    status: str = Field(description="healthy while the process serves requests")
    cached_agents: int = Field(description="Agent handles retained by the session cache")
    default_network: str = Field(description="Network used when a request names none")
    model: str = Field(description="Model bound to new agents")
