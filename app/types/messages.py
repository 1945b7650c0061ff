from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    USER = "user"
    AGENT = "agent"


class ChatMessage(BaseModel):
    """One line of the client-side transcript."""

    model_config = ConfigDict(frozen=True)

    sender: Sender = Field(description="Who wrote the message")
    text: str = Field(description="Message text (markdown for agent replies)")
