"""Schemas for coach chat messages and sessions."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    model_config = {"frozen": True}

    id: str
    role: ChatRole
    content: str
    timestamp: datetime


class ChatSession(BaseModel):
    """An ordered conversation owned by one user."""

    model_config = {"frozen": True}

    id: str
    user_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CoachRequest(BaseModel):
    message: str = Field(..., min_length=1, examples=["How much protein should I eat after a workout?"])
    session_id: Optional[str] = Field(None, description="Continue this session; a new one is started when omitted")


class CoachResponse(BaseModel):
    session_id: str
    reply: ChatMessage
