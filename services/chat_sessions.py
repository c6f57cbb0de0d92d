"""Coach chat session helpers.

Sessions and messages are frozen models; every update returns new objects
and leaves the input collection untouched.
"""

import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from core.exceptions import NotFoundError
from schemas.chat_schema import ChatMessage, ChatRole, ChatSession


def new_message(role: ChatRole, content: str, now: Optional[datetime] = None) -> ChatMessage:
    return ChatMessage(
        id=f"msg_{uuid.uuid4().hex[:12]}",
        role=role,
        content=content,
        timestamp=now or datetime.utcnow(),
    )


def start_session(user_id: str, now: Optional[datetime] = None) -> ChatSession:
    now = now or datetime.utcnow()
    return ChatSession(id=f"chat_{uuid.uuid4().hex[:12]}", user_id=user_id, messages=[], created_at=now, updated_at=now)


def with_messages(session: ChatSession, messages: Iterable[ChatMessage], now: Optional[datetime] = None) -> ChatSession:
    """Copy of `session` with `messages` appended and `updated_at` refreshed."""
    return session.model_copy(update={
        "messages": list(session.messages) + list(messages),
        "updated_at": now or datetime.utcnow(),
    })


def append_messages(
    sessions: Iterable[ChatSession],
    session_id: str,
    messages: Iterable[ChatMessage],
    now: Optional[datetime] = None,
) -> List[ChatSession]:
    """New session list in which only `session_id` carries the extra messages.

    Raises:
        NotFoundError: If no session has `session_id`.
    """
    sessions = list(sessions)
    if not any(s.id == session_id for s in sessions):
        raise NotFoundError("ChatSession", session_id)
    messages = list(messages)
    return [with_messages(s, messages, now) if s.id == session_id else s for s in sessions]


def recent_assistant_turns(messages: Iterable[ChatMessage], limit: int = 5) -> List[str]:
    """Text of the last `limit` assistant messages, oldest first."""
    turns = [m.content for m in messages if m.role == ChatRole.ASSISTANT]
    return turns[-limit:] if limit > 0 else []
