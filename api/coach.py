"""Coach chat API router.

Each call appends the user's message and the coach's reply to a stored
session. The reply is always an assistant message; failures turn into the
apology text.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_write
from database.repositories import ChatSessionRepository, ProfileRepository
from schemas.chat_schema import ChatRole, CoachRequest, CoachResponse
from services.ai_orchestrator import MAX_CONTEXT_TURNS, AIOrchestrator, get_orchestrator
from services.chat_sessions import new_message, recent_assistant_turns, start_session, with_messages

logger = get_logger("api.coach")
router = APIRouter(prefix="/api", tags=["coach"])


@router.post("/profiles/{profile_id}/coach", response_model=CoachResponse)
async def coach_reply(
    profile_id: str,
    payload: CoachRequest,
    db: Session = Depends(get_db_write),
    orchestrator: AIOrchestrator = Depends(get_orchestrator),
):
    """Answer a coaching question within a chat session.

    Raises:
        NotFoundError: If the profile or the given session does not exist.
    """
    profile = ProfileRepository(db).get(profile_id)
    sessions = ChatSessionRepository(db)
    chat = sessions.get(payload.session_id, profile_id) if payload.session_id else start_session(profile_id)

    question = new_message(ChatRole.USER, payload.message)
    reply_text = await orchestrator.get_coach_reply(
        payload.message,
        profile=profile,
        recent_assistant_turns=recent_assistant_turns(chat.messages, MAX_CONTEXT_TURNS),
    )
    reply = new_message(ChatRole.ASSISTANT, reply_text)
    chat = sessions.store(with_messages(chat, [question, reply]))
    logger.info("Coach session %s now holds %s messages", chat.id, len(chat.messages))
    return CoachResponse(session_id=chat.id, reply=reply)
