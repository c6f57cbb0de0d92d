"""Tests for immutable chat session updates."""

from datetime import datetime

import pytest

from core.exceptions import NotFoundError
from schemas.chat_schema import ChatRole
from services.chat_sessions import append_messages, new_message, recent_assistant_turns, start_session

T0 = datetime(2026, 6, 1, 9, 0)
T1 = datetime(2026, 6, 1, 9, 5)


def test_append_replaces_only_the_target_session():
    first = start_session("u1", now=T0)
    second = start_session("u1", now=T0)
    sessions = [first, second]
    reply = new_message(ChatRole.ASSISTANT, "Hello!", now=T1)

    updated = append_messages(sessions, second.id, [reply], now=T1)

    assert sessions == [first, second]
    assert second.messages == []
    assert updated[0] is first
    assert updated[1].messages == [reply]
    assert updated[1].updated_at == T1
    assert updated[1].created_at == T0


def test_append_to_unknown_session_raises():
    with pytest.raises(NotFoundError):
        append_messages([start_session("u1")], "chat_missing", [])


def test_recent_assistant_turns_keeps_last_five_assistant_messages():
    messages = []
    for n in range(7):
        messages.append(new_message(ChatRole.USER, f"q{n}"))
        messages.append(new_message(ChatRole.ASSISTANT, f"a{n}"))
    assert recent_assistant_turns(messages) == ["a2", "a3", "a4", "a5", "a6"]
    assert recent_assistant_turns(messages, limit=0) == []
