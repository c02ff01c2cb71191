"""
AI Coach chat.

Gemini has no separate system channel in the conversation format we send,
so the persona and the user's context go in as a synthetic first user turn,
answered by a fixed model acknowledgement, before the real conversation.
"""

import logging
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import APIException
from schemas import ChatMessage
from services.coach_context import build_user_context
from services.coach_suggestions import suggest_follow_ups
from services.completion_client import ChatTurn, CompletionClient, classify_completion_error

logger = logging.getLogger(__name__)

COACH_SYSTEM_PROMPT = """You are Calyxpert Coach, a personal calisthenics and fitness assistant.

## Your Core Principles

1. **Grounded**: Base advice on the user's logged workouts, templates and personal records below.
2. **Progressive**: Recommend progressions and regressions that match the user's current level.
3. **Safe**: Prioritise good form. Never give medical advice; refer pain or injury to a professional.
4. **Actionable**: End with something the user can do in their next session.

## Your Communication Style

- Be concise and encouraging, without sugarcoating problems
- Use the user's actual numbers (sets, reps, weights) when making a point
- Format answers with short Markdown lists where it helps
- If the data is thin, say so and ask one clarifying question"""

ACKNOWLEDGEMENT = (
    "I understand! I'm Calyxpert Coach, your personal calisthenics and fitness assistant. "
    "I've reviewed your profile and workout history, and I'm ready to help you with personalized "
    "advice, workout planning, and progression strategies. What would you like to work on today?"
)


def trim_history(history: Sequence[ChatMessage], limit: Optional[int] = None) -> List[ChatMessage]:
    """Keep only the most recent ``limit`` messages."""
    limit = settings.COACH_HISTORY_LIMIT if limit is None else limit
    if limit <= 0:
        return []
    return list(history)[-limit:]


def build_instruction_block(user_context: str) -> str:
    system_context = f"{COACH_SYSTEM_PROMPT}\n\n## Current User Context\n{user_context}"
    return (
        f"[System Instructions]\n{system_context}\n\n[End System Instructions]\n\n"
        "Please acknowledge these instructions briefly and be ready to help."
    )


def build_chat_turns(user_context: str, history: Sequence[ChatMessage], message: str) -> List[ChatTurn]:
    turns = [
        ChatTurn(role="user", text=build_instruction_block(user_context)),
        ChatTurn(role="model", text=ACKNOWLEDGEMENT),
    ]
    for msg in history:
        turns.append(ChatTurn(role="user" if msg.role == "user" else "model", text=msg.content))
    turns.append(ChatTurn(role="user", text=message))
    return turns


def chat(
    db: Session,
    client: CompletionClient,
    user_id: UUID,
    message: str,
    history: Sequence[ChatMessage],
) -> Dict[str, object]:
    """
    Answer one coach message.

    Returns ``{"reply", "suggested_follow_ups"}``; upstream failures are
    raised as APIException subclasses.
    """
    trimmed = trim_history(history)
    user_context = build_user_context(db, user_id)
    turns = build_chat_turns(user_context, trimmed, message)

    try:
        reply = client.complete(turns)
    except APIException:
        raise
    except Exception as e:
        logger.error(
            f"Coach chat error: {e}",
            exc_info=True,
            extra={"extra_fields": {"user_id": str(user_id)}},
        )
        raise classify_completion_error(e, "Failed to process chat message") from e

    return {
        "reply": reply,
        "suggested_follow_ups": suggest_follow_ups(message),
    }
