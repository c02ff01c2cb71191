"""
Canned coach suggestions.

Deterministic keyword heuristics, not model output: follow-ups after a chat
reply, and conversation starters for an empty chat.
"""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from models import Workout

MAX_FOLLOW_UPS = 3

# (keywords, suggestions) in priority order
FOLLOW_UP_BUCKETS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (
        ("workout", "exercise"),
        (
            "What's the best progression for this exercise?",
            "How often should I train this?",
        ),
    ),
    (
        ("form", "technique"),
        (
            "What are common mistakes to avoid?",
            "Can you suggest some drills to improve my form?",
        ),
    ),
    (
        ("goal", "progress"),
        (
            "Create a weekly training plan for me",
            "What milestones should I aim for?",
        ),
    ),
)

DEFAULT_FOLLOW_UPS = (
    "What should I focus on next?",
    "Can you analyze my recent workouts?",
    "Suggest a workout for today",
)

STARTERS_WITH_HISTORY = (
    "Analyze my recent workouts and suggest improvements",
    "What should I focus on in my next workout?",
    "Help me create a weekly training plan",
    "What progressions should I work on?",
)

STARTERS_NEW_USER = (
    "I'm new to calisthenics, where should I start?",
    "What's a good beginner workout routine?",
    "How do I do a proper push-up?",
    "What equipment do I need for calisthenics?",
)


def suggest_follow_ups(message: str) -> List[str]:
    """Up to three follow-up prompts chosen from the user's own message."""
    lowered = (message or "").lower()
    suggestions: List[str] = []
    for keywords, bucket in FOLLOW_UP_BUCKETS:
        if any(k in lowered for k in keywords):
            suggestions.extend(bucket)

    if not suggestions:
        suggestions.extend(DEFAULT_FOLLOW_UPS)
    return suggestions[:MAX_FOLLOW_UPS]


def conversation_starters(db: Session, user_id: UUID) -> List[str]:
    has_workouts = db.query(Workout.id).filter(Workout.user_id == user_id).first() is not None
    return list(STARTERS_WITH_HISTORY if has_workouts else STARTERS_NEW_USER)
