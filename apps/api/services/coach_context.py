"""
Coach Context Builder

Renders what the coach should know about a user into a short Markdown
document: profile, recent workouts with per-exercise summaries, saved
templates and personal records. Rebuilt for every chat message, never stored.
"""

import logging
import math
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from models import Exercise, PersonalRecord, User, Workout, WorkoutTemplate

logger = logging.getLogger(__name__)

RECENT_WORKOUT_LIMIT = 7
TEMPLATE_LIMIT = 5
PERSONAL_RECORD_LIMIT = 10

CONTEXT_UNAVAILABLE = "Unable to retrieve user data."
PROFILE_NOT_FOUND = "User profile not found."
NO_WORKOUTS = "No workouts recorded yet."


def round_half_up(value: float) -> int:
    # round() is banker's rounding; 2.5 reps must read as 3
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """60.0 -> '60', 62.5 -> '62.5'."""
    return f"{value:g}"


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "unknown date"
    return f"{value.month}/{value.day}/{value.year}"


def summarize_exercise(exercise: Exercise) -> str:
    """One bullet: set count, mean reps, and first-set weight when loaded."""
    sets = exercise.sets or []
    set_count = len(sets)
    avg_reps = round_half_up(sum((s.get("reps") or 0) for s in sets) / set_count) if set_count else 0
    weight = (sets[0].get("weight") or 0) if sets else 0

    line = f"  - {exercise.name}: {set_count} sets x {avg_reps} reps"
    if weight > 0:
        line += f" @ {format_number(weight)}kg"
    return line


def summarize_workout(workout: Workout, exercises: List[Exercise]) -> str:
    details = []
    if workout.duration:
        details.append(f"{max(1, round_half_up(workout.duration / 60))} min")
    if workout.total_volume:
        details.append(f"Volume: {format_number(workout.total_volume)}")

    header = f"{workout.name} ({format_date(workout.date)})"
    if details:
        header += ": " + ", ".join(details)
    return "\n".join([header] + [summarize_exercise(e) for e in exercises])


def _profile_section(user: User) -> str:
    return (
        "## User Profile\n"
        f"- Display Name: {user.display_name or 'Not set'}\n"
        f"- Current Level: {user.current_level or 'Beginner'}\n"
        f"- Current Streak: {user.streak or 0} days\n"
        f"- Member since: {format_date(user.created_at)}\n"
    )


def _load_exercises(db: Session, workout_ids: List[int]) -> Dict[int, List[Exercise]]:
    grouped: Dict[int, List[Exercise]] = defaultdict(list)
    if not workout_ids:
        return grouped
    rows = (
        db.query(Exercise)
        .filter(Exercise.workout_id.in_(workout_ids))
        .order_by(Exercise.workout_id, Exercise.order)
        .all()
    )
    for row in rows:
        grouped[row.workout_id].append(row)
    return grouped


def _render_context(db: Session, user_id: UUID) -> str:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return PROFILE_NOT_FOUND

    workouts = (
        db.query(Workout)
        .filter(Workout.user_id == user_id)
        .order_by(Workout.date.desc())
        .limit(RECENT_WORKOUT_LIMIT)
        .all()
    )
    exercises_by_workout = _load_exercises(db, [w.id for w in workouts])

    templates = (
        db.query(WorkoutTemplate)
        .filter(WorkoutTemplate.user_id == user_id)
        .order_by(WorkoutTemplate.created_at.desc(), WorkoutTemplate.id.desc())
        .limit(TEMPLATE_LIMIT)
        .all()
    )
    records = (
        db.query(PersonalRecord)
        .filter(PersonalRecord.user_id == user_id)
        .order_by(PersonalRecord.achieved_at.desc())
        .limit(PERSONAL_RECORD_LIMIT)
        .all()
    )

    sections = [_profile_section(user)]

    if workouts:
        summaries = "\n\n".join(
            summarize_workout(w, exercises_by_workout.get(w.id, [])) for w in workouts
        )
        sections.append(f"## Recent Workouts (Last {len(workouts)})\n{summaries}\n")
    else:
        sections.append(f"## Recent Workouts\n{NO_WORKOUTS}\n")

    if templates:
        lines = [
            f"- {t.name}: {t.description}" if t.description else f"- {t.name}"
            for t in templates
        ]
        sections.append("## Saved Workout Templates\n" + "\n".join(lines) + "\n")

    if records:
        lines = [f"- {r.exercise_name}: {format_number(r.value)}" for r in records]
        sections.append("## Personal Records\n" + "\n".join(lines) + "\n")

    return "\n".join(sections)


def build_user_context(db: Session, user_id: UUID) -> str:
    """
    Build the coach's view of a user.

    Never raises: a data-access failure degrades the chat to a context-free
    answer instead of failing the request.
    """
    try:
        return _render_context(db, user_id)
    except Exception:
        logger.exception(
            "Error building user context",
            extra={"extra_fields": {"user_id": str(user_id)}},
        )
        return CONTEXT_UNAVAILABLE
