"""
Workout logging.

Workouts own an ordered list of exercises; each exercise stores its sets as
a JSON list of {reps, weight, rpe, completed}.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from core.exceptions import NotFoundError
from models import Exercise, Workout, WorkoutTemplate
from schemas import ExerciseCreate, WorkoutCreate, WorkoutSet, WorkoutUpdate

logger = logging.getLogger(__name__)

# Sets created when a template is started; the user edits them while training.
TEMPLATE_SET_RPE = 7


def compute_total_volume(exercises: Iterable[ExerciseCreate]) -> float:
    """Sum of reps x weight over completed sets only."""
    total = 0.0
    for exercise in exercises:
        for s in exercise.sets:
            if s.completed:
                total += s.reps * (s.weight or 0)
    return total


def _build_exercises(exercises: List[ExerciseCreate]) -> List[Exercise]:
    return [
        Exercise(
            name=e.name,
            order=e.order if e.order is not None else index,
            sets=[s.model_dump() for s in e.sets],
        )
        for index, e in enumerate(exercises)
    ]


def create_workout(db: Session, user_id: UUID, payload: WorkoutCreate) -> Workout:
    total_volume = payload.total_volume
    if total_volume is None:
        total_volume = compute_total_volume(payload.exercises)

    workout = Workout(
        user_id=user_id,
        name=payload.name,
        date=payload.date or datetime.now(timezone.utc),
        duration=payload.duration,
        total_volume=total_volume,
        notes=payload.notes,
    )
    workout.exercises = _build_exercises(payload.exercises)
    db.add(workout)
    db.commit()
    db.refresh(workout)
    logger.info(
        "Workout logged",
        extra={"extra_fields": {"user_id": str(user_id), "workout_id": workout.id}},
    )
    return workout


def list_workouts(db: Session, user_id: UUID, limit: Optional[int] = None) -> List[Workout]:
    query = (
        db.query(Workout)
        .options(selectinload(Workout.exercises))
        .filter(Workout.user_id == user_id)
        .order_by(Workout.date.desc(), Workout.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return query.all()


def get_workout(db: Session, user_id: UUID, workout_id: int) -> Workout:
    """A workout owned by ``user_id``; other users' workouts look absent."""
    workout = (
        db.query(Workout)
        .options(selectinload(Workout.exercises))
        .filter(Workout.id == workout_id, Workout.user_id == user_id)
        .first()
    )
    if not workout:
        raise NotFoundError("Workout", workout_id)
    return workout


def update_workout(db: Session, user_id: UUID, workout_id: int, payload: WorkoutUpdate) -> Workout:
    workout = get_workout(db, user_id, workout_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"exercises"})
    for field_name, value in changes.items():
        if field_name == "name" and value is None:
            continue
        setattr(workout, field_name, value)

    if payload.exercises is not None:
        workout.exercises = _build_exercises(payload.exercises)
        if "total_volume" not in changes:
            workout.total_volume = compute_total_volume(payload.exercises)

    db.commit()
    db.refresh(workout)
    return workout


def start_workout_from_template(db: Session, user_id: UUID, template: WorkoutTemplate) -> Workout:
    """New workout pre-filled with the template's default sets and reps."""
    exercises = [
        ExerciseCreate(
            name=entry.exercise.name if entry.exercise else f"Exercise {entry.exercise_id}",
            order=entry.order_index,
            sets=[
                WorkoutSet(reps=entry.default_reps, weight=0, rpe=TEMPLATE_SET_RPE, completed=False)
                for _ in range(entry.default_sets)
            ],
        )
        for entry in template.exercises
    ]
    return create_workout(
        db,
        user_id,
        WorkoutCreate(name=template.name, exercises=exercises, total_volume=0),
    )
