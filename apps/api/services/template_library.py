"""Read access to the exercise library and to saved workout templates."""

from typing import List
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from core.exceptions import NotFoundError
from models import WorkoutTemplate, WorkoutTemplateExercise
from schemas import TemplateExerciseResponse, TemplateResponse


def list_templates(db: Session, user_id: UUID) -> List[WorkoutTemplate]:
    return (
        db.query(WorkoutTemplate)
        .options(selectinload(WorkoutTemplate.exercises).selectinload(WorkoutTemplateExercise.exercise))
        .filter(WorkoutTemplate.user_id == user_id)
        .order_by(WorkoutTemplate.created_at.desc(), WorkoutTemplate.id.desc())
        .all()
    )


def get_template(db: Session, user_id: UUID, template_id: int) -> WorkoutTemplate:
    """A template the user owns, or any public one."""
    template = (
        db.query(WorkoutTemplate)
        .options(selectinload(WorkoutTemplate.exercises).selectinload(WorkoutTemplateExercise.exercise))
        .filter(
            WorkoutTemplate.id == template_id,
            or_(WorkoutTemplate.user_id == user_id, WorkoutTemplate.is_public.is_(True)),
        )
        .first()
    )
    if not template:
        raise NotFoundError("Template", template_id)
    return template


def to_template_response(template: WorkoutTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description,
        difficulty=template.difficulty,
        category=template.category,
        is_public=template.is_public,
        exercises=[
            TemplateExerciseResponse(
                id=e.id,
                exercise_id=e.exercise_id,
                exercise_slug=e.exercise.slug if e.exercise else None,
                exercise_name=e.exercise.name if e.exercise else None,
                order_index=e.order_index,
                default_sets=e.default_sets,
                default_reps=e.default_reps,
                default_rest_seconds=e.default_rest_seconds,
                notes=e.notes,
            )
            for e in template.exercises
        ],
    )
