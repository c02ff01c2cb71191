"""
AI workout template generation.

Pipeline: load the exercise library -> render a prompt listing every slug ->
one low-temperature completion call -> validate the JSON answer -> check all
slugs resolve -> persist the template and its exercises in one transaction.
Nothing is written unless every check passes.
"""

import logging
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import APIException, DataIntegrityError, GenerationFailed
from models import ExerciseLibrary, WorkoutTemplate, WorkoutTemplateExercise
from schemas import GeneratedTemplate, TemplateGenerationRequest
from services.completion_client import ChatTurn, CompletionClient, classify_completion_error
from services.template_validation import (
    TemplateInvalid,
    find_unknown_slugs,
    resolve_slugs,
    validate_template,
)

logger = logging.getLogger(__name__)


def load_exercise_library(db: Session) -> List[ExerciseLibrary]:
    return (
        db.query(ExerciseLibrary)
        .order_by(ExerciseLibrary.category, ExerciseLibrary.difficulty, ExerciseLibrary.name)
        .all()
    )


def build_template_prompt(
    library: Sequence[ExerciseLibrary],
    goal: str,
    level: str,
    focus_areas: Optional[Sequence[str]] = None,
) -> str:
    exercise_list = "\n".join(
        f"- {e.slug} ({e.name}, {e.category}, {e.difficulty})" for e in library
    )
    focus_line = f"- Focus Areas: {', '.join(focus_areas)}" if focus_areas else ""

    return f"""You are a workout template generator. Generate a workout template as JSON based on the user's requirements.

AVAILABLE EXERCISES (use ONLY these exerciseSlug values):
{exercise_list}

REQUIREMENTS:
- Goal: {goal}
- Fitness Level: {level}
{focus_line}

INSTRUCTIONS:
1. Select 4-8 exercises that match the goal, level, and focus areas
2. Use ONLY exerciseSlug values from the list above
3. Assign appropriate sets (2-5), reps (5-20), and rest seconds (30-120)
4. Choose the most appropriate category based on exercises selected
5. Return ONLY valid JSON, no prose or explanations

OUTPUT FORMAT (strict JSON, no markdown):
{{
  "name": "Template Name",
  "description": "Brief description of the workout",
  "category": "push" | "pull" | "legs" | "core" | "full_body",
  "difficulty": "beginner" | "intermediate" | "advanced",
  "exercises": [
    {{
      "exerciseSlug": "exercise-slug-from-list",
      "sets": 3,
      "reps": 10,
      "restSeconds": 60,
      "notes": "Optional form tip"
    }}
  ]
}}"""


def save_template(
    db: Session,
    user_id: UUID,
    template: GeneratedTemplate,
    exercise_ids: Sequence[int],
    name: str,
) -> WorkoutTemplate:
    """Insert the template and its ordered exercises as a single transaction."""
    row = WorkoutTemplate(
        user_id=user_id,
        name=name,
        description=template.description,
        difficulty=template.difficulty,
        category=template.category,
        is_public=False,
    )
    for index, (entry, exercise_id) in enumerate(zip(template.exercises, exercise_ids)):
        row.exercises.append(
            WorkoutTemplateExercise(
                exercise_id=exercise_id,
                order_index=index,
                default_sets=entry.sets,
                default_reps=entry.reps,
                default_rest_seconds=entry.rest_seconds,
                notes=entry.notes or None,
            )
        )

    try:
        db.add(row)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)
    return row


def generate_template(
    db: Session,
    client: CompletionClient,
    user_id: UUID,
    request: TemplateGenerationRequest,
) -> Dict[str, object]:
    """
    Generate and store a template for ``user_id``.

    Returns ``{"template_id", "template_name"}``. Not idempotent: each call
    asks the model again and stores a new template.
    """
    library = load_exercise_library(db)
    if not library:
        raise DataIntegrityError(
            "No exercises available in the library",
            status_code=500,
            error_code="EMPTY_EXERCISE_LIBRARY",
        )

    prompt = build_template_prompt(library, request.goal, request.level, request.focus_areas)

    try:
        raw = client.complete(
            [ChatTurn(role="user", text=prompt)],
            temperature=settings.TEMPLATE_TEMPERATURE,
            max_output_tokens=settings.TEMPLATE_MAX_OUTPUT_TOKENS,
        )
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Generate template error: {e}", exc_info=True)
        raise classify_completion_error(e, "Failed to generate template") from e

    outcome = validate_template(raw)
    if isinstance(outcome, TemplateInvalid):
        if outcome.reason == "invalid_json":
            logger.warning("Template generation: JSON parse failed. Raw: %s", (raw or "")[:200])
            raise GenerationFailed("AI response was not valid JSON")
        logger.warning("Template generation: structure invalid: %s", outcome.errors)
        raise GenerationFailed("AI generated an invalid template structure", details=outcome.errors)

    template = outcome.template

    slug_to_id = {e.slug: e.id for e in library}
    invalid_slugs = find_unknown_slugs(template, slug_to_id.keys())
    if invalid_slugs:
        logger.warning("Template generation: unknown slugs %s", invalid_slugs)
        raise DataIntegrityError(
            "AI used invalid exercise slugs",
            error_code="INVALID_EXERCISE_SLUGS",
            extra={"invalidSlugs": invalid_slugs},
        )

    final_name = request.name or template.name
    row = save_template(db, user_id, template, resolve_slugs(template, slug_to_id), final_name)

    logger.info(
        "Template generated",
        extra={
            "extra_fields": {
                "user_id": str(user_id),
                "template_id": row.id,
                "exercise_count": len(template.exercises),
            }
        },
    )
    return {"template_id": row.id, "template_name": final_name}
