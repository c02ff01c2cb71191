"""
Exercise Library and Templates API Endpoints

The library is shared reference data. Templates belong to a user (or are
public) and can be started as a new workout.
"""
from fastapi import APIRouter, Depends
from typing import List

from core.auth import RequestContext, get_request_context
from schemas import ExerciseLibraryResponse, TemplateResponse, WorkoutResponse
from services import template_library, workout_log
from services.template_generator import load_exercise_library

router = APIRouter(prefix="/api", tags=["library"])


@router.get("/exercises", response_model=List[ExerciseLibraryResponse])
def list_exercises(ctx: RequestContext = Depends(get_request_context)):
    """Exercise library ordered by category, difficulty and name."""
    return load_exercise_library(ctx.db)


@router.get("/templates", response_model=List[TemplateResponse])
def list_templates(ctx: RequestContext = Depends(get_request_context)):
    return [
        template_library.to_template_response(t)
        for t in template_library.list_templates(ctx.db, ctx.user_id)
    ]


@router.get("/templates/{template_id}", response_model=TemplateResponse)
def get_template(
    template_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    template = template_library.get_template(ctx.db, ctx.user_id, template_id)
    return template_library.to_template_response(template)


@router.post("/templates/{template_id}/start", response_model=WorkoutResponse, status_code=201)
def start_template(
    template_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    """Create a workout pre-filled from the template's default sets and reps."""
    template = template_library.get_template(ctx.db, ctx.user_id, template_id)
    return workout_log.start_workout_from_template(ctx.db, ctx.user_id, template)
