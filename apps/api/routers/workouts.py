"""
Workout Log API Endpoints

Create, list, read and update logged workouts. All queries are scoped to
the authenticated user.
"""
from fastapi import APIRouter, Depends
from typing import List

from core.auth import RequestContext, get_request_context
from schemas import WorkoutCreate, WorkoutResponse, WorkoutUpdate
from services import workout_log

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.post("", response_model=WorkoutResponse, status_code=201)
def create_workout(
    workout: WorkoutCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Log a workout with its exercises and sets.

    totalVolume is derived from completed sets when the client omits it.
    """
    return workout_log.create_workout(ctx.db, ctx.user_id, workout)


@router.get("", response_model=List[WorkoutResponse])
def list_workouts(
    limit: int = 0,
    ctx: RequestContext = Depends(get_request_context),
):
    """Your workouts, newest first."""
    return workout_log.list_workouts(ctx.db, ctx.user_id, limit=limit or None)


@router.get("/{workout_id}", response_model=WorkoutResponse)
def get_workout(
    workout_id: int,
    ctx: RequestContext = Depends(get_request_context),
):
    return workout_log.get_workout(ctx.db, ctx.user_id, workout_id)


@router.patch("/{workout_id}", response_model=WorkoutResponse)
def update_workout(
    workout_id: int,
    changes: WorkoutUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Update workout fields.

    Supplying ``exercises`` replaces the whole exercise list, so sets edited
    during a session started from a template are saved too.
    """
    return workout_log.update_workout(ctx.db, ctx.user_id, workout_id, changes)
