"""Workout session routes."""

from typing import Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from ...models.profile import ClientProfile
from ...services.progress import ProgressAggregator
from ...services.sessions import SessionManager
from ..deps import get_current_profile

router = APIRouter(prefix="/workouts", tags=["workouts"])


class StartIn(BaseModel):
    routine_id: int | None = None


class ExerciseIn(BaseModel):
    exercise_id: int | None = None
    exercise_name: str | None = None
    # validated by the session manager so malformed input maps to 400
    series_data: Any = None
    sets: int | None = None
    reps: str | int | None = None


class CompleteIn(BaseModel):
    duration_minutes: int | None = None
    calories_burned: float | None = None


class FreeWorkoutIn(BaseModel):
    exercises: list[dict] = []
    duration_minutes: int | None = None
    calories_burned: float | None = None
    name: str | None = None
    save_as_routine: bool = False


@router.post("/start")
async def start_workout(
    response: Response,
    payload: StartIn | None = None,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Open today's session, or return the one already open."""
    routine_id = payload.routine_id if payload else None
    session, is_new = await SessionManager().start(profile, routine_id)
    response.status_code = status.HTTP_201_CREATED if is_new else status.HTTP_200_OK
    return {"session": session.to_dict(), "is_new": is_new}


@router.post("/free", status_code=status.HTTP_201_CREATED)
async def log_free_workout(
    payload: FreeWorkoutIn,
    response: Response,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Store a workout trained without a routine."""
    session, saved_routine, is_duplicate = await SessionManager().log_free_workout(
        profile,
        payload.exercises,
        duration_minutes=payload.duration_minutes,
        calories_burned=payload.calories_burned,
        name=payload.name,
        save_as_routine=payload.save_as_routine,
    )
    if is_duplicate:
        response.status_code = status.HTTP_200_OK
    return {
        "session": session.to_dict(),
        "saved_routine": saved_routine.to_dict() if saved_routine else None,
        "is_duplicate": is_duplicate,
    }


@router.get("/free/history")
async def free_workout_history(
    limit: int = 20, profile: ClientProfile = Depends(get_current_profile)
):
    """Recent free workouts, newest first."""
    sessions = await SessionManager().free_history(profile, limit)
    return {"sessions": [s.to_dict() for s in sessions]}


@router.get("/history")
async def workout_history(profile: ClientProfile = Depends(get_current_profile)):
    """Completed sessions with summary statistics."""
    return await ProgressAggregator().history(profile)


@router.put("/{session_id}/exercise")
async def record_exercise(
    session_id: int,
    payload: ExerciseIn,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Append one performed exercise to an open session."""
    session = await SessionManager().record_exercise(
        profile,
        session_id,
        payload.exercise_id,
        series_data=payload.series_data,
        sets=payload.sets,
        reps=str(payload.reps) if payload.reps is not None else None,
        exercise_name=payload.exercise_name,
    )
    return {"session": session.to_dict()}


@router.put("/{session_id}/complete")
async def complete_workout(
    session_id: int,
    payload: CompleteIn | None = None,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Close a session. Completing it again returns the stored record."""
    payload = payload or CompleteIn()
    session, is_duplicate = await SessionManager().complete(
        profile,
        session_id,
        duration_minutes=payload.duration_minutes,
        calories_burned=payload.calories_burned,
    )
    return {"session": session.to_dict(), "is_duplicate": is_duplicate}


@router.get("/{session_id}")
async def workout_detail(
    session_id: int, profile: ClientProfile = Depends(get_current_profile)
):
    """A session with its routines, exercise intensities and totals."""
    return await SessionManager().session_detail(profile, session_id)
