"""Member routine routes: own routine CRUD and the member view of a routine."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from ...db.repositories import DayAssignmentRepository, RoutineRepository
from ...models.profile import ClientProfile
from ...models.routine import AssignmentOrigin, Routine
from ...services.schedule import ScheduleResolver
from ..deps import get_current_profile

router = APIRouter(prefix="/routines", tags=["routines"])


class RoutineExerciseIn(BaseModel):
    exercise_id: int
    sets: int = 3
    reps: str | int = "12"
    rest_seconds: int = 60
    notes: str | None = None


class RoutineIn(BaseModel):
    """Routine payload shared by member and professional routes."""

    name: str
    description: str | None = None
    category: str = "strength"
    level: int = 1
    intensity: int = 3
    estimated_minutes: int | None = None
    is_template: bool = False
    exercises: list[RoutineExerciseIn] = []
    days: list[int] | None = None


class DaysIn(BaseModel):
    days: list[int]


async def _with_days(profile: ClientProfile, routine: Routine) -> dict:
    assignments = await DayAssignmentRepository().list_for_routine(profile.id, routine.id)
    return {**routine.to_dict(), "days": [a.day_of_week for a in assignments]}


@router.get("/my")
async def list_my_routines(profile: ClientProfile = Depends(get_current_profile)):
    """Routines the member authored, with the days each one is on."""
    routines = await RoutineRepository().list_routines(owner=profile.user_id)
    return {"routines": [await _with_days(profile, r) for r in routines]}


@router.post("/my", status_code=status.HTTP_201_CREATED)
async def create_my_routine(
    payload: RoutineIn, profile: ClientProfile = Depends(get_current_profile)
):
    """Create an own routine and optionally put it on some days."""
    routine = Routine.from_dict(
        payload.model_dump(), created_by=profile.user_id, gym_id=profile.gym_id
    )
    routine = await RoutineRepository().create(routine)
    if payload.days:
        await DayAssignmentRepository().set_days(
            profile.id, routine.id, payload.days, AssignmentOrigin.SELF
        )
    return await _with_days(profile, routine)


@router.put("/my/{routine_id}")
async def update_my_routine(
    routine_id: int,
    payload: RoutineIn,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Replace an own routine's fields and exercises."""
    routine = Routine.from_dict(
        payload.model_dump(),
        created_by=profile.user_id,
        gym_id=profile.gym_id,
        id=routine_id,
    )
    routine = await RoutineRepository().update(routine, profile.user_id)
    if payload.days is not None:
        await DayAssignmentRepository().set_days(
            profile.id, routine.id, payload.days, AssignmentOrigin.SELF
        )
    return await _with_days(profile, routine)


@router.put("/my/{routine_id}/days")
async def set_my_routine_days(
    routine_id: int,
    payload: DaysIn,
    profile: ClientProfile = Depends(get_current_profile),
):
    """Move an own routine to a new set of days."""
    routine = await RoutineRepository().get_owned(routine_id, profile.user_id)
    await DayAssignmentRepository().set_days(
        profile.id, routine.id, payload.days, AssignmentOrigin.SELF
    )
    return await _with_days(profile, routine)


@router.delete("/my/{routine_id}")
async def delete_my_routine(
    routine_id: int, profile: ClientProfile = Depends(get_current_profile)
):
    """Delete an own routine and every day it was assigned to."""
    await RoutineRepository().delete(routine_id, profile.user_id)
    return {"status": "deleted", "id": routine_id}


@router.get("/{routine_id}")
async def get_routine(
    routine_id: int, profile: ClientProfile = Depends(get_current_profile)
):
    """A routine the member owns or has on their schedule."""
    scheduled, days = await ScheduleResolver().routine_for_member(profile, routine_id)
    return {**scheduled.to_dict(), "days": days}
