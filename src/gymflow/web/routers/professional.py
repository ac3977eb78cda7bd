"""Professional routes: gym routines and member day assignments."""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from ...db.repositories import (
    ClientProfileRepository,
    DayAssignmentRepository,
    RoutineRepository,
)
from ...errors import NotFoundError
from ...models.profile import ClientProfile
from ...models.routine import AssignmentOrigin, Routine
from ..deps import StaffContext, get_staff_context
from .routines import RoutineIn

router = APIRouter(prefix="/professional", tags=["professional"])


class DayAssignmentIn(BaseModel):
    routine_id: int
    day_of_week: int


class WeekIn(BaseModel):
    # day of week -> ordered routine ids
    days: dict[int, list[int]]


async def _client_in_gym(profile_id: int, staff: StaffContext) -> ClientProfile:
    profile = await ClientProfileRepository().get(profile_id)
    if profile is None or profile.gym_id != staff.gym_id:
        raise NotFoundError(f"Client profile {profile_id} not found")
    return profile


async def _routine_in_gym(routine_id: int, staff: StaffContext) -> Routine:
    routine = await RoutineRepository().get(routine_id)
    if routine is None or routine.gym_id != staff.gym_id:
        raise NotFoundError(f"Routine {routine_id} not found")
    return routine


@router.get("/routines")
async def list_gym_routines(staff: StaffContext = Depends(get_staff_context)):
    """Every routine that belongs to the professional's gym."""
    routines = await RoutineRepository().list_routines(gym_id=staff.gym_id)
    return {"routines": [r.to_dict() for r in routines]}


@router.post("/routines", status_code=status.HTTP_201_CREATED)
async def create_gym_routine(
    payload: RoutineIn, staff: StaffContext = Depends(get_staff_context)
):
    """Author a routine (or template) for the gym."""
    routine = Routine.from_dict(
        payload.model_dump(), created_by=staff.user_id, gym_id=staff.gym_id
    )
    routine = await RoutineRepository().create(routine)
    return routine.to_dict()


@router.post("/clients/{profile_id}/day-assignment")
async def assign_day(
    profile_id: int,
    payload: DayAssignmentIn,
    response: Response,
    staff: StaffContext = Depends(get_staff_context),
):
    """Put a gym routine on one of a member's days.

    Assigning the same routine to the same day again returns the
    existing assignment with status 200.
    """
    client = await _client_in_gym(profile_id, staff)
    routine = await _routine_in_gym(payload.routine_id, staff)
    assignment, created = await DayAssignmentRepository().assign(
        client.id, routine.id, payload.day_of_week, AssignmentOrigin.PROFESSIONAL
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return {"assignment": assignment.to_dict(), "created": created}


@router.delete("/day-assignment/{assignment_id}")
async def unassign_day(
    assignment_id: int, staff: StaffContext = Depends(get_staff_context)
):
    """Remove one assignment from a member of the gym."""
    repo = DayAssignmentRepository()
    assignment = await repo.get(assignment_id)
    if assignment is None:
        raise NotFoundError(f"Day assignment {assignment_id} not found")
    await _client_in_gym(assignment.client_profile_id, staff)
    await repo.unassign(assignment_id)
    return {"status": "deleted", "id": assignment_id}


@router.put("/clients/{profile_id}/week")
async def replace_week(
    profile_id: int,
    payload: WeekIn,
    staff: StaffContext = Depends(get_staff_context),
):
    """Replace all of a member's assignments to this gym's routines."""
    client = await _client_in_gym(profile_id, staff)
    assignments = await DayAssignmentRepository().replace_week(
        client.id, staff.gym_id, payload.days
    )
    return {"assignments": [a.to_dict() for a in assignments]}
