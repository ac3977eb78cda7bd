"""Member schedule routes."""

from fastapi import APIRouter, Depends

from ...models.profile import ClientProfile
from ...models.routine import DAY_NAMES
from ...services.schedule import ScheduleResolver
from ..deps import get_current_profile

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/week")
async def week_schedule(profile: ClientProfile = Depends(get_current_profile)):
    """Routines for every day of the week, 0 = Sunday."""
    week = await ScheduleResolver().week_schedule(profile)
    return {
        "days": [
            {
                "day_of_week": day,
                "day_name": DAY_NAMES[day],
                "routines": [r.to_dict() for r in routines],
            }
            for day, routines in week.items()
        ]
    }


@router.get("/today")
async def today_schedule(profile: ClientProfile = Depends(get_current_profile)):
    """Today's routines and which of them are already done."""
    today = await ScheduleResolver().today_schedule(profile)
    return today.to_dict()
