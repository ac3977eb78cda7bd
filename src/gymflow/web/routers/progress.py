"""Progress dashboard route."""

from fastapi import APIRouter, Depends

from ...models.profile import ClientProfile
from ...services.progress import ProgressAggregator
from ..deps import get_current_profile

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("")
async def progress_dashboard(
    year: int | None = None, profile: ClientProfile = Depends(get_current_profile)
):
    """Totals, streaks, weekly and monthly rollups, calorie leaders and heatmap."""
    return await ProgressAggregator().progress(profile, year=year)
