"""Request dependencies resolving the caller."""

from dataclasses import dataclass

from fastapi import Header, HTTPException, status

from ..db.repositories import ClientProfileRepository
from ..errors import NotFoundError
from ..models.profile import ClientProfile


@dataclass
class StaffContext:
    """A professional acting on behalf of one gym."""

    user_id: str
    gym_id: str


def _require_user(x_user_id: str | None) -> str:
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header"
        )
    return x_user_id


async def get_current_profile(
    x_user_id: str | None = Header(default=None),
) -> ClientProfile:
    """Resolve the calling member's profile from the X-User-Id header.

    Authentication happens upstream; this layer only maps the user id
    to its ClientProfile.
    """
    user_id = _require_user(x_user_id)
    profile = await ClientProfileRepository().get_by_user(user_id)
    if profile is None:
        raise NotFoundError(f"No client profile for user {user_id}")
    return profile


async def get_staff_context(
    x_user_id: str | None = Header(default=None),
    x_gym_id: str | None = Header(default=None),
) -> StaffContext:
    """Resolve a professional caller and the gym they act for."""
    user_id = _require_user(x_user_id)
    if not x_gym_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-Gym-Id header"
        )
    return StaffContext(user_id=user_id, gym_id=x_gym_id)
