"""Member profile model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ClientProfile:
    """Member-facing profile, distinct from the authentication identity."""

    user_id: str
    name: str = ""
    gym_id: str | None = None
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "gym_id": self.gym_id,
        }
