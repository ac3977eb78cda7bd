"""Routine and day-assignment models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from ..errors import ValidationError

# Day-of-week indexing used throughout scheduling: 0 = Sunday ... 6 = Saturday
SUNDAY = 0
SATURDAY = 6
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def day_of_week(day: date) -> int:
    """Return the Sunday-based day index for a calendar date."""
    return (day.weekday() + 1) % 7


def validate_day_of_week(value: int) -> int:
    """Reject day indexes outside 0-6."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Day of week must be an integer, got {value!r}")
    if value < SUNDAY or value > SATURDAY:
        raise ValidationError(f"Invalid day of week {value} (expected 0-6)")
    return value


class RoutineCategory(str, Enum):
    """Training style of a routine."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FUNCTIONAL = "functional"
    FLEXIBILITY = "flexibility"
    HIIT = "hiit"
    OTHER = "other"


class AssignmentOrigin(str, Enum):
    """Who put a routine on a member's day."""

    SELF = "self"
    PROFESSIONAL = "professional"


@dataclass
class RoutineExercise:
    """One planned exercise inside a routine."""

    exercise_id: int
    sets: int = 3
    reps: str = "12"  # free text, e.g. "8-12"
    rest_seconds: int = 60
    order: int = 0
    notes: str | None = None
    exercise_name: str | None = None  # filled from the catalog on read

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "sets": self.sets,
            "reps": self.reps,
            "rest_seconds": self.rest_seconds,
            "order": self.order,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, order: int = 0) -> "RoutineExercise":
        """Create from dictionary, applying the planning defaults."""
        if data.get("exercise_id") is None:
            raise ValidationError("Routine exercise requires an exercise_id")
        try:
            return cls(
                exercise_id=int(data["exercise_id"]),
                sets=int(data.get("sets") or 3),
                reps=str(data.get("reps") or "12"),
                rest_seconds=int(data.get("rest_seconds") or 60),
                order=int(data.get("order", order)),
                notes=data.get("notes"),
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid routine exercise {data!r}: {e}")


@dataclass
class Routine:
    """A named, ordered list of exercises authored by a member or professional."""

    name: str
    created_by: str
    gym_id: str | None = None
    description: str | None = None
    category: RoutineCategory = RoutineCategory.STRENGTH
    level: int = 1
    intensity: int = 3
    estimated_minutes: int | None = None
    is_template: bool = False
    exercises: list[RoutineExercise] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Routine name is required")
        for attr in ("level", "intensity"):
            value = getattr(self, attr)
            if value < 1 or value > 5:
                raise ValidationError(f"Routine {attr} must be between 1 and 5, got {value}")

    def is_authored_by(self, user_id: str) -> bool:
        return self.created_by == user_id

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "created_by": self.created_by,
            "gym_id": self.gym_id,
            "description": self.description,
            "category": self.category.value,
            "level": self.level,
            "intensity": self.intensity,
            "estimated_minutes": self.estimated_minutes,
            "is_template": self.is_template,
            "exercises": [ex.to_dict() for ex in self.exercises],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        created_by: str,
        gym_id: str | None = None,
        id: int | None = None,
    ) -> "Routine":
        """Create from an API payload."""
        exercises = data.get("exercises") or []
        try:
            category = RoutineCategory(data.get("category") or "strength")
        except ValueError:
            raise ValidationError(f"Unknown routine category {data.get('category')!r}")
        try:
            level = int(data["level"]) if data.get("level") is not None else 1
            intensity = int(data["intensity"]) if data.get("intensity") is not None else 3
        except (TypeError, ValueError):
            raise ValidationError("Routine level and intensity must be whole numbers")
        return cls(
            id=id,
            name=data.get("name") or "",
            created_by=created_by,
            gym_id=gym_id,
            description=data.get("description"),
            category=category,
            level=level,
            intensity=intensity,
            estimated_minutes=data.get("estimated_minutes"),
            is_template=bool(data.get("is_template", False)),
            exercises=[
                RoutineExercise.from_dict(ex, order=index + 1)
                for index, ex in enumerate(exercises)
            ],
        )


@dataclass
class DayAssignment:
    """Links a routine to one member on one day of the week."""

    client_profile_id: int
    routine_id: int
    day_of_week: int
    assigned_by: AssignmentOrigin = AssignmentOrigin.SELF
    order: int = 0
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "client_profile_id": self.client_profile_id,
            "routine_id": self.routine_id,
            "day_of_week": self.day_of_week,
            "assigned_by": self.assigned_by.value,
            "order": self.order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class ScheduledRoutine:
    """A routine as it appears on a member's schedule for one day."""

    routine: Routine
    is_own: bool
    assignment: DayAssignment | None = None

    @property
    def routine_id(self) -> int:
        return self.routine.id

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "routine": self.routine.to_dict(),
            "is_own": self.is_own,
            "assignment_id": self.assignment.id if self.assignment else None,
            "assigned_by": self.assignment.assigned_by.value if self.assignment else None,
            "order": self.assignment.order if self.assignment else None,
        }
