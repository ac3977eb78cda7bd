"""Workout session models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from ..errors import InvalidStateError, ValidationError


class SessionStatus(str, Enum):
    """Lifecycle state of a workout session."""

    OPEN = "open"
    COMPLETED = "completed"


@dataclass
class SeriesEntry:
    """One performed set."""

    set_number: int
    reps: int
    weight: float = 0.0

    def to_dict(self) -> dict:
        return {"set_number": self.set_number, "reps": self.reps, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "SeriesEntry":
        """Parse and validate one series entry."""
        if not isinstance(data, dict):
            raise ValidationError(f"Series entry must be an object, got {data!r}")
        missing = [key for key in ("set_number", "reps") if key not in data]
        if missing:
            raise ValidationError(f"Series entry missing {', '.join(missing)}")
        try:
            set_number = int(data["set_number"])
            reps = int(data["reps"])
            weight = float(data.get("weight") or 0)
        except (TypeError, ValueError):
            raise ValidationError(f"Series entry has non-numeric values: {data!r}")
        if set_number < 1:
            raise ValidationError(f"Set number must be >= 1, got {set_number}")
        if reps < 0 or weight < 0:
            raise ValidationError("Reps and weight cannot be negative")
        return cls(set_number=set_number, reps=reps, weight=weight)


def parse_series_data(raw) -> list[SeriesEntry]:
    """Validate a series-data payload into entries."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("Series data must be a list")
    return [SeriesEntry.from_dict(item) for item in raw]


@dataclass
class ExerciseCompletion:
    """An exercise logged inside a session. Never rewritten once appended."""

    exercise_id: int | None
    # None when no series was ever recorded, as opposed to an empty log
    series_data: list[SeriesEntry] | None = None
    sets: int | None = None
    reps: str | None = None
    exercise_name: str | None = None
    completed_at: datetime | None = None

    @property
    def total_reps(self) -> int:
        return sum(s.reps for s in self.series_data or [])

    @property
    def volume(self) -> float:
        return sum(s.reps * s.weight for s in self.series_data or [])

    def performed_sets(self) -> list[SeriesEntry]:
        """Series data, or the planned sets x reps at zero weight when none was recorded."""
        if self.series_data is not None:
            return self.series_data
        if not self.sets:
            return []
        try:
            reps = int(str(self.reps or "12").split("-")[0])
        except ValueError:
            reps = 12
        return [SeriesEntry(set_number=i + 1, reps=reps) for i in range(self.sets)]

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "sets": self.sets,
            "reps": self.reps,
            "series_data": (
                [s.to_dict() for s in self.series_data] if self.series_data is not None else None
            ),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseCompletion":
        """Create from dictionary."""
        completed_at = None
        if data.get("completed_at"):
            completed_at = datetime.fromisoformat(data["completed_at"])
        series_data = None
        if data.get("series_data") is not None:
            series_data = [
                SeriesEntry(
                    set_number=s.get("set_number", i + 1),
                    reps=s.get("reps") or 0,
                    weight=s.get("weight") or 0.0,
                )
                for i, s in enumerate(data["series_data"])
            ]
        return cls(
            exercise_id=data.get("exercise_id"),
            exercise_name=data.get("exercise_name"),
            sets=data.get("sets"),
            reps=data.get("reps"),
            series_data=series_data,
            completed_at=completed_at,
        )


@dataclass
class WorkoutSession:
    """One training occurrence for a member on a calendar date."""

    client_profile_id: int
    date: datetime
    day_of_week: int
    routine_ids: list[int] = field(default_factory=list)
    completed: bool = False
    is_free_workout: bool = False
    exercises_completed: list[ExerciseCompletion] = field(default_factory=list)
    duration_minutes: int | None = None
    calories_burned: float | None = None
    session_name: str | None = None
    completed_at: datetime | None = None
    id: int | None = None

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.COMPLETED if self.completed else SessionStatus.OPEN

    @property
    def calendar_date(self) -> date:
        return self.date.date()

    def covers_routine(self, routine_id: int) -> bool:
        return routine_id in self.routine_ids

    def append_exercise(self, completion: ExerciseCompletion) -> None:
        """Append to the log of an open session."""
        if self.completed:
            raise InvalidStateError(f"Session {self.id} is already completed")
        self.exercises_completed.append(completion)

    def complete(
        self,
        duration_minutes: int | None = None,
        calories_burned: float | None = None,
    ) -> None:
        """Move the session to its terminal state."""
        if self.completed:
            raise InvalidStateError(f"Session {self.id} is already completed")
        self.completed = True
        self.duration_minutes = duration_minutes
        self.calories_burned = calories_burned
        self.completed_at = datetime.now()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "client_profile_id": self.client_profile_id,
            "date": self.date.isoformat(),
            "day_of_week": self.day_of_week,
            "routine_ids": list(self.routine_ids),
            "status": self.status.value,
            "completed": self.completed,
            "is_free_workout": self.is_free_workout,
            "exercises_completed": [ec.to_dict() for ec in self.exercises_completed],
            "duration_minutes": self.duration_minutes,
            "calories_burned": self.calories_burned,
            "session_name": self.session_name,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def summary(self) -> dict:
        """Short form used in progress listings."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "calories_burned": self.calories_burned,
            "is_free_workout": self.is_free_workout,
        }
