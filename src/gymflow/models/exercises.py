"""Exercise catalog entries and metadata."""

from dataclasses import dataclass
from enum import Enum

# Calories burned per performed rep when the catalog has no coefficient
DEFAULT_CALORIES_PER_REP = 0.5


class MuscleGroup(str, Enum):
    """Muscle groups used to tag catalog exercises."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    LEGS = "legs"
    ABS = "abs"
    FULL_BODY = "full_body"
    CARDIO = "cardio"
    GENERAL = "general"


@dataclass
class Exercise:
    """A read-only catalog exercise."""

    name: str
    muscle_group: MuscleGroup | None = None
    calories_per_rep: float | None = None
    equipment: str = ""
    id: int | None = None

    @property
    def calorie_coefficient(self) -> float:
        """Per-rep calorie coefficient, falling back to the default."""
        return self.calories_per_rep or DEFAULT_CALORIES_PER_REP

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "muscle_group": self.muscle_group.value if self.muscle_group else None,
            "calories_per_rep": self.calories_per_rep,
            "equipment": self.equipment,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Exercise":
        """Create from dictionary."""
        muscle_group = data.get("muscle_group")
        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            muscle_group=MuscleGroup(muscle_group) if muscle_group else None,
            calories_per_rep=data.get("calories_per_rep"),
            equipment=data.get("equipment", ""),
        )


# Starter catalog seeded by `gymflow init`
COMMON_EXERCISES: list[Exercise] = [
    # Chest
    Exercise("Bench Press", MuscleGroup.CHEST, 0.6, "barbell"),
    Exercise("Incline Dumbbell Press", MuscleGroup.CHEST, 0.55, "dumbbell"),
    Exercise("Dumbbell Fly", MuscleGroup.CHEST, 0.4, "dumbbell"),
    Exercise("Push Up", MuscleGroup.CHEST, 0.45, "bodyweight"),
    # Back
    Exercise("Pull Up", MuscleGroup.BACK, 0.8, "bodyweight"),
    Exercise("Barbell Row", MuscleGroup.BACK, 0.6, "barbell"),
    Exercise("Lat Pulldown", MuscleGroup.BACK, 0.5, "cable"),
    Exercise("Deadlift", MuscleGroup.BACK, 1.0, "barbell"),
    # Shoulders
    Exercise("Overhead Press", MuscleGroup.SHOULDERS, 0.55, "barbell"),
    Exercise("Lateral Raise", MuscleGroup.SHOULDERS, 0.3, "dumbbell"),
    # Arms
    Exercise("Barbell Curl", MuscleGroup.BICEPS, 0.35, "barbell"),
    Exercise("Hammer Curl", MuscleGroup.BICEPS, 0.35, "dumbbell"),
    Exercise("Tricep Pushdown", MuscleGroup.TRICEPS, 0.3, "cable"),
    Exercise("Dips", MuscleGroup.TRICEPS, 0.6, "bodyweight"),
    # Legs
    Exercise("Squat", MuscleGroup.LEGS, 0.9, "barbell"),
    Exercise("Leg Press", MuscleGroup.LEGS, 0.7, "machine"),
    Exercise("Walking Lunge", MuscleGroup.LEGS, 0.6, "dumbbell"),
    Exercise("Leg Curl", MuscleGroup.LEGS, 0.4, "machine"),
    # Core
    Exercise("Crunch", MuscleGroup.ABS, 0.2, "bodyweight"),
    Exercise("Plank", MuscleGroup.ABS, None, "bodyweight"),
    # Conditioning
    Exercise("Burpee", MuscleGroup.FULL_BODY, 1.2, "bodyweight"),
    Exercise("Jump Rope", MuscleGroup.CARDIO, 0.1, "rope"),
]
