"""Database layer for gymflow."""

from .engine import get_db_path, init_db, seed_exercises
from .repositories import (
    ClientProfileRepository,
    DayAssignmentRepository,
    ExerciseRepository,
    RoutineRepository,
    WorkoutSessionRepository,
)

__all__ = [
    "ClientProfileRepository",
    "DayAssignmentRepository",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "RoutineRepository",
    "seed_exercises",
    "WorkoutSessionRepository",
]
