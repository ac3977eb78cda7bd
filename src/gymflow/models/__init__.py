"""Data models for gymflow."""

from .exercises import Exercise, MuscleGroup
from .profile import ClientProfile
from .routine import (
    AssignmentOrigin,
    DayAssignment,
    Routine,
    RoutineCategory,
    RoutineExercise,
    ScheduledRoutine,
    day_of_week,
)
from .session import ExerciseCompletion, SeriesEntry, SessionStatus, WorkoutSession

__all__ = [
    "AssignmentOrigin",
    "ClientProfile",
    "DayAssignment",
    "day_of_week",
    "Exercise",
    "ExerciseCompletion",
    "MuscleGroup",
    "Routine",
    "RoutineCategory",
    "RoutineExercise",
    "ScheduledRoutine",
    "SeriesEntry",
    "SessionStatus",
    "WorkoutSession",
]
