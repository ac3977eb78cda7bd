"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from gymflow.db import (
    ClientProfileRepository,
    ExerciseRepository,
    RoutineRepository,
    WorkoutSessionRepository,
    init_db,
    seed_exercises,
)
from gymflow.models import (
    ClientProfile,
    ExerciseCompletion,
    Routine,
    RoutineExercise,
    SeriesEntry,
    WorkoutSession,
    day_of_week,
)

GYM_ID = "gym-1"
COACH_ID = "coach-1"


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """Initialized database with the starter exercise catalog."""
    await init_db(temp_db_path)
    await seed_exercises(temp_db_path)
    return temp_db_path


@pytest.fixture
async def catalog(db_path):
    """Catalog exercises keyed by name."""
    exercises = await ExerciseRepository(db_path).list_all()
    return {ex.name: ex for ex in exercises}


@pytest.fixture
async def member(db_path):
    """A member of the test gym."""
    return await ClientProfileRepository(db_path).create(
        ClientProfile(user_id="member-1", name="Ana", gym_id=GYM_ID)
    )


@pytest.fixture
async def other_member(db_path):
    """A second member of the same gym."""
    return await ClientProfileRepository(db_path).create(
        ClientProfile(user_id="member-2", name="Bruno", gym_id=GYM_ID)
    )


@pytest.fixture
def make_routine(db_path, catalog):
    """Factory creating a routine from exercise names."""

    async def _make(name: str, created_by: str, exercises=("Bench Press",), gym_id=GYM_ID):
        return await RoutineRepository(db_path).create(
            Routine(
                name=name,
                created_by=created_by,
                gym_id=gym_id,
                exercises=[
                    RoutineExercise(exercise_id=catalog[ex].id, order=i + 1)
                    for i, ex in enumerate(exercises)
                ],
            )
        )

    return _make


@pytest.fixture
def make_session(db_path, catalog):
    """Factory storing a session directly, bypassing the lifecycle rules."""

    async def _make(
        profile: ClientProfile,
        when: datetime,
        completed: bool = True,
        routine_ids=(),
        exercises=(),
        duration_minutes=None,
        calories_burned=None,
        is_free_workout=False,
        session_name=None,
    ):
        completions = [
            ExerciseCompletion(
                exercise_id=catalog[name].id,
                series_data=[
                    SeriesEntry(set_number=i + 1, reps=reps, weight=weight)
                    for i, (reps, weight) in enumerate(sets)
                ],
                completed_at=when,
            )
            for name, sets in exercises
        ]
        return await WorkoutSessionRepository(db_path).create(
            WorkoutSession(
                client_profile_id=profile.id,
                date=when,
                day_of_week=day_of_week(when.date()),
                routine_ids=list(routine_ids),
                completed=completed,
                is_free_workout=is_free_workout,
                exercises_completed=completions,
                duration_minutes=duration_minutes,
                calories_burned=calories_burned,
                session_name=session_name,
                completed_at=when if completed else None,
            )
        )

    return _make
