"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_name


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Member profiles (identity lives upstream; this maps user -> profile)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS client_profiles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT UNIQUE NOT NULL,
                name TEXT DEFAULT '',
                gym_id TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Read-only exercise catalog
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                muscle_group TEXT,
                calories_per_rep REAL,
                equipment TEXT DEFAULT ''
            )
        """)

        # Routines authored by members or professionals
        await db.execute("""
            CREATE TABLE IF NOT EXISTS routines (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_by TEXT NOT NULL,
                gym_id TEXT,
                name TEXT NOT NULL,
                description TEXT,
                category TEXT NOT NULL DEFAULT 'strength',
                level INTEGER NOT NULL DEFAULT 1,
                intensity INTEGER NOT NULL DEFAULT 3,
                estimated_minutes INTEGER,
                is_template INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS routine_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                routine_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                sets INTEGER NOT NULL DEFAULT 3,
                reps TEXT NOT NULL DEFAULT '12',
                rest_seconds INTEGER NOT NULL DEFAULT 60,
                "order" INTEGER NOT NULL DEFAULT 0,
                notes TEXT,
                FOREIGN KEY (routine_id) REFERENCES routines(id) ON DELETE CASCADE
            )
        """)

        # Unified self/professional day assignments
        await db.execute("""
            CREATE TABLE IF NOT EXISTS day_assignments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_profile_id INTEGER NOT NULL,
                routine_id INTEGER NOT NULL,
                day_of_week INTEGER NOT NULL CHECK (day_of_week BETWEEN 0 AND 6),
                assigned_by TEXT NOT NULL DEFAULT 'self',
                "order" INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (client_profile_id, routine_id, day_of_week),
                FOREIGN KEY (client_profile_id) REFERENCES client_profiles(id) ON DELETE CASCADE,
                FOREIGN KEY (routine_id) REFERENCES routines(id) ON DELETE CASCADE
            )
        """)

        # Sessions keep routine ids as a JSON snapshot, not a foreign key
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_profile_id INTEGER NOT NULL,
                date TIMESTAMP NOT NULL,
                day_of_week INTEGER NOT NULL,
                routine_ids TEXT NOT NULL DEFAULT '[]',
                completed INTEGER NOT NULL DEFAULT 0,
                is_free_workout INTEGER NOT NULL DEFAULT 0,
                exercises_completed TEXT NOT NULL DEFAULT '[]',
                duration_minutes INTEGER,
                calories_burned REAL,
                session_name TEXT,
                completed_at TIMESTAMP,
                FOREIGN KEY (client_profile_id) REFERENCES client_profiles(id)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_routines_created_by
            ON routines(created_by)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_routine_exercises_routine
            ON routine_exercises(routine_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_day_assignments_profile_day
            ON day_assignments(client_profile_id, day_of_week)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sessions_profile_date
            ON workout_sessions(client_profile_id, date)
        """)

        await db.commit()

    logger.debug("Database schema ready at %s", db_path)


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the catalog with common exercises. Returns the number inserted."""
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    inserted = 0
    async with aiosqlite.connect(db_path) as db:
        for exercise in COMMON_EXERCISES:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises
                (name, muscle_group, calories_per_rep, equipment)
                VALUES (?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    exercise.muscle_group.value if exercise.muscle_group else None,
                    exercise.calories_per_rep,
                    exercise.equipment,
                ),
            )
            inserted += cursor.rowcount
        await db.commit()

    logger.info("Seeded %d catalog exercises", inserted)
    return inserted
