"""Data access layer for gymflow."""

import json
import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import InvalidStateError, NotFoundError
from ..models.exercises import Exercise, MuscleGroup
from ..models.profile import ClientProfile
from ..models.routine import (
    AssignmentOrigin,
    DayAssignment,
    Routine,
    RoutineCategory,
    RoutineExercise,
    validate_day_of_week,
)
from ..models.session import ExerciseCompletion, WorkoutSession
from .engine import get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class ClientProfileRepository:
    """Repository for member profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: ClientProfile) -> ClientProfile:
        """Create a new profile."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "INSERT INTO client_profiles (user_id, name, gym_id) VALUES (?, ?, ?)",
                (profile.user_id, profile.name, profile.gym_id),
            )
            await db.commit()
            profile.id = cursor.lastrowid
        return profile

    async def get(self, profile_id: int) -> ClientProfile | None:
        """Get a profile by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM client_profiles WHERE id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_profile(row) if row else None

    async def get_by_user(self, user_id: str) -> ClientProfile | None:
        """Get the profile belonging to an authenticated user."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM client_profiles WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_profile(row) if row else None

    async def list_all(self) -> list[ClientProfile]:
        """List all profiles."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM client_profiles ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    def _row_to_profile(self, row: aiosqlite.Row) -> ClientProfile:
        return ClientProfile(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"] or "",
            gym_id=row["gym_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class ExerciseRepository:
    """Read-mostly access to the exercise catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, exercise: Exercise) -> int:
        """Add a new exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO exercises (name, muscle_group, calories_per_rep, equipment)
                VALUES (?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    exercise.muscle_group.value if exercise.muscle_group else None,
                    exercise.calories_per_rep,
                    exercise.equipment,
                ),
            )
            await db.commit()
            exercise.id = cursor.lastrowid
            return cursor.lastrowid

    async def get(self, exercise_id: int) -> Exercise | None:
        """Get an exercise by ID."""
        found = await self.get_many([exercise_id])
        return found.get(exercise_id)

    async def get_many(self, exercise_ids) -> dict[int, Exercise]:
        """Look up several exercises at once, keyed by ID."""
        ids = sorted({i for i in exercise_ids if i is not None})
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"SELECT * FROM exercises WHERE id IN ({placeholders})", ids
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_exercise(row) for row in rows}

    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def search(self, query: str) -> list[Exercise]:
        """Search exercises by name."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE name LIKE ? ORDER BY name",
                (f"%{query}%",),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        return Exercise(
            id=row["id"],
            name=row["name"],
            muscle_group=MuscleGroup(row["muscle_group"]) if row["muscle_group"] else None,
            calories_per_rep=row["calories_per_rep"],
            equipment=row["equipment"] or "",
        )


class RoutineRepository:
    """Repository for routine definitions and their exercise lists."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, routine: Routine) -> Routine:
        """Create a routine together with its exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO routines
                (created_by, gym_id, name, description, category, level, intensity,
                 estimated_minutes, is_template)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    routine.created_by,
                    routine.gym_id,
                    routine.name,
                    routine.description,
                    routine.category.value,
                    routine.level,
                    routine.intensity,
                    routine.estimated_minutes,
                    int(routine.is_template),
                ),
            )
            routine.id = cursor.lastrowid
            await self._insert_exercises(db, routine)
            await db.commit()

        logger.info("Created routine %s (%s) for %s", routine.id, routine.name, routine.created_by)
        return await self.get(routine.id)

    async def get(self, routine_id: int) -> Routine | None:
        """Get a routine by ID."""
        found = await self.get_many([routine_id])
        return found.get(routine_id)

    async def get_many(self, routine_ids) -> dict[int, Routine]:
        """Load several routines with their exercises, keyed by ID."""
        ids = sorted({i for i in routine_ids if i is not None})
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"SELECT * FROM routines WHERE id IN ({placeholders})", ids
            )
            rows = await cursor.fetchall()
            routines = {row["id"]: self._row_to_routine(row) for row in rows}
            await self._load_exercises(db, routines)
        return routines

    async def get_owned(self, routine_id: int, user_id: str) -> Routine:
        """Get a routine authored by ``user_id`` or raise NotFoundError."""
        routine = await self.get(routine_id)
        if routine is None or not routine.is_authored_by(user_id):
            raise NotFoundError(f"Routine {routine_id} not found")
        return routine

    async def list_routines(
        self,
        owner: str | None = None,
        gym_id: str | None = None,
        is_template: bool | None = None,
    ) -> list[Routine]:
        """List routines filtered by author, gym and/or template flag."""
        clauses = []
        params: list = []
        if owner is not None:
            clauses.append("created_by = ?")
            params.append(owner)
        if gym_id is not None:
            clauses.append("gym_id = ?")
            params.append(gym_id)
        if is_template is not None:
            clauses.append("is_template = ?")
            params.append(int(is_template))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"SELECT * FROM routines {where} ORDER BY created_at DESC, id DESC",
                params,
            )
            rows = await cursor.fetchall()
            routines = {row["id"]: self._row_to_routine(row) for row in rows}
            await self._load_exercises(db, routines)
        return list(routines.values())

    async def is_referenced_by_completed_session(self, routine_id: int) -> bool:
        """Check whether any completed session snapshot lists this routine."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT 1 FROM workout_sessions, json_each(workout_sessions.routine_ids)
                WHERE workout_sessions.completed = 1 AND json_each.value = ?
                LIMIT 1
                """,
                (routine_id,),
            )
            return await cursor.fetchone() is not None

    async def update(self, routine: Routine, user_id: str) -> Routine:
        """Update an existing routine owned by ``user_id``.

        Routines that a completed session already refers to are frozen.
        """
        if routine.id is None:
            raise ValueError("Routine must have an ID to update")

        existing = await self.get_owned(routine.id, user_id)
        if await self.is_referenced_by_completed_session(routine.id):
            raise InvalidStateError(
                f"Routine {routine.id} is part of completed sessions and can no longer be edited"
            )

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE routines SET
                    name = ?, description = ?, category = ?, level = ?, intensity = ?,
                    estimated_minutes = ?, is_template = ?
                WHERE id = ?
                """,
                (
                    routine.name,
                    routine.description,
                    routine.category.value,
                    routine.level,
                    routine.intensity,
                    routine.estimated_minutes,
                    int(routine.is_template),
                    existing.id,
                ),
            )
            await db.execute(
                "DELETE FROM routine_exercises WHERE routine_id = ?", (existing.id,)
            )
            routine.created_by = existing.created_by
            await self._insert_exercises(db, routine)
            await db.commit()

        logger.info("Updated routine %s", routine.id)
        return await self.get(routine.id)

    async def delete(self, routine_id: int, user_id: str) -> None:
        """Delete a routine, its exercises and every day assignment to it.

        Workout sessions keep their routine id snapshot untouched.
        """
        await self.get_owned(routine_id, user_id)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM day_assignments WHERE routine_id = ?", (routine_id,)
            )
            await db.execute(
                "DELETE FROM routine_exercises WHERE routine_id = ?", (routine_id,)
            )
            await db.execute("DELETE FROM routines WHERE id = ?", (routine_id,))
            await db.commit()
        logger.info("Deleted routine %s", routine_id)

    async def _insert_exercises(self, db: aiosqlite.Connection, routine: Routine) -> None:
        for index, ex in enumerate(routine.exercises):
            await db.execute(
                """
                INSERT INTO routine_exercises
                (routine_id, exercise_id, sets, reps, rest_seconds, "order", notes)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    routine.id,
                    ex.exercise_id,
                    ex.sets,
                    ex.reps,
                    ex.rest_seconds,
                    ex.order or index + 1,
                    ex.notes,
                ),
            )

    async def _load_exercises(
        self, db: aiosqlite.Connection, routines: dict[int, Routine]
    ) -> None:
        if not routines:
            return
        ids = list(routines)
        placeholders = ", ".join("?" for _ in ids)
        cursor = await db.execute(
            f"""
            SELECT re.*, e.name AS exercise_name
            FROM routine_exercises re
            LEFT JOIN exercises e ON e.id = re.exercise_id
            WHERE re.routine_id IN ({placeholders})
            ORDER BY re.routine_id, re."order", re.id
            """,
            ids,
        )
        for row in await cursor.fetchall():
            routines[row["routine_id"]].exercises.append(
                RoutineExercise(
                    exercise_id=row["exercise_id"],
                    sets=row["sets"],
                    reps=row["reps"],
                    rest_seconds=row["rest_seconds"],
                    order=row["order"],
                    notes=row["notes"],
                    exercise_name=row["exercise_name"],
                )
            )

    def _row_to_routine(self, row: aiosqlite.Row) -> Routine:
        return Routine(
            id=row["id"],
            name=row["name"],
            created_by=row["created_by"],
            gym_id=row["gym_id"],
            description=row["description"],
            category=RoutineCategory(row["category"]),
            level=row["level"],
            intensity=row["intensity"],
            estimated_minutes=row["estimated_minutes"],
            is_template=bool(row["is_template"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class DayAssignmentRepository:
    """Repository for routine-to-day assignments of both origins."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def assign(
        self,
        client_profile_id: int,
        routine_id: int,
        day_of_week: int,
        assigned_by: AssignmentOrigin = AssignmentOrigin.SELF,
    ) -> tuple[DayAssignment, bool]:
        """Put a routine on a member's day.

        Returns the assignment and whether it was newly created; assigning
        the same (profile, routine, day) twice returns the existing row.
        """
        validate_day_of_week(day_of_week)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT COUNT(*) FROM day_assignments
                WHERE client_profile_id = ? AND day_of_week = ?
                """,
                (client_profile_id, day_of_week),
            )
            (existing_count,) = await cursor.fetchone()
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO day_assignments
                (client_profile_id, routine_id, day_of_week, assigned_by, "order")
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    client_profile_id,
                    routine_id,
                    day_of_week,
                    assigned_by.value,
                    existing_count,
                ),
            )
            created = cursor.rowcount > 0
            await db.commit()

        assignment = await self._find(client_profile_id, routine_id, day_of_week)
        if created:
            logger.info(
                "Assigned routine %s to profile %s on day %s (%s)",
                routine_id, client_profile_id, day_of_week, assigned_by.value,
            )
        else:
            logger.debug(
                "Routine %s already on day %s for profile %s",
                routine_id, day_of_week, client_profile_id,
            )
        return assignment, created

    async def get(self, assignment_id: int) -> DayAssignment | None:
        """Get an assignment by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM day_assignments WHERE id = ?", (assignment_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_assignment(row) if row else None

    async def unassign(self, assignment_id: int) -> None:
        """Delete an assignment."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM day_assignments WHERE id = ?", (assignment_id,)
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(f"Day assignment {assignment_id} not found")

    async def list_for_profile(
        self, client_profile_id: int, day_of_week: int | None = None
    ) -> list[DayAssignment]:
        """List a member's assignments of both origins in schedule order."""
        query = "SELECT * FROM day_assignments WHERE client_profile_id = ?"
        params: list = [client_profile_id]
        if day_of_week is not None:
            validate_day_of_week(day_of_week)
            query += " AND day_of_week = ?"
            params.append(day_of_week)
        query += ' ORDER BY day_of_week, "order", id'

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_assignment(row) for row in rows]

    async def list_for_routine(
        self, client_profile_id: int, routine_id: int
    ) -> list[DayAssignment]:
        """List the days one routine occupies in a member's week."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM day_assignments
                WHERE client_profile_id = ? AND routine_id = ?
                ORDER BY day_of_week
                """,
                (client_profile_id, routine_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_assignment(row) for row in rows]

    async def set_days(
        self,
        client_profile_id: int,
        routine_id: int,
        days: list[int],
        assigned_by: AssignmentOrigin = AssignmentOrigin.SELF,
    ) -> list[DayAssignment]:
        """Replace the days one routine is assigned to for a member."""
        for day in days:
            validate_day_of_week(day)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                DELETE FROM day_assignments
                WHERE client_profile_id = ? AND routine_id = ?
                """,
                (client_profile_id, routine_id),
            )
            await db.commit()
        for day in sorted(set(days)):
            await self.assign(client_profile_id, routine_id, day, assigned_by)
        return await self.list_for_routine(client_profile_id, routine_id)

    async def replace_week(
        self,
        client_profile_id: int,
        gym_id: str,
        week: dict[int, list[int]],
    ) -> list[DayAssignment]:
        """Replace a member's assignments to routines of one gym.

        ``week`` maps day of week to the ordered routine ids for that day.
        Assignments to routines of other gyms are left alone.
        """
        routine_ids = {rid for ids in week.values() for rid in ids}
        for day in week:
            validate_day_of_week(day)

        async with aiosqlite.connect(self.db_path) as db:
            if routine_ids:
                placeholders = ", ".join("?" for _ in routine_ids)
                cursor = await db.execute(
                    f"SELECT id FROM routines WHERE gym_id = ? AND id IN ({placeholders})",
                    [gym_id, *routine_ids],
                )
                valid = {row[0] for row in await cursor.fetchall()}
                missing = routine_ids - valid
                if missing:
                    raise NotFoundError(
                        f"Routines {sorted(missing)} not found in gym {gym_id}"
                    )

            await db.execute(
                """
                DELETE FROM day_assignments
                WHERE client_profile_id = ?
                  AND routine_id IN (SELECT id FROM routines WHERE gym_id = ?)
                """,
                (client_profile_id, gym_id),
            )
            for day, ids in sorted(week.items()):
                seen: set[int] = set()
                for order, routine_id in enumerate(ids):
                    if routine_id in seen:
                        continue
                    seen.add(routine_id)
                    await db.execute(
                        """
                        INSERT OR IGNORE INTO day_assignments
                        (client_profile_id, routine_id, day_of_week, assigned_by, "order")
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (
                            client_profile_id,
                            routine_id,
                            day,
                            AssignmentOrigin.PROFESSIONAL.value,
                            order,
                        ),
                    )
            await db.commit()

        logger.info("Replaced week for profile %s in gym %s", client_profile_id, gym_id)
        return await self.list_for_profile(client_profile_id)

    async def _find(
        self, client_profile_id: int, routine_id: int, day_of_week: int
    ) -> DayAssignment:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM day_assignments
                WHERE client_profile_id = ? AND routine_id = ? AND day_of_week = ?
                """,
                (client_profile_id, routine_id, day_of_week),
            )
            row = await cursor.fetchone()
            return self._row_to_assignment(row)

    def _row_to_assignment(self, row: aiosqlite.Row) -> DayAssignment:
        return DayAssignment(
            id=row["id"],
            client_profile_id=row["client_profile_id"],
            routine_id=row["routine_id"],
            day_of_week=row["day_of_week"],
            assigned_by=AssignmentOrigin(row["assigned_by"]),
            order=row["order"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class WorkoutSessionRepository:
    """Repository for workout sessions and their embedded exercise log."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: WorkoutSession) -> WorkoutSession:
        """Insert a new session."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_sessions
                (client_profile_id, date, day_of_week, routine_ids, completed,
                 is_free_workout, exercises_completed, duration_minutes,
                 calories_burned, session_name, completed_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.client_profile_id,
                    session.date.isoformat(),
                    session.day_of_week,
                    json.dumps(session.routine_ids),
                    int(session.completed),
                    int(session.is_free_workout),
                    json.dumps([ec.to_dict() for ec in session.exercises_completed]),
                    session.duration_minutes,
                    session.calories_burned,
                    session.session_name,
                    session.completed_at.isoformat() if session.completed_at else None,
                ),
            )
            await db.commit()
            session.id = cursor.lastrowid
        return session

    async def get(self, session_id: int) -> WorkoutSession | None:
        """Get a session by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_session(row) if row else None

    async def get_for_profile(self, session_id: int, client_profile_id: int) -> WorkoutSession:
        """Get a session owned by the given profile or raise NotFoundError."""
        session = await self.get(session_id)
        if session is None or session.client_profile_id != client_profile_id:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    async def append_exercise(self, session_id: int, completion: ExerciseCompletion) -> None:
        """Append one completion to the log of an open session.

        Raises InvalidStateError if the session was completed in the meantime.
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workout_sessions
                SET exercises_completed = json_insert(exercises_completed, '$[#]', json(?))
                WHERE id = ? AND completed = 0
                """,
                (json.dumps(completion.to_dict()), session_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise InvalidStateError(f"Session {session_id} is already completed")

    async def mark_completed(self, session: WorkoutSession) -> bool:
        """Store the completion fields if the session is still open.

        Returns:
            False when another request completed the session first.
        """
        if session.id is None:
            raise ValueError("Session must have an ID to complete")

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE workout_sessions SET
                    completed = 1, duration_minutes = ?, calories_burned = ?,
                    completed_at = ?
                WHERE id = ? AND completed = 0
                """,
                (
                    session.duration_minutes,
                    session.calories_burned,
                    session.completed_at.isoformat() if session.completed_at else None,
                    session.id,
                ),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def list_between(
        self,
        client_profile_id: int,
        start: datetime,
        end: datetime,
        completed: bool | None = None,
    ) -> list[WorkoutSession]:
        """List sessions dated in [start, end), oldest first."""
        query = """
            SELECT * FROM workout_sessions
            WHERE client_profile_id = ? AND date >= ? AND date < ?
        """
        params: list = [client_profile_id, start.isoformat(), end.isoformat()]
        if completed is not None:
            query += " AND completed = ?"
            params.append(int(completed))
        query += " ORDER BY date, id"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_completed(
        self, client_profile_id: int, limit: int | None = None
    ) -> list[WorkoutSession]:
        """List completed sessions, newest first."""
        query = """
            SELECT * FROM workout_sessions
            WHERE client_profile_id = ? AND completed = 1
            ORDER BY date DESC, id DESC
        """
        params: list = [client_profile_id]
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_free(self, client_profile_id: int, limit: int = 20) -> list[WorkoutSession]:
        """List completed free (routine-less) sessions, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_sessions
                WHERE client_profile_id = ? AND is_free_workout = 1 AND completed = 1
                ORDER BY date DESC, id DESC
                LIMIT ?
                """,
                (client_profile_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def find_recent_free(
        self, client_profile_id: int, since: datetime
    ) -> WorkoutSession | None:
        """Latest completed free session dated at or after ``since``."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM workout_sessions
                WHERE client_profile_id = ? AND is_free_workout = 1
                  AND completed = 1 AND date >= ?
                ORDER BY date DESC, id DESC
                LIMIT 1
                """,
                (client_profile_id, since.isoformat()),
            )
            row = await cursor.fetchone()
            return self._row_to_session(row) if row else None

    def _row_to_session(self, row: aiosqlite.Row) -> WorkoutSession:
        exercises = json.loads(row["exercises_completed"] or "[]")
        return WorkoutSession(
            id=row["id"],
            client_profile_id=row["client_profile_id"],
            date=datetime.fromisoformat(row["date"]),
            day_of_week=row["day_of_week"],
            routine_ids=json.loads(row["routine_ids"] or "[]"),
            completed=bool(row["completed"]),
            is_free_workout=bool(row["is_free_workout"]),
            exercises_completed=[ExerciseCompletion.from_dict(ec) for ec in exercises],
            duration_minutes=row["duration_minutes"],
            calories_burned=row["calories_burned"],
            session_name=row["session_name"],
            completed_at=_parse_timestamp(row["completed_at"]),
        )
