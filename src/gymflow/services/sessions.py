"""Workout session lifecycle: start, record exercises, complete."""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from ..config import get_settings
from ..db.repositories import (
    ExerciseRepository,
    RoutineRepository,
    WorkoutSessionRepository,
)
from ..errors import ValidationError
from ..models.exercises import Exercise
from ..models.profile import ClientProfile
from ..models.routine import Routine, RoutineCategory, RoutineExercise, day_of_week
from ..models.session import ExerciseCompletion, WorkoutSession, parse_series_data
from . import analytics
from .schedule import ScheduleResolver, day_bounds

logger = logging.getLogger(__name__)


def _validate_optional_amount(name: str, value):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative")
    return value


class SessionManager:
    """Opens, mutates and closes workout sessions.

    The open-session lookup on start is read-then-write, so concurrent
    first starts may open two sessions. Appends and completion are
    conditional on the stored row still being open.
    """

    def __init__(self, db_path: Path | None = None):
        self.sessions = WorkoutSessionRepository(db_path)
        self.routines = RoutineRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.schedule = ScheduleResolver(db_path)
        self.settings = get_settings()

    async def start(
        self,
        profile: ClientProfile,
        routine_id: int | None = None,
        now: datetime | None = None,
    ) -> tuple[WorkoutSession, bool]:
        """Return today's open session for the request, creating one if needed.

        Returns:
            The session and whether it was newly created.
        """
        if now is None:
            now = datetime.now()
        today = now.date()
        start, end = day_bounds(today)
        open_today = await self.sessions.list_between(profile.id, start, end, completed=False)

        if routine_id is not None:
            await self.schedule.routine_for_member(profile, routine_id)
            for session in open_today:
                if session.covers_routine(routine_id):
                    logger.debug("Reusing open session %s for routine %s", session.id, routine_id)
                    return session, False
            routine_ids = [routine_id]
        else:
            if open_today:
                logger.debug("Reusing open session %s for profile %s", open_today[0].id, profile.id)
                return open_today[0], False
            schedule = await self.schedule.day_schedule(profile, day_of_week(today))
            routine_ids = [scheduled.routine_id for scheduled in schedule]

        session = await self.sessions.create(
            WorkoutSession(
                client_profile_id=profile.id,
                date=now,
                day_of_week=day_of_week(today),
                routine_ids=routine_ids,
                is_free_workout=not routine_ids,
            )
        )
        logger.info(
            "Started session %s for profile %s covering routines %s",
            session.id, profile.id, routine_ids,
        )
        return session, True

    async def get_session(self, profile: ClientProfile, session_id: int) -> WorkoutSession:
        """Get a session owned by the member."""
        return await self.sessions.get_for_profile(session_id, profile.id)

    async def record_exercise(
        self,
        profile: ClientProfile,
        session_id: int,
        exercise_id: int | None,
        series_data=None,
        sets: int | None = None,
        reps: str | None = None,
        exercise_name: str | None = None,
    ) -> WorkoutSession:
        """Append one completed exercise to an open session."""
        if exercise_id is None and not exercise_name:
            raise ValidationError("An exercise_id or exercise_name is required")
        series = parse_series_data(series_data)

        session = await self.sessions.get_for_profile(session_id, profile.id)
        completion = ExerciseCompletion(
            exercise_id=exercise_id,
            exercise_name=exercise_name,
            sets=sets if sets is not None else len(series) or None,
            reps=reps,
            series_data=series,
            completed_at=datetime.now(),
        )
        session.append_exercise(completion)
        await self.sessions.append_exercise(session.id, completion)
        logger.debug("Session %s: logged exercise %s", session.id, exercise_id)
        return session

    async def complete(
        self,
        profile: ClientProfile,
        session_id: int,
        duration_minutes: int | None = None,
        calories_burned: float | None = None,
    ) -> tuple[WorkoutSession, bool]:
        """Close a session.

        Returns:
            The session and whether it had already been completed, in
            which case it is returned unchanged.
        """
        _validate_optional_amount("duration_minutes", duration_minutes)
        _validate_optional_amount("calories_burned", calories_burned)

        session = await self.sessions.get_for_profile(session_id, profile.id)
        if session.completed:
            logger.info("Session %s already completed; ignoring duplicate", session.id)
            return session, True

        session.complete(duration_minutes, calories_burned)
        if not await self.sessions.mark_completed(session):
            logger.info("Session %s was completed concurrently; returning stored record", session.id)
            return await self.sessions.get_for_profile(session_id, profile.id), True
        logger.info(
            "Completed session %s (%s min, %s kcal)",
            session.id, duration_minutes, calories_burned,
        )
        return session, False

    async def log_free_workout(
        self,
        profile: ClientProfile,
        exercises: list[dict],
        duration_minutes: int | None = None,
        calories_burned: float | None = None,
        name: str | None = None,
        save_as_routine: bool = False,
        now: datetime | None = None,
    ) -> tuple[WorkoutSession, Routine | None, bool]:
        """Store an ad-hoc workout that was trained without a routine.

        A second submission within the dedup window returns the first one.

        Returns:
            The session, the routine saved from it (if any), and whether
            the submission was a duplicate.
        """
        if now is None:
            now = datetime.now()
        _validate_optional_amount("duration_minutes", duration_minutes)
        _validate_optional_amount("calories_burned", calories_burned)

        window = timedelta(seconds=self.settings.free_workout_dedup_seconds)
        recent = await self.sessions.find_recent_free(profile.id, now - window)
        if recent is not None:
            logger.info("Free workout for profile %s matches session %s; duplicate", profile.id, recent.id)
            return recent, None, True

        completions = []
        for item in exercises or []:
            if not isinstance(item, dict):
                raise ValidationError(f"Exercise entry must be an object, got {item!r}")
            completions.append(
                ExerciseCompletion(
                    exercise_id=item.get("exercise_id"),
                    exercise_name=item.get("exercise_name"),
                    sets=item.get("sets"),
                    reps=str(item["reps"]) if item.get("reps") is not None else None,
                    series_data=(
                        parse_series_data(item["series_data"])
                        if item.get("series_data") is not None
                        else None
                    ),
                    completed_at=now,
                )
            )

        saved_routine = None
        if save_as_routine and completions and profile.gym_id:
            saved_routine = await self.routines.create(
                Routine(
                    name=name or "My routine",
                    description="Saved from a free workout",
                    category=RoutineCategory.STRENGTH,
                    created_by=profile.user_id,
                    gym_id=profile.gym_id,
                    exercises=[
                        RoutineExercise(
                            exercise_id=c.exercise_id,
                            sets=c.sets or 3,
                            reps=c.reps or "12",
                            order=index + 1,
                        )
                        for index, c in enumerate(completions)
                        if c.exercise_id is not None
                    ],
                )
            )

        session = await self.sessions.create(
            WorkoutSession(
                client_profile_id=profile.id,
                date=now,
                day_of_week=day_of_week(now.date()),
                routine_ids=[saved_routine.id] if saved_routine else [],
                completed=True,
                is_free_workout=True,
                exercises_completed=completions,
                duration_minutes=duration_minutes,
                calories_burned=calories_burned,
                session_name=name or "Free workout",
                completed_at=now,
            )
        )
        logger.info("Logged free workout %s for profile %s", session.id, profile.id)
        return session, saved_routine, False

    async def free_history(self, profile: ClientProfile, limit: int = 20) -> list[WorkoutSession]:
        """Recent free workouts, newest first."""
        return await self.sessions.list_free(profile.id, limit)

    async def session_detail(self, profile: ClientProfile, session_id: int) -> dict:
        """A session with catalog data, per-exercise intensity and totals."""
        session = await self.sessions.get_for_profile(session_id, profile.id)
        catalog = await self.exercises.get_many(
            ec.exercise_id for ec in session.exercises_completed
        )
        default_per_rep = self.settings.default_calories_per_rep

        exercises = []
        scores = []
        total_volume = 0.0
        total_reps = 0
        for completion in session.exercises_completed:
            exercise: Exercise | None = catalog.get(completion.exercise_id)
            intensity = analytics.exercise_intensity(completion, exercise, default_per_rep)
            scores.append(intensity.score)
            total_volume += intensity.volume
            total_reps += intensity.total_reps
            exercises.append({
                **completion.to_dict(),
                "name": analytics.exercise_display_name(completion, exercise),
                "muscle_group": (
                    exercise.muscle_group.value if exercise and exercise.muscle_group else None
                ),
                "calories_per_rep": analytics.calories_per_rep(exercise, default_per_rep),
                "intensity": intensity.to_dict(),
            })

        routines = []
        if not session.is_free_workout:
            found = await self.routines.get_many(session.routine_ids)
            routines = [found[rid].to_dict() for rid in session.routine_ids if rid in found]

        return {
            "session": {**session.to_dict(), "exercises_completed": exercises},
            "routines": routines,
            "is_free_workout": session.is_free_workout,
            "total_volume": total_volume,
            "total_reps": total_reps,
            "overall_intensity": round(sum(scores) / len(scores)) if scores else 0,
        }
