"""Schedule resolution: merges own and assigned routines into per-day lists."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from pathlib import Path

from ..db.repositories import (
    DayAssignmentRepository,
    RoutineRepository,
    WorkoutSessionRepository,
)
from ..errors import NotFoundError
from ..models.profile import ClientProfile
from ..models.routine import (
    DayAssignment,
    Routine,
    ScheduledRoutine,
    day_of_week,
    validate_day_of_week,
)

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Start of ``day`` and start of the next day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


@dataclass
class TodaySchedule:
    """Routines due today and which of them were already trained."""

    day_of_week: int
    routines: list[ScheduledRoutine] = field(default_factory=list)
    completed_routine_ids: list[int] = field(default_factory=list)

    @property
    def is_rest_day(self) -> bool:
        return not self.routines

    @property
    def is_completed(self) -> bool:
        done = set(self.completed_routine_ids)
        return bool(self.routines) and all(r.routine_id in done for r in self.routines)

    def to_dict(self) -> dict:
        return {
            "day_of_week": self.day_of_week,
            "routines": [r.to_dict() for r in self.routines],
            "completed_routine_ids": list(self.completed_routine_ids),
            "is_completed": self.is_completed,
            "is_rest_day": self.is_rest_day,
        }


class ScheduleResolver:
    """Builds a member's daily and weekly training schedule.

    Both self-assigned and professionally assigned routines live in the
    same assignment table; ownership is derived from the routine author.
    """

    def __init__(self, db_path: Path | None = None):
        self.assignments = DayAssignmentRepository(db_path)
        self.routines = RoutineRepository(db_path)
        self.sessions = WorkoutSessionRepository(db_path)

    async def day_schedule(
        self, profile: ClientProfile, day: int
    ) -> list[ScheduledRoutine]:
        """Ordered, de-duplicated routines for one day of the week."""
        validate_day_of_week(day)
        assignments = await self.assignments.list_for_profile(profile.id, day)
        routines = await self.routines.get_many(a.routine_id for a in assignments)
        return self._resolve(profile, assignments, routines)

    async def week_schedule(
        self, profile: ClientProfile
    ) -> dict[int, list[ScheduledRoutine]]:
        """Schedule for every day 0 (Sunday) to 6 (Saturday)."""
        assignments = await self.assignments.list_for_profile(profile.id)
        routines = await self.routines.get_many(a.routine_id for a in assignments)

        by_day: dict[int, list[DayAssignment]] = {day: [] for day in range(7)}
        for assignment in assignments:
            by_day[assignment.day_of_week].append(assignment)

        return {
            day: self._resolve(profile, day_assignments, routines)
            for day, day_assignments in by_day.items()
        }

    async def today_schedule(
        self, profile: ClientProfile, today: date | None = None
    ) -> TodaySchedule:
        """Today's routines plus the routine ids already completed today."""
        if today is None:
            today = date.today()
        dow = day_of_week(today)
        routines = await self.day_schedule(profile, dow)

        start, end = day_bounds(today)
        completed = await self.sessions.list_between(
            profile.id, start, end, completed=True
        )
        completed_ids: list[int] = []
        for session in completed:
            for routine_id in session.routine_ids:
                if routine_id not in completed_ids:
                    completed_ids.append(routine_id)

        return TodaySchedule(
            day_of_week=dow,
            routines=routines,
            completed_routine_ids=completed_ids,
        )

    async def routine_for_member(
        self, profile: ClientProfile, routine_id: int
    ) -> tuple[ScheduledRoutine, list[int]]:
        """A routine the member authored or has on their week, with its days."""
        routine = await self.routines.get(routine_id)
        if routine is None:
            raise NotFoundError(f"Routine {routine_id} not found")

        assignments = await self.assignments.list_for_routine(profile.id, routine_id)
        is_own = routine.is_authored_by(profile.user_id)
        if not is_own and not assignments:
            raise NotFoundError(f"Routine {routine_id} not found")

        days = [a.day_of_week for a in assignments]
        first = assignments[0] if assignments else None
        return ScheduledRoutine(routine=routine, is_own=is_own, assignment=first), days

    def _resolve(
        self,
        profile: ClientProfile,
        assignments: list[DayAssignment],
        routines: dict[int, Routine],
    ) -> list[ScheduledRoutine]:
        ordered = sorted(assignments, key=lambda a: (a.order, a.id or 0))
        seen: set[int] = set()
        resolved = []
        for assignment in ordered:
            if assignment.routine_id in seen:
                logger.debug(
                    "Skipping duplicate routine %s on day %s for profile %s",
                    assignment.routine_id, assignment.day_of_week, profile.id,
                )
                continue
            routine = routines.get(assignment.routine_id)
            if routine is None:
                continue
            seen.add(assignment.routine_id)
            resolved.append(
                ScheduledRoutine(
                    routine=routine,
                    is_own=routine.is_authored_by(profile.user_id),
                    assignment=assignment,
                )
            )
        return resolved
