"""Progress aggregation over a member's completed sessions."""

import logging
from datetime import date, timedelta
from pathlib import Path

from ..config import get_settings
from ..db.repositories import (
    ExerciseRepository,
    RoutineRepository,
    WorkoutSessionRepository,
)
from ..models.profile import ClientProfile
from ..models.progress import PeriodBucket, ProgressOverview
from ..models.session import WorkoutSession
from . import analytics

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
HISTORY_LIMIT = 100
WEEKS_SHOWN = 8
TOP_MUSCLE_GROUPS = 5


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    first = date(year, month, 1)
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def _bucket(label: str, sessions: list[WorkoutSession], year: int | None = None) -> PeriodBucket:
    totals = analytics.session_totals(sessions)
    return PeriodBucket(
        label=label,
        sessions=totals.total_sessions,
        calories=totals.total_calories,
        minutes=totals.total_minutes,
        year=year,
    )


def weekly_buckets(
    sessions: list[WorkoutSession], today: date, weeks: int = WEEKS_SHOWN
) -> list[PeriodBucket]:
    """ISO-week buckets ending with the week containing ``today``, oldest first."""
    this_monday = today - timedelta(days=today.weekday())
    buckets = []
    # one extra leading week so the first shown bucket has a growth baseline
    for offset in range(weeks, -1, -1):
        monday = this_monday - timedelta(weeks=offset)
        iso_year, iso_week, _ = monday.isocalendar()
        in_week = analytics.sessions_between(sessions, monday, monday + timedelta(days=6))
        buckets.append(_bucket(f"{iso_year}-W{iso_week:02d}", in_week))

    for previous, current in zip(buckets, buckets[1:]):
        current.growth = analytics.growth_percentage(current.sessions, previous.sessions)
    return buckets[1:]


def monthly_buckets(
    sessions: list[WorkoutSession], year: int, today: date
) -> list[PeriodBucket]:
    """Calendar-month buckets for ``year``, stopping at the current month."""
    last_month = today.month if year == today.year else 12
    first, last = month_bounds(year - 1, 12)
    previous = _bucket("", analytics.sessions_between(sessions, first, last))

    buckets = []
    for month in range(1, last_month + 1):
        first, last = month_bounds(year, month)
        bucket = _bucket(
            MONTH_NAMES[month - 1],
            analytics.sessions_between(sessions, first, last),
            year=year,
        )
        bucket.growth = analytics.growth_percentage(bucket.sessions, previous.sessions)
        buckets.append(bucket)
        previous = bucket
    return buckets


class ProgressAggregator:
    """Computes history statistics and progress dashboards on demand."""

    def __init__(self, db_path: Path | None = None):
        self.sessions = WorkoutSessionRepository(db_path)
        self.routines = RoutineRepository(db_path)
        self.exercises = ExerciseRepository(db_path)
        self.settings = get_settings()

    async def history(self, profile: ClientProfile, today: date | None = None) -> dict:
        """Recent completed sessions with display names and summary stats."""
        if today is None:
            today = date.today()
        sessions = await self.sessions.list_completed(profile.id, limit=HISTORY_LIMIT)
        routines = await self.routines.get_many(
            rid for session in sessions for rid in session.routine_ids
        )
        routine_names = {rid: routine.name for rid, routine in routines.items()}

        calories_by_week = []
        for offset in range(3, -1, -1):
            end = today - timedelta(weeks=offset)
            in_week = analytics.sessions_between(sessions, end - timedelta(days=6), end)
            calories_by_week.append(analytics.session_totals(in_week).total_calories)

        stats = {
            **analytics.session_totals(sessions).to_dict(),
            "sessions_by_day": analytics.sessions_by_day(sessions),
            "current_streak": analytics.current_streak(
                analytics.training_dates(sessions), today
            ),
            "calories_by_week": calories_by_week,
        }
        return {
            "sessions": [
                {
                    **session.to_dict(),
                    "session_name": analytics.session_display_name(session, routine_names),
                }
                for session in sessions
            ],
            "stats": stats,
        }

    async def overview(
        self, sessions: list[WorkoutSession], today: date
    ) -> ProgressOverview:
        """Headline totals, streaks, averages and month-over-month growth."""
        totals = analytics.session_totals(sessions)
        dates = analytics.training_dates(sessions)

        this_first, _ = month_bounds(today.year, today.month)
        last_first, last_last = month_bounds(
            *((today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1))
        )
        this_month = len(analytics.sessions_between(sessions, this_first, today))
        last_month = len(analytics.sessions_between(sessions, last_first, last_last))

        count = totals.total_sessions
        return ProgressOverview(
            totals=totals,
            current_streak=analytics.current_streak(dates, today),
            best_streak=analytics.best_streak(dates),
            avg_session_duration=round(totals.total_minutes / count) if count else 0,
            avg_calories_per_session=round(totals.total_calories / count) if count else 0,
            this_month_sessions=this_month,
            monthly_growth=analytics.growth_percentage(this_month, last_month),
        )

    async def progress(
        self,
        profile: ClientProfile,
        year: int | None = None,
        today: date | None = None,
    ) -> dict:
        """Full progress dashboard for one member and year."""
        if today is None:
            today = date.today()
        if year is None:
            year = today.year

        sessions = await self.sessions.list_completed(profile.id)
        catalog = await self.exercises.get_many(
            ec.exercise_id for session in sessions for ec in session.exercises_completed
        )
        per_rep = self.settings.default_calories_per_rep

        week_sessions = analytics.sessions_between(sessions, today - timedelta(days=6), today)
        year_sessions = [s for s in sessions if s.calendar_date.year == year]

        months = monthly_buckets(sessions, year, today)
        top_by_month = {}
        recent_by_month = {}
        for bucket_index, bucket in enumerate(months):
            first, last = month_bounds(year, bucket_index + 1)
            in_month = analytics.sessions_between(year_sessions, first, last)
            top_by_month[bucket.label] = [
                leader.to_dict()
                for leader in analytics.top_calorie_exercises(in_month, catalog, default_per_rep=per_rep)
            ]
            recent_by_month[bucket.label] = [s.summary() for s in in_month]

        overview = await self.overview(sessions, today)
        heatmap = analytics.muscle_group_heatmap(sessions, catalog)
        logger.debug(
            "Progress for profile %s: %d sessions, year %s", profile.id, len(sessions), year
        )

        return {
            "overview": overview.to_dict(),
            "sessions_by_day": analytics.sessions_by_day(sessions),
            "weekly_data": [b.to_dict() for b in weekly_buckets(sessions, today)],
            "monthly_data": [b.to_dict() for b in months],
            "top_muscle_groups": [g.to_dict() for g in heatmap[:TOP_MUSCLE_GROUPS]],
            "muscle_heatmap": {
                "week": [g.to_dict() for g in analytics.muscle_group_heatmap(week_sessions, catalog)],
                "year": [g.to_dict() for g in analytics.muscle_group_heatmap(year_sessions, catalog)],
            },
            "top_calorie_exercises": {
                "week": [
                    leader.to_dict()
                    for leader in analytics.top_calorie_exercises(week_sessions, catalog, default_per_rep=per_rep)
                ],
                "by_month": top_by_month,
                "year": [
                    leader.to_dict()
                    for leader in analytics.top_calorie_exercises(year_sessions, catalog, default_per_rep=per_rep)
                ],
            },
            "recent_sessions": {
                "week": [s.summary() for s in week_sessions],
                "by_month": recent_by_month,
                "year": [s.summary() for s in year_sessions],
            },
            "last_session": sessions[0].summary() if sessions else None,
        }
