"""Pure calculations over session history.

Nothing in this module touches the database; callers pass in sessions
and catalog lookups and get plain values back.
"""

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Iterable

from ..models.exercises import DEFAULT_CALORIES_PER_REP, Exercise, MuscleGroup
from ..models.progress import (
    CalorieLeader,
    ExerciseIntensity,
    IntensityLabel,
    MuscleGroupLoad,
    SessionTotals,
)
from ..models.session import ExerciseCompletion, WorkoutSession

# Normalisation ceilings for the intensity score
WEIGHT_CEILING = 100.0
REPS_CEILING = 50.0
SETS_CEILING = 5.0


def growth_percentage(current: float, previous: float) -> int:
    """Percent change from ``previous`` to ``current``.

    A zero baseline counts as +100% when there is any activity now, else 0%.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


def training_dates(sessions: Iterable[WorkoutSession]) -> list[date]:
    """Distinct calendar dates with a session, newest first."""
    return sorted({s.calendar_date for s in sessions}, reverse=True)


def current_streak(dates: Iterable[date], today: date) -> int:
    """Consecutive training days ending today, or yesterday if today is still open."""
    ordered = sorted({d for d in dates if d <= today}, reverse=True)
    if not ordered:
        return 0

    check = today if ordered[0] == today else today - timedelta(days=1)
    streak = 0
    for day in ordered:
        if day != check:
            break
        streak += 1
        check -= timedelta(days=1)
    return streak


def best_streak(dates: Iterable[date]) -> int:
    """Longest run of consecutive training days."""
    ordered = sorted(set(dates))
    best = run = 0
    previous = None
    for day in ordered:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best


def session_totals(sessions: Iterable[WorkoutSession]) -> SessionTotals:
    """Sum sessions, minutes, calories and logged exercises."""
    totals = SessionTotals()
    calories = 0.0
    for session in sessions:
        totals.total_sessions += 1
        totals.total_minutes += session.duration_minutes or 0
        calories += session.calories_burned or 0
        totals.total_exercises += len(session.exercises_completed)
    totals.total_calories = round(calories)
    return totals


def sessions_by_day(sessions: Iterable[WorkoutSession]) -> dict[int, int]:
    """Count sessions per day of week (0 = Sunday)."""
    counts = Counter(s.day_of_week for s in sessions)
    return dict(sorted(counts.items()))


def sessions_between(
    sessions: Iterable[WorkoutSession], start: date, end: date
) -> list[WorkoutSession]:
    """Sessions whose calendar date falls in [start, end]."""
    return [s for s in sessions if start <= s.calendar_date <= end]


def calories_per_rep(
    exercise: Exercise | None, default_per_rep: float = DEFAULT_CALORIES_PER_REP
) -> float:
    return exercise.calories_per_rep if exercise and exercise.calories_per_rep else default_per_rep


def completion_calories(
    completion: ExerciseCompletion,
    exercise: Exercise | None,
    default_per_rep: float = DEFAULT_CALORIES_PER_REP,
) -> float:
    """Calories for one logged exercise: reps in its series x per-rep coefficient.

    Planned sets without a series log count as zero.
    """
    return completion.total_reps * calories_per_rep(exercise, default_per_rep)


def exercise_display_name(
    completion: ExerciseCompletion, exercise: Exercise | None
) -> str:
    if exercise:
        return exercise.name
    return completion.exercise_name or "Exercise"


def top_calorie_exercises(
    sessions: Iterable[WorkoutSession],
    catalog: dict[int, Exercise],
    limit: int = 4,
    default_per_rep: float = DEFAULT_CALORIES_PER_REP,
) -> list[CalorieLeader]:
    """Rank exercises by calories burned across the given sessions."""
    totals: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for session in sessions:
        for completion in session.exercises_completed:
            exercise = catalog.get(completion.exercise_id)
            name = exercise_display_name(completion, exercise)
            totals[name] += completion_calories(completion, exercise, default_per_rep)
            counts[name] += 1

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        CalorieLeader(
            name=name,
            calories=round(calories),
            avg_calories=round(calories / counts[name]) if counts[name] else 0,
        )
        for name, calories in ranked
    ]


def muscle_group_heatmap(
    sessions: Iterable[WorkoutSession], catalog: dict[int, Exercise]
) -> list[MuscleGroupLoad]:
    """Completions per muscle group, scaled 0-100 against the busiest group."""
    counts: Counter = Counter()
    for session in sessions:
        for completion in session.exercises_completed:
            exercise = catalog.get(completion.exercise_id)
            group = exercise.muscle_group if exercise and exercise.muscle_group else MuscleGroup.GENERAL
            counts[group.value] += 1

    if not counts:
        return []
    peak = max(counts.values())
    return [
        MuscleGroupLoad(name=name, count=count, intensity=round(count / peak * 100))
        for name, count in counts.most_common()
    ]


def exercise_intensity(
    completion: ExerciseCompletion,
    exercise: Exercise | None = None,
    default_per_rep: float = DEFAULT_CALORIES_PER_REP,
) -> ExerciseIntensity:
    """Weighted 0-100 score: 40% average weight, 35% total reps, 25% set count."""
    performed = completion.performed_sets()
    total_reps = sum(s.reps for s in performed)
    volume = sum(s.reps * s.weight for s in performed)
    calories = round(total_reps * calories_per_rep(exercise, default_per_rep))

    if not performed:
        return ExerciseIntensity(
            score=0, label=IntensityLabel.LOW, calories=calories, total_reps=0, volume=0.0
        )

    avg_weight = sum(s.weight for s in performed) / len(performed)
    weight_score = min(avg_weight / WEIGHT_CEILING, 1.0) * 40
    reps_score = min(total_reps / REPS_CEILING, 1.0) * 35
    sets_score = min(len(performed) / SETS_CEILING, 1.0) * 25
    score = round(weight_score + reps_score + sets_score)

    return ExerciseIntensity(
        score=score,
        label=IntensityLabel.for_score(score),
        calories=calories,
        total_reps=total_reps,
        volume=volume,
    )


def session_display_name(session: WorkoutSession, routine_names: dict[int, str]) -> str:
    """Name shown in history lists."""
    if session.session_name:
        return session.session_name
    if session.is_free_workout:
        return "Free workout"
    names = [routine_names[rid] for rid in session.routine_ids if rid in routine_names]
    if names:
        return " + ".join(names)
    return "Workout"
