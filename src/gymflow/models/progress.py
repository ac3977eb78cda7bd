"""Derived progress analytics. Nothing here is persisted."""

from dataclasses import dataclass, field


class IntensityLabel:
    """Buckets for a 0-100 exercise intensity score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

    @classmethod
    def for_score(cls, score: float) -> str:
        if score >= 80:
            return cls.VERY_HIGH
        if score >= 60:
            return cls.HIGH
        if score >= 40:
            return cls.MEDIUM
        return cls.LOW


@dataclass
class SessionTotals:
    """Sums across a set of completed sessions."""

    total_sessions: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    total_exercises: int = 0

    def to_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "total_minutes": self.total_minutes,
            "total_calories": self.total_calories,
            "total_exercises": self.total_exercises,
        }


@dataclass
class PeriodBucket:
    """Sessions grouped into one ISO week or calendar month."""

    label: str
    sessions: int = 0
    calories: int = 0
    minutes: int = 0
    growth: int = 0  # session-count growth against the previous bucket, in %
    year: int | None = None

    def to_dict(self) -> dict:
        data = {
            "label": self.label,
            "sessions": self.sessions,
            "calories": self.calories,
            "minutes": self.minutes,
            "growth": self.growth,
        }
        if self.year is not None:
            data["year"] = self.year
        return data


@dataclass
class CalorieLeader:
    """An exercise ranked by calories burned in a window."""

    name: str
    calories: int
    avg_calories: int

    def to_dict(self) -> dict:
        return {"name": self.name, "calories": self.calories, "avg_calories": self.avg_calories}


@dataclass
class MuscleGroupLoad:
    """Completion count for one muscle group, normalised to 0-100."""

    name: str
    count: int
    intensity: int

    def to_dict(self) -> dict:
        return {"name": self.name, "count": self.count, "intensity": self.intensity}


@dataclass
class ExerciseIntensity:
    """Per-exercise intensity inside one session."""

    score: int
    label: str
    calories: int
    total_reps: int
    volume: float

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "label": self.label,
            "calories": self.calories,
            "total_reps": self.total_reps,
            "volume": self.volume,
        }


@dataclass
class ProgressOverview:
    """Headline numbers for the progress page."""

    totals: SessionTotals = field(default_factory=SessionTotals)
    current_streak: int = 0
    best_streak: int = 0
    avg_session_duration: int = 0
    avg_calories_per_session: int = 0
    this_month_sessions: int = 0
    monthly_growth: int = 0

    def to_dict(self) -> dict:
        return {
            **self.totals.to_dict(),
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "avg_session_duration": self.avg_session_duration,
            "avg_calories_per_session": self.avg_calories_per_session,
            "this_month_sessions": self.this_month_sessions,
            "monthly_growth": self.monthly_growth,
        }
