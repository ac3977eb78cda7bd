"""Scheduling, session and progress services."""

from .progress import ProgressAggregator
from .schedule import ScheduleResolver, TodaySchedule
from .sessions import SessionManager

__all__ = [
    "ProgressAggregator",
    "ScheduleResolver",
    "SessionManager",
    "TodaySchedule",
]
