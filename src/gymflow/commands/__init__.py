"""CLI commands for gymflow."""

from .exercises import exercises
from .init import init
from .profile import profile
from .progress import progress
from .routine import routine
from .schedule import schedule
from .serve import serve
from .workout import workout

__all__ = [
    "exercises",
    "init",
    "profile",
    "progress",
    "routine",
    "schedule",
    "serve",
    "workout",
]
