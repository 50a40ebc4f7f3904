"""Request and response schemas."""

from schemas.exercise import ExerciseOut, LogEntry
from schemas.user import User, UserExercises, UserLog, UserSummary

__all__ = [
    "ExerciseOut",
    "LogEntry",
    "User",
    "UserExercises",
    "UserLog",
    "UserSummary",
]
