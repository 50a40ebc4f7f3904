"""User schemas."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field
from schemas.exercise import ExerciseOut, LogEntry


class UserSummary(BaseModel):
    """User identity without the exercise log."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User identifier")
    username: str = Field(..., description="Unique username")


class User(UserSummary):
    """User document with its embedded exercise log."""
    exercises: List[LogEntry] = Field(default_factory=list)

    def summary(self) -> UserSummary:
        return UserSummary(id=self.id, username=self.username)


class UserExercises(UserSummary):
    """User with the full, formatted exercise log."""
    exercises: List[ExerciseOut] = Field(default_factory=list)


class UserLog(UserSummary):
    """Result of a log query."""
    count: int = Field(..., description="Number of exercises in this response")
    exercises: List[ExerciseOut] = Field(default_factory=list)
