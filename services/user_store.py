"""User store interface and the validation shared by every backend.

MongoUserStore and InMemoryUserStore implement the abstract hooks; callers
only ever talk to UserStore, so the API and the log query run unchanged
against either.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union
from schemas.exercise import LogEntry
from schemas.user import User, UserSummary
from services.date_range import DateRange
from services.errors import (
    EntryValidationError,
    UsernameValidationError,
    ValidationKind,
)
from utils.dates import parse_date, utcnow

USERNAME_MIN_LENGTH = 3


def validate_username(username: Optional[str]) -> str:
    """Trim a username and check presence and length.

    Raises:
        UsernameValidationError: kind REQUIRED or TOO_SHORT
    """
    name = (username or "").strip()
    if not name:
        raise UsernameValidationError(ValidationKind.REQUIRED)
    if len(name) < USERNAME_MIN_LENGTH:
        raise UsernameValidationError(ValidationKind.TOO_SHORT)
    return name


def parse_duration(value: Union[str, int, float, None]) -> Union[int, float]:
    """Minutes as int when integral, float otherwise."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise EntryValidationError("duration", ValidationKind.REQUIRED)
    if isinstance(value, bool):
        raise EntryValidationError("duration", ValidationKind.INVALID)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise EntryValidationError("duration", ValidationKind.INVALID)
    if number != number or number in (float("inf"), float("-inf")):
        raise EntryValidationError("duration", ValidationKind.INVALID)
    return int(number) if number.is_integer() else number


def build_entry(
    description: Optional[str],
    duration: Union[str, int, float, None],
    date: Optional[str] = None,
) -> LogEntry:
    """Validate raw fields into a LogEntry, stamping now when date is empty."""
    if description is None or not description.strip():
        raise EntryValidationError("description", ValidationKind.REQUIRED)
    minutes = parse_duration(duration)
    when = parse_date(date) if date and date.strip() else utcnow()
    return LogEntry(description=description, duration=minutes, date=when)


class UserStore(ABC):
    """Persistence for users and their embedded exercise logs."""

    async def create_user(self, username: Optional[str]) -> UserSummary:
        """Register a new user with an empty log.

        Raises:
            UsernameValidationError: missing or too short
            DuplicateUsernameError: name already taken
        """
        name = validate_username(username)
        user = await self._insert_user(name)
        return user.summary()

    async def append_entry(
        self,
        user_id: str,
        description: Optional[str],
        duration: Union[str, int, float, None],
        date: Optional[str] = None,
    ) -> User:
        """Append one exercise to the end of a user's log.

        Raises:
            EntryValidationError: description/duration missing or malformed
            InvalidDateFormatError: date present but unparseable
            UserNotFoundError: no such user
        """
        entry = build_entry(description, duration, date)
        return await self._push_entry(user_id, entry)

    @abstractmethod
    async def _insert_user(self, username: str) -> User:
        """Persist a validated username, enforcing uniqueness."""
        ...

    @abstractmethod
    async def _push_entry(self, user_id: str, entry: LogEntry) -> User:
        """Atomically append an entry and return the updated user."""
        ...

    @abstractmethod
    async def find_user_by_id(self, user_id: str) -> User:
        """Return the user or raise UserNotFoundError."""
        ...

    @abstractmethod
    async def list_users(self) -> List[UserSummary]:
        """All users in store order, without their logs."""
        ...

    @abstractmethod
    async def find_log(self, user_id: str, date_range: DateRange, limit: int) -> User:
        """Return the user with only the first ``limit`` entries inside ``date_range``."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None
