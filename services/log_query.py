"""Filtered, limited view of a user's exercise log."""

import re
from typing import Iterable, List, Optional, Union
from config.settings import settings
from schemas.exercise import ExerciseOut, LogEntry
from schemas.user import UserLog
from services.date_range import build_date_range
from services.user_store import UserStore
from utils.dates import format_date
from utils.logger import setup_logger

logger = setup_logger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(value: Union[str, int, None], default: Optional[int] = None) -> int:
    """Read a positive integer limit, falling back to ``default`` otherwise.

    Strings are read up to the first non-digit, so "5" and "5.7" both give 5.
    Zero, negatives and non-numeric values give the default.
    """
    if default is None:
        default = settings.default_log_limit
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(value or "")
        if not match:
            return default
        number = int(match.group(1))
    return number if number > 0 else default


def format_exercises(entries: Iterable[LogEntry]) -> List[ExerciseOut]:
    return [
        ExerciseOut(description=e.description, duration=e.duration, date=format_date(e.date))
        for e in entries
    ]


def _supplied(value) -> bool:
    return value is not None and value != ""


async def get_user_log(
    store: UserStore,
    user_id: str,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    limit: Union[str, int, None] = None,
) -> UserLog:
    """Return a user's log, optionally filtered by date and truncated.

    With no ``from``, ``to`` or ``limit`` the whole log comes back and
    ``count`` is its total size. Otherwise entries are filtered by the
    inclusive date range, cut to the first ``limit`` in log order, and
    ``count`` is the size of that slice.

    Raises:
        UserNotFoundError: no such user
        InvalidDateFormatError: ``from`` or ``to`` cannot be parsed
    """
    if not any(_supplied(v) for v in (date_from, date_to, limit)):
        user = await store.find_user_by_id(user_id)
        exercises = format_exercises(user.exercises)
        return UserLog(id=user.id, username=user.username, count=len(exercises), exercises=exercises)

    # Unknown users fail before the bounds are parsed
    await store.find_user_by_id(user_id)
    date_range = build_date_range(date_from, date_to)
    max_entries = parse_limit(limit)
    logger.debug(f"Log query for {user_id}: range={date_range.kind.value}, limit={max_entries}")

    user = await store.find_log(user_id, date_range, max_entries)
    exercises = format_exercises(user.exercises)
    return UserLog(id=user.id, username=user.username, count=len(exercises), exercises=exercises)
