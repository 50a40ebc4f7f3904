"""In-memory user store.

Backs the test suite and ``STORE_BACKEND=memory`` runs. Every mutation
completes without awaiting, so on a single event loop two appends to the
same user can never interleave.
"""

from typing import Dict, List
from bson import ObjectId
from schemas.exercise import LogEntry
from schemas.user import User, UserSummary
from services.date_range import DateRange
from services.errors import DuplicateUsernameError, UserNotFoundError
from services.user_store import UserStore


class InMemoryUserStore(UserStore):
    """Users kept in an insertion-ordered dict keyed by id."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    async def _insert_user(self, username: str) -> User:
        if any(u.username == username for u in self._users.values()):
            raise DuplicateUsernameError(username)
        user = User(id=str(ObjectId()), username=username, exercises=[])
        self._users[user.id] = user
        return user.model_copy(deep=True)

    async def _push_entry(self, user_id: str, entry: LogEntry) -> User:
        user = self._get(user_id)
        user.exercises.append(entry)
        return user.model_copy(deep=True)

    async def find_user_by_id(self, user_id: str) -> User:
        return self._get(user_id).model_copy(deep=True)

    async def list_users(self) -> List[UserSummary]:
        return [u.summary() for u in self._users.values()]

    async def find_log(self, user_id: str, date_range: DateRange, limit: int) -> User:
        user = self._get(user_id)
        matching = [e for e in user.exercises if date_range.contains(e.date)]
        return User(
            id=user.id,
            username=user.username,
            exercises=[e.model_copy() for e in matching[:limit]],
        )

    def _get(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
