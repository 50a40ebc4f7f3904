"""MongoDB user store on top of motor."""

from typing import Any, Dict, List
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from schemas.exercise import LogEntry
from schemas.user import User, UserSummary
from services.date_range import DateRange
from services.errors import DuplicateUsernameError, UserNotFoundError
from services.user_store import UserStore
from utils.logger import setup_logger

logger = setup_logger(__name__)


def to_object_id(user_id: str) -> ObjectId:
    """Parse a hex id, treating malformed ids as unknown users."""
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        raise UserNotFoundError(user_id)
    return ObjectId(user_id)


def user_from_document(doc: Dict[str, Any]) -> User:
    """Convert a users collection document into a User."""
    doc["_id"] = str(doc["_id"])  # Convert ObjectId to string
    doc.setdefault("exercises", [])
    return User(**doc)


def build_log_pipeline(object_id: ObjectId, date_range: DateRange, limit: int) -> List[Dict[str, Any]]:
    """Aggregation that filters and slices one user's exercises server side."""
    return [
        {"$match": {"_id": object_id}},
        {"$project": {
            "username": 1,
            "exercises": {
                "$slice": [
                    {
                        "$filter": {
                            "input": "$exercises",
                            "as": "exercise",
                            "cond": date_range.to_mongo_cond("$$exercise.date"),
                        }
                    },
                    limit,
                ]
            },
        }},
    ]


class MongoUserStore(UserStore):
    """Users collection with one document per user and an embedded log."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def _insert_user(self, username: str) -> User:
        # Check if user already exists
        existing_user = await self.collection.find_one({"username": username})
        if existing_user:
            raise DuplicateUsernameError(username)

        try:
            result = await self.collection.insert_one({"username": username, "exercises": []})
        except DuplicateKeyError:
            # Lost a race with a concurrent insert of the same name
            raise DuplicateUsernameError(username)

        logger.info(f"Created user: {username} ({result.inserted_id})")
        return User(id=str(result.inserted_id), username=username, exercises=[])

    async def _push_entry(self, user_id: str, entry: LogEntry) -> User:
        # A single $push keeps concurrent appends from overwriting each other
        doc = await self.collection.find_one_and_update(
            {"_id": to_object_id(user_id)},
            {"$push": {"exercises": entry.model_dump()}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise UserNotFoundError(user_id)
        return user_from_document(doc)

    async def find_user_by_id(self, user_id: str) -> User:
        doc = await self.collection.find_one({"_id": to_object_id(user_id)})
        if not doc:
            raise UserNotFoundError(user_id)
        return user_from_document(doc)

    async def list_users(self) -> List[UserSummary]:
        cursor = self.collection.find({}, {"username": 1})
        docs = await cursor.to_list(length=None)
        return [UserSummary(id=str(d["_id"]), username=d["username"]) for d in docs]

    async def find_log(self, user_id: str, date_range: DateRange, limit: int) -> User:
        pipeline = build_log_pipeline(to_object_id(user_id), date_range, limit)
        docs = await self.collection.aggregate(pipeline).to_list(length=1)
        if not docs:
            raise UserNotFoundError(user_id)
        return user_from_document(docs[0])
