"""User and exercise log routes."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Form, Query
from schemas.user import UserExercises, UserLog, UserSummary
from services.log_query import format_exercises, get_user_log
from services.user_store import UserStore
from api.dependencies import get_user_store
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserSummary)
async def create_user(
    username: Optional[str] = Form(None),
    store: UserStore = Depends(get_user_store),
):
    """Register a new user."""
    user = await store.create_user(username)
    logger.info(f"Registered user {user.username} ({user.id})")
    return user


@router.get("", response_model=List[UserSummary])
async def list_users(store: UserStore = Depends(get_user_store)):
    """List every user without their exercise logs."""
    return await store.list_users()


@router.post("/{user_id}/exercises", response_model=UserExercises)
async def add_exercise(
    user_id: str,
    description: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    store: UserStore = Depends(get_user_store),
):
    """Append an exercise to a user's log and return the whole log.

    An empty or missing date stamps the entry with the current time.
    """
    user = await store.append_entry(user_id, description, duration, date)
    logger.info(f"Added exercise for user {user_id}, log size {len(user.exercises)}")
    return UserExercises(
        id=user.id,
        username=user.username,
        exercises=format_exercises(user.exercises),
    )


@router.get("/{user_id}/logs", response_model=UserLog)
@router.get("/{user_id}/log", response_model=UserLog, include_in_schema=False)
async def get_logs(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date, inclusive"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    store: UserStore = Depends(get_user_store),
):
    """Return a user's exercise log filtered by date range and limit."""
    return await get_user_log(store, user_id, date_from, date_to, limit)
