"""Shared fixtures: an in-memory store and an app served from it.

Requires: pip install pytest-asyncio httpx
"""
from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings
from schemas.exercise import LogEntry
from services.memory_store import InMemoryUserStore


def make_entry(date: datetime, description: str = "run", duration: int = 30) -> LogEntry:
    """Build a LogEntry with a pinned date, skipping form validation."""
    return LogEntry(description=description, duration=duration, date=date)


@pytest.fixture()
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture()
def client(store) -> TestClient:
    return TestClient(create_app(user_store=store, app_settings=Settings()))


@pytest.fixture()
def legacy_client(store) -> TestClient:
    app_settings = Settings(legacy_error_status=True)
    return TestClient(create_app(user_store=store, app_settings=app_settings))
