"""Shared fixtures: an in-memory database, a fixed clock and a ready context."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from trackmark_core.bootstrap import bootstrap_context_core
from trackmark_core.db_schema import connect_db, init_db
from trackmark_core.workouts import create_running, create_cycling

LISBON = ZoneInfo("Europe/Lisbon")
HOME = (39.0, -12.0)


@pytest.fixture
def created_at() -> datetime:
    """Sunday morning, April 14 2024, Lisbon time."""
    return datetime(2024, 4, 14, 9, 30, tzinfo=LISBON)


@pytest.fixture
def conn():
    connection = connect_db(":memory:")
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture
def settings() -> dict:
    return {"TIMEZONE": "Europe/Lisbon", "HOME_POSITION": list(HOME)}


@pytest.fixture
def ctx(conn, settings, created_at):
    return bootstrap_context_core(conn, settings, clock=lambda: created_at)


@pytest.fixture
def run1(created_at):
    return create_running([39, -12], 5.2, 24, 178, workout_id="1000000001", created_at=created_at)


@pytest.fixture
def cycling1(created_at):
    return create_cycling([39.1, -12.1], 27, 95, 523, workout_id="1000000002", created_at=created_at)
