# tests/conftest.py
import os
import tempfile
from pathlib import Path

_TEST_DB = Path(tempfile.gettempdir()) / "meeting_scheduler_test.db"
os.environ.setdefault("DB_URL", f"sqlite+aiosqlite:///{_TEST_DB}")
os.environ.setdefault("APP_ENV", "test")

import asyncio  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from meeting_scheduler.api.dependencies.scheduling import get_clock  # noqa: E402
from meeting_scheduler.db.session import init_db  # noqa: E402
from meeting_scheduler.main import create_app  # noqa: E402
from tests.fakes import FixedClock, utc  # noqa: E402

# "Now" for every HTTP test
API_NOW = utc(2025, 5, 29, 10, 0)


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all HTTP tests.

    The schema is reset once per session and the clock dependency is pinned
    to API_NOW so that past-start checks and the search horizon are
    deterministic.
    """
    asyncio.run(init_db())

    app = create_app()
    app.dependency_overrides[get_clock] = lambda: FixedClock(API_NOW)
    with TestClient(app) as test_client:
        yield test_client
