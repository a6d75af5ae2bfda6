"""Shared fixtures.

Settings are read at import time, so the test environment is set here,
before any test module imports the app.
"""

import asyncio
import os

import pytest

# Use in-memory sqlite for tests
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
# Real ticks never fire during API tests; tests tick trackers by hand
os.environ.setdefault("TICK_INTERVAL_SECONDS", "3600")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeClock:
    """Stand-in for asyncio.sleep that only wakes sleepers on advance()."""

    def __init__(self):
        self._waiters: list[asyncio.Future] = []

    async def sleep(self, seconds: float) -> None:
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

    async def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            # let freshly started timers reach their first sleep
            await asyncio.sleep(0)
            waiters, self._waiters = self._waiters, []
            for fut in waiters:
                if not fut.done():
                    fut.set_result(None)
            # let the woken timers run their callback and sleep again
            await asyncio.sleep(0)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def db():
    from podrun.main import app  # noqa: F401  (creates the tables)
    from podrun.db import Base, SessionLocal

    session = SessionLocal()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from podrun.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def live_runs():
    from podrun.main import app

    return app.state.live_runs
