"""Pytest configuration and fixtures for bookflow.

HTTP tests run bookflow.main:app on the in-memory backend. SQL repository
tests build their own engine from TEST_DATABASE_URL (or DATABASE_URL) and skip
when no Postgres URL is set.
"""

import os
from datetime import UTC, datetime, timedelta

os.environ["DATABASE_BACKEND"] = "memory"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bookflow.core.config import get_settings

get_settings.cache_clear()

from bookflow.core.lifespan import create_lifespan  # noqa: E402
from bookflow.core.limiter import limiter  # noqa: E402
from bookflow.domain.entities.execution import ActionResult, ExecutionRecord  # noqa: E402
from bookflow.infrastructure.persistence import models  # noqa: E402, F401
from bookflow.infrastructure.persistence.database import Base  # noqa: E402
from bookflow.main import app  # noqa: E402
from bookflow.shared.enums import ExecutionStatus, WorkflowEventType  # noqa: E402

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), with a fresh in-memory backend.

    ASGITransport does not run the lifespan, so it is entered here.
    """
    limiter.reset()
    async with create_lifespan(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for SQL repository tests.

    Requires TEST_DATABASE_URL or DATABASE_URL pointing at Postgres
    (postgresql+asyncpg://...). Skips otherwise. Tables are created if missing;
    tests clean up the rows they create.
    """
    url = os.environ.get("TEST_DATABASE_URL") or os.environ.get("DATABASE_URL", "")
    if "postgresql" not in url:
        pytest.skip(
            "Postgres not configured: set TEST_DATABASE_URL (or DATABASE_URL) "
            "to a postgresql+asyncpg:// URL"
        )
    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def make_record():
    """Factory for execution records triggered n minutes after BASE_TIME.

    Each record carries one create_notification result that failed only when
    status is failed; total_duration_ms is n.
    """

    def _make(
        n: int,
        *,
        workflow_id: str = "wf_1",
        status: ExecutionStatus = ExecutionStatus.SUCCESS,
        event_type: WorkflowEventType = WorkflowEventType.PAYMENT_RECEIVED,
    ) -> ExecutionRecord:
        return ExecutionRecord(
            id=f"ex_{n}",
            workflow_id=workflow_id,
            event_type=event_type,
            triggered_at=BASE_TIME + timedelta(minutes=n),
            status=status,
            action_results=(
                ActionResult(
                    action_type="create_notification",
                    success=status != ExecutionStatus.FAILED,
                    duration_ms=1.0,
                ),
            ),
            total_duration_ms=float(n),
        )

    return _make
