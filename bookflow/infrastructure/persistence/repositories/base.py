"""Base repository: one short transaction per call from a session factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class SessionRepository:
    """Base for SQL repositories shared by concurrent trigger calls.

    Each public method opens its own session and transaction via _transaction(),
    so no session is ever used by two coroutines at once.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Begin a transaction; commit on success, roll back on exception."""
        async with self._session_factory() as session:
            async with session.begin():
                yield session
