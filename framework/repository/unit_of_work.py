"""
Unit of Work: binds one session to the query-execution context for a transaction boundary.
"""

from contextvars import Token
from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.sql_driver import SQLDriver


class UnitOfWork:
    """Repositories called inside ``async with UnitOfWork(ctx)`` share one session and commit/rollback together."""

    def __init__(self, context: Optional[SQLDriver] = None):
        """Initialize UnitOfWork; context must be provided."""
        if context is None:
            raise ValueError("Context must be provided. Pass the application's SQLDriver explicitly.")

        self.context = context
        self.session: Optional[AsyncSession] = None
        self._token: Optional[Token] = None
        self._owner = False

    @property
    def active(self) -> bool:
        return self.session is not None

    async def commit(self) -> None:
        """Commit all changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs)."""
        await self.session.flush()

    async def __aenter__(self):
        if self.session is not None:
            raise RuntimeError("UnitOfWork is already active")

        outer = self.context.current_session()
        if outer is not None:
            # Join the enclosing unit; it owns commit/rollback.
            self.session = outer
            self._owner = False
            return self

        self.session = self.context.session_factory()
        self._token = self.context.bind(self.session)
        self._owner = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._owner:
                if exc_type is not None:
                    await self.rollback()
                else:
                    await self.commit()
        finally:
            if self._owner:
                self.context.unbind(self._token)
                await self.session.close()
            self.session = None
            self._token = None
            self._owner = False
