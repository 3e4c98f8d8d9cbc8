"""
Query-execution context: async engine, session factory and task-local session binding.
"""

from contextlib import asynccontextmanager
from contextvars import ContextVar, Token
from typing import AsyncIterator, Optional
from sqlmodel import SQLModel
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.logging.logger import get_logger
from .base import BaseDatabaseDriver

logger = get_logger("database")


class SQLDriver(BaseDatabaseDriver):
    """Owns the engine and hands out sessions to repositories.

    A session bound via ``bind()`` (normally by a UnitOfWork) is shared by every
    repository call in the same task; otherwise each call gets its own
    short-lived session that commits on success.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._current_session: ContextVar[Optional[AsyncSession]] = ContextVar(
            f"sql_session_{id(self)}", default=None
        )

    async def connect(self):
        """Verify connectivity (engine manages the pool)."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info(f"Database connected: {make_url(self.url).render_as_string(hide_password=True)}")

    async def disconnect(self):
        """Dispose the engine and its pooled connections."""
        await self.engine.dispose()
        logger.info("Database disconnected")

    async def create_schema(self):
        """Create all tables registered on SQLModel.metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_schema(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    def current_session(self) -> Optional[AsyncSession]:
        """Session bound to the current task, if any."""
        return self._current_session.get()

    def bind(self, session: AsyncSession) -> Token:
        return self._current_session.set(session)

    def unbind(self, token: Token) -> None:
        self._current_session.reset(token)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield the bound session, or a fresh one committed on exit."""
        bound = self.current_session()
        if bound is not None:
            yield bound
            return

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
