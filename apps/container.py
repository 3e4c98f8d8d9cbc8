"""
Composition root: builds the query-execution context and repositories once per process.
"""

from typing import Optional
from fastapi import Request
from framework.config import Settings
from framework.database.sql_driver import SQLDriver
from framework.logging.logger import get_logger
from apps.person.repository import PersonRepository, person_repository
from apps.person.service import PersonService

logger = get_logger("container")


class Container:
    """Explicitly wired application dependencies."""

    def __init__(self, settings: Settings, database: Optional[SQLDriver] = None):
        self.settings = settings
        self.database = database or SQLDriver(settings.DATABASE_URL, echo=settings.DB_ECHO)

        self.person_repository: PersonRepository = person_repository(self.database)
        self.person_service = PersonService(self.database, self.person_repository)

    async def startup(self) -> None:
        await self.database.connect()
        if self.settings.DB_AUTO_CREATE:
            await self.database.create_schema()
            logger.info("Database schema created")

    async def shutdown(self) -> None:
        await self.database.disconnect()


def get_container(request: Request) -> Container:
    """Dependency: container attached to the app."""
    return request.app.state.container
