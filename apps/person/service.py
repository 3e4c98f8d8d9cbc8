from typing import Any, Dict, List, Optional, Tuple
from loguru import logger
from sqlalchemy.exc import IntegrityError
from framework.database.sql_driver import SQLDriver
from framework.exceptions.handler import BusinessException, RecordNotFoundException
from framework.repository.unit_of_work import UnitOfWork
from .models import Person, PERSON
from .repository import PersonRepository


class PersonService:
    def __init__(self, context: SQLDriver, repository: PersonRepository):
        """Initialize Person Service with its context and repository."""
        self.context = context
        self.repository = repository

    async def list_persons(
        self,
        limit: int,
        offset: int = 0,
        last_name: Optional[str] = None
    ) -> Tuple[List[Person], int]:
        """List persons ordered by id, optionally filtered by last name; returns (items, total)."""
        conditions = []
        if last_name:
            conditions.append(PERSON.c.last_name == last_name)

        async with UnitOfWork(self.context):
            items = await self.repository.find_all(*conditions, offset=offset, limit=limit)
            total = await self.repository.count(*conditions)
        return items, total

    async def get_person(self, person_id: int) -> Person:
        person = await self.repository.find_by_id(person_id)
        if person is None:
            raise RecordNotFoundException("Person", person_id)
        return person

    async def create_person(self, data: Dict[str, Any]) -> Person:
        """Create person; duplicate email is a conflict."""
        try:
            async with UnitOfWork(self.context):
                person = await self.repository.insert(Person(**data))
        except IntegrityError as e:
            raise self._conflict(e) from e

        logger.info(f"Person {person.id} created")
        return person

    async def update_person(self, person_id: int, data: Dict[str, Any]) -> Person:
        """Apply partial update to an existing person."""
        try:
            async with UnitOfWork(self.context):
                person = await self.repository.find_by_id(person_id)
                if person is None:
                    raise RecordNotFoundException("Person", person_id)
                for key, value in data.items():
                    setattr(person, key, value)
                person = await self.repository.update(person)
        except IntegrityError as e:
            raise self._conflict(e) from e

        logger.info(f"Person {person_id} updated: {sorted(data)}")
        return person

    async def delete_person(self, person_id: int) -> None:
        deleted = await self.repository.delete_by_id(person_id)
        if not deleted:
            raise RecordNotFoundException("Person", person_id)
        logger.info(f"Person {person_id} deleted")

    @staticmethod
    def _conflict(e: IntegrityError) -> BusinessException:
        error_msg = str(e.orig) if hasattr(e, 'orig') else str(e)
        if any(keyword in error_msg.lower() for keyword in [
            'email',
            'duplicate entry',
            'unique constraint'
        ]):
            logger.warning(f"Person email already exists: {error_msg}")
            return BusinessException("Email already registered", status_code=409, code=409)
        logger.error(f"Database integrity error: {error_msg}")
        return BusinessException("Person could not be saved: data conflict", code=400)
