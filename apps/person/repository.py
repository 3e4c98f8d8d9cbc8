"""Person repository binding."""

from framework.database.sql_driver import SQLDriver
from framework.repository.base import Repository
from .models import Person

# Generic repository narrowed to Person records keyed by int
PersonRepository = Repository[Person, int]


def person_repository(context: SQLDriver) -> PersonRepository:
    """Repository bound to the person table."""
    return Repository(context, Person)
