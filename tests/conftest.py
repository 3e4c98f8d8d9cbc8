"""Test config and shared fixtures."""
import pytest
from datetime import date
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.pool import StaticPool

from main import create_app
from framework.config import Settings
from framework.database.sql_driver import SQLDriver
from apps.container import Container
from apps.person.models import Person
from apps.person.repository import PersonRepository, person_repository


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(DB_URL=TEST_DATABASE_URL, APP_ENV="testing", DB_AUTO_CREATE=False)


@pytest.fixture(scope="function")
async def database() -> AsyncGenerator[SQLDriver, None]:
    """Query-execution context on a fresh in-memory database."""
    # Register models in metadata
    import apps.models  # noqa: F401

    driver = SQLDriver(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await driver.create_schema()
    yield driver
    await driver.drop_schema()
    await driver.disconnect()


@pytest.fixture
def person_repo(database: SQLDriver) -> PersonRepository:
    return person_repository(database)


@pytest.fixture
def container(test_settings: Settings, database: SQLDriver) -> Container:
    return Container(test_settings, database=database)


@pytest.fixture
async def client(container: Container) -> AsyncGenerator[AsyncClient, None]:
    """Create test client wired to the test container."""
    app = create_app(container)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def sample_person(person_repo: PersonRepository) -> Person:
    """Create sample person."""
    return await person_repo.insert(
        Person(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            birth_date=date(1815, 12, 10),
        )
    )


@pytest.fixture
async def sample_people(person_repo: PersonRepository) -> list[Person]:
    """Create several persons, two sharing a last name."""
    return await person_repo.insert_all([
        Person(first_name="Grace", last_name="Hopper", email="grace@example.com"),
        Person(first_name="Alan", last_name="Turing", email="alan@example.com"),
        Person(first_name="Dora", last_name="Turing"),
    ])
