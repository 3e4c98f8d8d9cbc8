import pytest
from framework.config import Settings
from apps.container import Container
from apps.person.models import Person, PERSON


@pytest.mark.asyncio
async def test_container_builds_context_from_settings(tmp_path):
    settings = Settings(DB_URL=f"sqlite+aiosqlite:///{tmp_path / 'people.db'}", DB_AUTO_CREATE=True)
    container = Container(settings)
    assert container.database.url == settings.DATABASE_URL
    assert container.person_repository.context is container.database
    assert container.person_repository.table is PERSON
    assert container.person_service.repository is container.person_repository

    await container.startup()
    try:
        person = await container.person_repository.insert(Person(first_name="Ada", last_name="Lovelace"))
        assert await container.person_repository.find_by_id(person.id) is not None
    finally:
        await container.shutdown()


@pytest.mark.asyncio
async def test_container_uses_injected_database(container: Container, database):
    assert container.database is database
    assert container.person_repository.context is database


def test_database_url_assembled_from_parts():
    settings = Settings(DB_URL=None, DB_USER="app", DB_PASSWORD="p@ss", DB_HOST="db", DB_PORT=3306, DB_NAME="people")
    assert settings.DATABASE_URL == "mysql+aiomysql://app:p%40ss@db:3306/people"
