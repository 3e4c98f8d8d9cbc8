"""
Repository abstract base class and generic implementation.

One ``Repository`` instance is bound to exactly one table model for its whole
lifetime; per-table repositories are instances, not subclasses.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Optional, Tuple, Type, TypeVar
from sqlalchemy import Column, Table, func, inspect
from sqlmodel import SQLModel, select
from framework.database.sql_driver import SQLDriver

T = TypeVar("T", bound=SQLModel)
K = TypeVar("K")


class IRepository(ABC, Generic[T, K]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def find_by_id(self, id: K) -> Optional[T]:
        """Get record by primary key."""
        pass

    @abstractmethod
    async def find_all(self, *conditions, order_by=None, offset: int = 0, limit: Optional[int] = None) -> List[T]:
        """Get records matching conditions (paginated)."""
        pass

    @abstractmethod
    async def insert(self, record: T) -> T:
        """Insert record."""
        pass

    @abstractmethod
    async def update(self, record: T) -> Optional[T]:
        """Update record."""
        pass

    @abstractmethod
    async def delete_by_id(self, id: K) -> bool:
        """Delete record by primary key."""
        pass


class Repository(IRepository[T, K]):
    """Generic SQLModel CRUD over a single table."""

    def __init__(self, context: SQLDriver, model: Type[T]):
        """Bind repository to a query-execution context and a table model."""
        table = getattr(model, "__table__", None)
        if not isinstance(table, Table):
            raise ValueError(f"{model.__name__} is not a table model (declare it with table=True)")
        self._context = context
        self._model = model
        self._table = table
        self._mapper = inspect(model)

    def __repr__(self) -> str:
        return f"<Repository table={self._table.name!r} model={self._model.__name__}>"

    @property
    def context(self) -> SQLDriver:
        return self._context

    @property
    def model(self) -> Type[T]:
        return self._model

    @property
    def table(self) -> Table:
        """Table descriptor this repository is bound to."""
        return self._table

    @property
    def primary_key(self) -> Tuple[Column, ...]:
        return tuple(self._table.primary_key.columns)

    def _identity(self, record: T) -> Any:
        """Primary key value of a record (tuple for composite keys)."""
        identity = self._mapper.primary_key_from_instance(record)
        if any(value is None for value in identity):
            return None
        return identity[0] if len(identity) == 1 else tuple(identity)

    def _filter_conditions(self, filters: dict) -> list:
        conditions = []
        for key, value in filters.items():
            if key not in self._table.c:
                raise ValueError(f"Unknown column {key!r} for table {self._table.name!r}")
            conditions.append(self._table.c[key] == value)
        return conditions

    async def find_by_id(self, id: K) -> Optional[T]:
        """Get record by primary key."""
        async with self._context.session() as session:
            return await session.get(self._model, id)

    async def exists_by_id(self, id: K) -> bool:
        return await self.find_by_id(id) is not None

    async def find_all(self, *conditions, order_by=None, offset: int = 0, limit: Optional[int] = None) -> List[T]:
        """Get records matching all conditions; ordered by primary key unless order_by is given."""
        statement = select(self._model)
        for condition in conditions:
            statement = statement.where(condition)

        if order_by is None:
            statement = statement.order_by(*self.primary_key)
        elif isinstance(order_by, (list, tuple)):
            statement = statement.order_by(*order_by)
        else:
            statement = statement.order_by(order_by)

        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        async with self._context.session() as session:
            result = await session.exec(statement)
            return list(result.all())

    async def find_one(self, **filters) -> Optional[T]:
        """Find one record by column equality (e.g. email='a@b.c')."""
        records = await self.find_all(*self._filter_conditions(filters), limit=1)
        return records[0] if records else None

    async def find_by(self, **filters) -> List[T]:
        """Find records by column equality."""
        return await self.find_all(*self._filter_conditions(filters))

    async def count(self, *conditions) -> int:
        """Count records matching conditions."""
        statement = select(func.count()).select_from(self._table)
        for condition in conditions:
            statement = statement.where(condition)

        async with self._context.session() as session:
            result = await session.exec(statement)
            return result.one()

    async def insert(self, record: T) -> T:
        """Insert record; generated key and defaults are loaded back."""
        async with self._context.session() as session:
            session.add(record)
            await session.flush()
            await session.refresh(record)
            return record

    async def insert_all(self, records: Iterable[T]) -> List[T]:
        records = list(records)
        async with self._context.session() as session:
            session.add_all(records)
            await session.flush()
            for record in records:
                await session.refresh(record)
            return records

    async def update(self, record: T) -> Optional[T]:
        """Write record state over the existing row; None if no row has its key."""
        key = self._identity(record)
        if key is None:
            raise ValueError(f"Cannot update {self._model.__name__} without a primary key")

        async with self._context.session() as session:
            if await session.get(self._model, key) is None:
                return None
            merged = await session.merge(record)
            await session.flush()
            return merged

    async def save(self, record: T) -> T:
        """Insert or update depending on whether a row with the record's key exists."""
        async with self._context.session() as session:
            merged = await session.merge(record)
            await session.flush()
            await session.refresh(merged)
            return merged

    async def delete(self, record: T) -> bool:
        key = self._identity(record)
        if key is None:
            return False
        return await self.delete_by_id(key)

    async def delete_by_id(self, id: K) -> bool:
        """Delete record by primary key."""
        async with self._context.session() as session:
            record = await session.get(self._model, id)
            if record is None:
                return False
            await session.delete(record)
            await session.flush()
            return True
