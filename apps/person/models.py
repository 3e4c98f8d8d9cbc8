from datetime import date, datetime, timezone
from typing import Optional
from sqlalchemy import Table
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Person(SQLModel, table=True):
    __tablename__ = "person"
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100, index=True)
    email: Optional[str] = Field(default=None, max_length=255, unique=True)
    birth_date: Optional[date] = None
    created_at: datetime = Field(default_factory=_utcnow)


# Table descriptor for the person table
PERSON: Table = Person.__table__
