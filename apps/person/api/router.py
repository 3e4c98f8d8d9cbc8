from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator
from framework.config import settings
from framework.response import ResponseModel
from apps.container import Container, get_container
from ..models import Person
from ..service import PersonService

router = APIRouter()

class PersonCreateSchema(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    birth_date: Optional[date] = None

class PersonUpdateSchema(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    birth_date: Optional[date] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        # Omit the field to keep it; null is not a valid name
        if value is None:
            raise ValueError("must not be null")
        return value

def get_person_service(container: Container = Depends(get_container)) -> PersonService:
    """Dependency: PersonService wired at startup."""
    return container.person_service

def _serialize(person: Person) -> dict:
    return person.model_dump(mode="json")

@router.get("/")
async def list_persons(
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    last_name: Optional[str] = None,
    service: PersonService = Depends(get_person_service)
):
    """List persons (paginated)."""
    items, total = await service.list_persons(limit=limit, offset=offset, last_name=last_name)
    return ResponseModel.page([_serialize(p) for p in items], total=total, limit=limit, offset=offset)

@router.get("/{person_id}")
async def get_person(
    person_id: int,
    service: PersonService = Depends(get_person_service)
):
    person = await service.get_person(person_id)
    return ResponseModel.success(data=_serialize(person))

@router.post("/")
async def create_person(
    data: PersonCreateSchema,
    service: PersonService = Depends(get_person_service)
):
    """Create person."""
    person = await service.create_person(data.model_dump())
    return ResponseModel.success(data=_serialize(person))

@router.put("/{person_id}")
async def update_person(
    person_id: int,
    data: PersonUpdateSchema,
    service: PersonService = Depends(get_person_service)
):
    """Update person; only fields present in the body are changed."""
    person = await service.update_person(person_id, data.model_dump(exclude_unset=True))
    return ResponseModel.success(data=_serialize(person))

@router.delete("/{person_id}")
async def delete_person(
    person_id: int,
    service: PersonService = Depends(get_person_service)
):
    await service.delete_person(person_id)
    return ResponseModel.success(data={"id": person_id})
