"""
CRUD Routes - one router per registry table.

For every resource:
GET    /<plural>        - List all rows
GET    /<plural>/{id}   - Get one row by primary key
POST   /<plural>        - Create a row
PUT    /<plural>/{id}   - Replace a row's fields
DELETE /<plural>/{id}   - Delete a row

Every statement is a single autocommitted query; database errors are logged
and answered with a generic 500 message.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Type

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel

from internship_registry.core.logging import get_logger
from internship_registry.db.connection import Connection
from internship_registry.db.database import get_connection
from internship_registry.db.tables import TableSpec, COMPANY, CONTACT, INTERNSHIP, PROGRAM, STUDENT, SUPERVISOR
from internship_registry.schemas.schemas import (
    CompanyIn, ContactIn, InternshipIn, ProgramIn, StudentIn, SupervisorIn, MessageResponse
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Resource:
    table: TableSpec
    schema: Type[BaseModel]
    singular: str
    plural: str

    @property
    def title(self) -> str:
        return self.singular.capitalize()


def build_crud_router(resource: Resource) -> APIRouter:
    table = resource.table
    schema = resource.schema
    router = APIRouter(prefix=f"/{resource.plural}", tags=[resource.plural.capitalize()])

    @router.get("", response_model=List[Dict[str, Any]])
    async def list_rows(connection: Connection = Depends(get_connection)):
        try:
            rows = await connection.query(table.select_all())
        except Exception:
            logger.exception("list_failed", table=table.name)
            raise HTTPException(status_code=500, detail=f"Error fetching {resource.plural}.")
        return list(rows)

    @router.get("/{key}", response_model=Dict[str, Any])
    async def get_row(key: int, connection: Connection = Depends(get_connection)):
        try:
            rows = await connection.query(table.select_by_key(), [key])
        except Exception:
            logger.exception("get_failed", table=table.name, key=key)
            raise HTTPException(status_code=500, detail=f"Error fetching {resource.singular}.")
        if not rows:
            raise HTTPException(status_code=404, detail=f"{resource.title} not found.")
        return rows[0]

    @router.post("", response_model=Dict[str, Any], status_code=201)
    async def create_row(data: schema, connection: Connection = Depends(get_connection)):
        values = data.model_dump()
        columns = table.validate(values)
        try:
            rows = await connection.query(
                table.insert(columns) + connection.insert_suffix(table),
                [values[c] for c in columns],
            )
        except Exception:
            logger.exception("create_failed", table=table.name)
            raise HTTPException(status_code=500, detail=f"Error creating {resource.singular}.")
        new_id = rows.insert_id or (rows[0].get(table.primary_key) if rows else None)
        return {table.primary_key: new_id, **values}

    @router.put("/{key}", response_model=MessageResponse)
    async def update_row(key: int, data: schema, connection: Connection = Depends(get_connection)):
        values = data.model_dump()
        columns = table.validate(values)
        try:
            await connection.query(table.update_by_key(columns), [values[c] for c in columns] + [key])
        except Exception:
            logger.exception("update_failed", table=table.name, key=key)
            raise HTTPException(status_code=500, detail=f"Error updating {resource.singular}.")
        return MessageResponse(message=f"{resource.title} updated successfully.")

    @router.delete("/{key}", response_model=MessageResponse)
    async def delete_row(key: int, connection: Connection = Depends(get_connection)):
        try:
            await connection.query(table.delete_by_key(), [key])
        except Exception:
            logger.exception("delete_failed", table=table.name, key=key)
            raise HTTPException(status_code=500, detail=f"Error deleting {resource.singular}.")
        return MessageResponse(message=f"{resource.title} deleted successfully.")

    return router


RESOURCES = [
    Resource(CONTACT, ContactIn, "contact", "contacts"),
    Resource(COMPANY, CompanyIn, "company", "companies"),
    Resource(SUPERVISOR, SupervisorIn, "supervisor", "supervisors"),
    Resource(STUDENT, StudentIn, "student", "students"),
    Resource(PROGRAM, ProgramIn, "program", "programs"),
    Resource(INTERNSHIP, InternshipIn, "internship", "internships"),
]
