"""
Content business logic.

Each resource pairs a table with its entity mapper. Reads map rows to the
API shape; writes map the present payload fields to current columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import asyncpg
from fastapi import HTTPException, status

from core.db import Database
from entities import mappers
from entities.fields import EntityMapper

from . import repository


@dataclass(frozen=True)
class Resource:
    name: str
    table: str
    mapper: EntityMapper


USERS = Resource("user", "users", mappers.USER)
ARTICLES = Resource("article", "articles", mappers.ARTICLE)
STRUCTURE = Resource("structure member", "structure", mappers.STRUCTURE)
PARTNERS = Resource("partner", "partners", mappers.PARTNER)
CONTACT_INFO = Resource("contact info", "contact_info", mappers.CONTACT_INFO)
SITE_PROFILE = Resource("site profile", "site_profile", mappers.SITE_PROFILE)


def _not_found(resource: Resource) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource.name.capitalize()} not found.",
    )


def _conflict(exc: asyncpg.UniqueViolationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=getattr(exc, "detail", None) or "Duplicate value.",
    )


async def list_items(db: Database, resource: Resource) -> list[dict]:
    rows = await repository.list_rows(db, resource.table)
    return [resource.mapper.to_api(row) for row in rows]


async def get_item(db: Database, resource: Resource, item_id: int) -> dict:
    row = await repository.get_row(db, resource.table, item_id)
    if row is None:
        raise _not_found(resource)
    return resource.mapper.to_api(row)


async def create_item(db: Database, resource: Resource, payload: Mapping[str, Any]) -> dict:
    fields = resource.mapper.to_db(payload)
    try:
        row = await repository.insert_row(db, resource.table, fields)
    except asyncpg.UniqueViolationError as exc:
        raise _conflict(exc) from exc
    return resource.mapper.to_api(row)


async def update_item(db: Database, resource: Resource, item_id: int, payload: Mapping[str, Any]) -> dict:
    fields = resource.mapper.to_db(payload)
    # The path id is authoritative; an id in the body is ignored.
    fields.pop("id", None)
    try:
        row = await repository.update_row(db, resource.table, item_id, fields)
    except asyncpg.UniqueViolationError as exc:
        raise _conflict(exc) from exc
    if row is None:
        raise _not_found(resource)
    return resource.mapper.to_api(row)


async def delete_item(db: Database, resource: Resource, item_id: int) -> dict[str, Any]:
    deleted = await repository.delete_row(db, resource.table, item_id)
    if not deleted:
        raise _not_found(resource)
    return {"ok": True, "id": item_id}


async def replace_items(db: Database, resource: Resource, payloads: list[Mapping[str, Any]]) -> list[dict]:
    try:
        rows = await repository.replace_all(
            db,
            resource.table,
            [resource.mapper.to_db(payload) for payload in payloads],
        )
    except asyncpg.UniqueViolationError as exc:
        raise _conflict(exc) from exc
    return [resource.mapper.to_api(row) for row in rows]


async def get_singleton(db: Database, resource: Resource) -> dict | None:
    row = await repository.get_singleton(db, resource.table)
    return resource.mapper.to_api(row)


async def put_singleton(db: Database, resource: Resource, payload: Mapping[str, Any]) -> dict:
    row = await repository.upsert_singleton(db, resource.table, resource.mapper.to_db(payload))
    return resource.mapper.to_api(row)
