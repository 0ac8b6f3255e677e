"""
Aggregate API endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database
from core.dependencies import get_db

from . import service

router = APIRouter()


@router.get("/api/all-data")
async def all_data(db: Database = Depends(get_db)) -> dict:
    """
    Everything the site needs on first load. Tables that cannot be read
    come back empty (or null for singletons) instead of failing the request.
    """
    result = await service.fetch_aggregate(db)
    return result.payload
