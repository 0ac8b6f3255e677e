"""
FastAPI dependencies shared by the feature routers.
"""

from __future__ import annotations

from fastapi import Request

from .db import Database, StoreUnavailableError


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        error = getattr(request.app.state, "db_error", None)
        raise StoreUnavailableError(str(error) if error else "Database is not connected.")
    return db
