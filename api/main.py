import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import asyncpg
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from aggregate import router as aggregate_router
from content import router as content_router
from core.db import Database, StoreUnavailableError
from migrations import bootstrap, reconciler
from migrations.directives import DEFAULT_DIRECTIVES

logger = logging.getLogger(__name__)


def auto_migrate_enabled() -> bool:
    return os.environ.get("AUTO_MIGRATE", "1").strip().lower() not in {"0", "false", "no", "off"}


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


async def migrate(db: Database) -> None:
    await bootstrap.ensure_tables(db)
    await reconciler.reconcile_schema(db, DEFAULT_DIRECTIVES)
    await reconciler.run_followups(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process. If the database is down we still start, and
    # every /api request answers 503 until the process is restarted.
    app.state.db = None
    app.state.db_error = None
    try:
        db = await Database.connect()
    except (StoreUnavailableError, asyncpg.PostgresError, RuntimeError) as exc:
        app.state.db_error = exc
        logger.error("database_connection_failed error=%s", exc)
    else:
        app.state.db = db

    if app.state.db is not None and auto_migrate_enabled():
        try:
            await migrate(app.state.db)
        except StoreUnavailableError as exc:
            # Lost the database mid-migration: same as never reaching it.
            logger.error("database_migration_unreachable error=%s", exc)
            app.state.db_error = exc
            await app.state.db.close()
            app.state.db = None
        except Exception:
            # Serve with the schema as it is; reads of missing parts degrade.
            logger.exception("database_migration_failed")

    try:
        yield
    finally:
        if app.state.db is not None:
            await app.state.db.close()
            app.state.db = None


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(lifespan=lifespan)
    app.state.db = None
    app.state.db_error = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins(),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable(_: Request, exc: StoreUnavailableError) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "message": "Service Unavailable: Could not connect to the database.",
                "error": {"code": exc.__class__.__name__, "message": str(exc)},
            },
        )

    app.include_router(aggregate_router.router, tags=["aggregate"])
    app.include_router(content_router.router, tags=["content"])

    @app.get("/")
    def root() -> dict:
        return {"message": "content-site api"}

    @app.get("/api")
    def health() -> dict:
        return {
            "message": "Content API is running!",
            "database": app.state.db is not None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
