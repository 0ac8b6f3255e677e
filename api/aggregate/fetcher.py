"""
Concurrent, failure-isolating batch reads.

Each query runs on its own pooled connection via `asyncio.gather`. A query
that fails (missing table, column not migrated yet, bad SQL) yields an
empty row-set at its position with a degraded outcome. Only an unreachable
store aborts the batch.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from core.db import Database, StoreUnavailableError
from core.outcome import Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateQuery:
    statement: str
    params: tuple[Any, ...] = ()


@dataclass(frozen=True)
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    outcome: Outcome = field(default_factory=Outcome.success)


def _preview(statement: str, limit: int = 60) -> str:
    return " ".join(statement.split())[:limit]


async def _run_one(db: Database, query: AggregateQuery) -> QueryResult:
    try:
        rows = await db.fetch_all(query.statement, *query.params)
    except StoreUnavailableError as exc:
        return QueryResult([], Outcome.fatal(str(exc)))
    except Exception as exc:
        logger.warning("aggregate_query_failed query=%r error=%s", _preview(query.statement), exc)
        return QueryResult([], Outcome.degraded(f"{_preview(query.statement)}: {exc}"))
    return QueryResult(rows, Outcome.success())


async def fetch_all(db: Database, queries: Sequence[AggregateQuery]) -> list[QueryResult]:
    """
    Run all queries concurrently. Results line up with `queries` by index.

    Raises StoreUnavailableError if any query could not reach the store.
    """
    results = await asyncio.gather(*(_run_one(db, q) for q in queries))
    for result in results:
        if result.outcome.is_fatal:
            raise StoreUnavailableError(result.outcome.reason or "Database is unreachable.")
    return list(results)
