"""
Aggregate ("all data") orchestration.

Flow:
1) Run one read per table concurrently (`fetcher.fetch_all`)
2) Map each row-set through its entity mapper
3) Shape the keyed / singleton tables
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from core.db import Database
from core.outcome import Outcome, combine
from entities import mappers

from .fetcher import AggregateQuery, QueryResult, fetch_all

logger = logging.getLogger(__name__)

# Order matters: results are unpacked by position in `fetch_aggregate`.
AGGREGATE_QUERIES: tuple[AggregateQuery, ...] = (
    AggregateQuery("SELECT * FROM users ORDER BY id"),
    AggregateQuery("SELECT * FROM articles ORDER BY id"),
    AggregateQuery("SELECT * FROM site_profile ORDER BY id LIMIT 1"),
    AggregateQuery("SELECT * FROM contact_info ORDER BY id LIMIT 1"),
    AggregateQuery("SELECT * FROM programs ORDER BY id"),
    AggregateQuery("SELECT * FROM structure ORDER BY id"),
    AggregateQuery("SELECT * FROM announcements ORDER BY id"),
    AggregateQuery("SELECT * FROM gallery ORDER BY id"),
    AggregateQuery("SELECT * FROM comments ORDER BY id"),
    AggregateQuery("SELECT * FROM notifications ORDER BY id"),
    AggregateQuery("SELECT * FROM inspiration_notes ORDER BY id"),
    AggregateQuery("SELECT * FROM partners ORDER BY id"),
    AggregateQuery("SELECT * FROM legal_content ORDER BY id"),
)

SLOT_NAMES: tuple[str, ...] = (
    "users",
    "articles",
    "profileContent",
    "contactInfo",
    "programs",
    "structure",
    "announcements",
    "galleryImages",
    "comments",
    "notifications",
    "inspirationNotes",
    "partners",
    "legalContent",
)


@dataclass(frozen=True)
class AggregateResult:
    payload: dict[str, Any]
    slots: dict[str, Outcome]
    outcome: Outcome


def fold_legal_content(rows: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """
    {page_key: {title, content}}. Later rows win; rows without a key are skipped.
    """
    folded: dict[str, dict[str, Any]] = {}
    for row in rows:
        item = mappers.LEGAL_CONTENT.to_api(row)
        key = item["pageKey"] if item else None
        if key is None or key == "":
            continue
        folded[str(key)] = {"title": item["title"], "content": item["content"]}
    return folded


def singleton(mapper: mappers.EntityMapper, rows: list[dict[str, Any]]) -> dict[str, Any] | None:
    """
    First row mapped, or None when the table is empty. Never a fabricated object.
    """
    if not rows:
        return None
    return mapper.to_api(rows[0])


def _map_all(mapper: mappers.EntityMapper, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [mapper.to_api(row) for row in rows]


def shape_payload(results: list[QueryResult]) -> dict[str, Any]:
    (
        users,
        articles,
        profile,
        contact,
        programs,
        structure,
        announcements,
        gallery,
        comments,
        notifications,
        inspiration_notes,
        partners,
        legal_content,
    ) = (r.rows for r in results)

    return {
        "users": _map_all(mappers.USER, users),
        "articles": _map_all(mappers.ARTICLE, articles),
        "profileContent": singleton(mappers.SITE_PROFILE, profile),
        "contactInfo": singleton(mappers.CONTACT_INFO, contact),
        "programs": _map_all(mappers.PROGRAM, programs),
        "structure": _map_all(mappers.STRUCTURE, structure),
        "announcements": _map_all(mappers.ANNOUNCEMENT, announcements),
        "galleryImages": _map_all(mappers.GALLERY, gallery),
        "comments": _map_all(mappers.COMMENT, comments),
        "notifications": _map_all(mappers.NOTIFICATION, notifications),
        "inspirationNotes": _map_all(mappers.INSPIRATION_NOTE, inspiration_notes),
        "partners": _map_all(mappers.PARTNER, partners),
        "legalContent": fold_legal_content(legal_content),
    }


async def fetch_aggregate(db: Database) -> AggregateResult:
    results = await fetch_all(db, AGGREGATE_QUERIES)
    slots = {name: result.outcome for name, result in zip(SLOT_NAMES, results)}
    outcome = combine(list(slots.values()))
    if not outcome.ok:
        failed = [name for name, slot in slots.items() if not slot.ok]
        logger.warning("aggregate_degraded slots=%s", ",".join(failed))
    return AggregateResult(payload=shape_payload(results), slots=slots, outcome=outcome)
