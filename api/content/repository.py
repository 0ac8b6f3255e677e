"""
Content persistence (raw SQL).

Column names come from the entity mappers, never from request bodies.
They are quoted since several are camelCase.
"""

from __future__ import annotations

from typing import Any

from core.db import Database, column_list, placeholders, quote_ident, sync_id_sequence

SINGLETON_ID = 1


async def list_rows(db: Database, table: str) -> list[dict]:
    return await db.fetch_all(f"SELECT * FROM {quote_ident(table)} ORDER BY id")


async def get_row(db: Database, table: str, row_id: int) -> dict | None:
    return await db.fetch_one(
        f"SELECT * FROM {quote_ident(table)} WHERE id = $1",
        row_id,
    )


async def insert_row(db: Database, table: str, fields: dict[str, Any]) -> dict:
    if not fields:
        row = await db.fetch_one(f"INSERT INTO {quote_ident(table)} DEFAULT VALUES RETURNING *")
    else:
        row = await db.fetch_one(
            f"""
            INSERT INTO {quote_ident(table)} ({column_list(fields)})
            VALUES ({placeholders(len(fields))})
            RETURNING *
            """,
            *fields.values(),
        )
    if row is None:
        raise RuntimeError(f"Failed to insert into {table}.")
    return row


async def update_row(db: Database, table: str, row_id: int, fields: dict[str, Any]) -> dict | None:
    """
    Update only the given columns. Returns the full row, or None if missing.
    """
    if not fields:
        return await get_row(db, table, row_id)

    assignments = ", ".join(f"{quote_ident(column)} = ${i}" for i, column in enumerate(fields, start=2))
    return await db.fetch_one(
        f"""
        UPDATE {quote_ident(table)}
        SET {assignments}
        WHERE id = $1
        RETURNING *
        """,
        row_id,
        *fields.values(),
    )


async def delete_row(db: Database, table: str, row_id: int) -> bool:
    row = await db.fetch_one(
        f"DELETE FROM {quote_ident(table)} WHERE id = $1 RETURNING id",
        row_id,
    )
    return row is not None


async def replace_all(db: Database, table: str, rows: list[dict[str, Any]]) -> list[dict]:
    """
    Delete every row, then insert the given ones.

    Rows carrying an explicit id go in first and the id sequence is synced
    before any id-less row draws from it. The result keeps the input order.

    Not atomic: a failure halfway leaves the table partially rewritten.
    """
    await db.execute(f"DELETE FROM {quote_ident(table)}")

    inserted: dict[int, dict] = {}
    with_id = [i for i, fields in enumerate(rows) if "id" in fields]
    for i in with_id:
        inserted[i] = await insert_row(db, table, rows[i])
    if with_id:
        await sync_id_sequence(db, table)
    for i, fields in enumerate(rows):
        if i not in inserted:
            inserted[i] = await insert_row(db, table, fields)
    return [inserted[i] for i in range(len(rows))]


async def get_singleton(db: Database, table: str) -> dict | None:
    return await get_row(db, table, SINGLETON_ID)


async def upsert_singleton(db: Database, table: str, fields: dict[str, Any]) -> dict:
    """
    Insert or update the singleton row (id = 1), touching only the given columns.
    """
    if not fields:
        await db.execute(
            f"INSERT INTO {quote_ident(table)} (id) VALUES ($1) ON CONFLICT (id) DO NOTHING",
            SINGLETON_ID,
        )
        row = await get_singleton(db, table)
    else:
        updates = ", ".join(f"{quote_ident(c)} = EXCLUDED.{quote_ident(c)}" for c in fields)
        row = await db.fetch_one(
            f"""
            INSERT INTO {quote_ident(table)} (id, {column_list(fields)})
            VALUES ($1, {placeholders(len(fields), start=2)})
            ON CONFLICT (id) DO UPDATE
            SET {updates}
            RETURNING *
            """,
            SINGLETON_ID,
            *fields.values(),
        )
    if row is None:
        raise RuntimeError(f"Failed to upsert {table}.")
    return row
