"""
Bootstrap, reconcile and seed a database with demo content.

Usage (from the `api/` directory):

    python -m migrations.seed            # create/reconcile, insert missing demo rows
    python -m migrations.seed --reset    # same, but wipe every table first

Inserts use ON CONFLICT DO NOTHING, so re-running never duplicates rows
or overwrites edits made through the API.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from core.db import Database, column_list, placeholders, quote_ident, sync_id_sequence

from . import bootstrap, reconciler
from .directives import DEFAULT_DIRECTIVES

logger = logging.getLogger(__name__)

SEED_ROWS: dict[str, list[dict]] = {
    "users": [
        {
            "id": 1, "name": "Site Admin", "email": "admin@example.org", "password": "admin123",
            "role": "Admin", "avatar_url": "https://via.placeholder.com/150", "is_verified": 1,
            "phone_number": "08123456789", "media_name": "Example Press", "position": "Administrator",
            "ukw_certification": "Junior",
        },
        {
            "id": 2, "name": "Reporter One", "email": "reporter1@example.org", "password": "reporter123",
            "role": "Journalist", "avatar_url": "https://via.placeholder.com/150", "is_verified": 0,
            "phone_number": "082233445566", "media_name": "City News", "position": "Reporter",
            "ukw_certification": "None",
        },
        {
            "id": 3, "name": "Desk Editor", "email": "editor@example.org", "password": "editor123",
            "role": "Editor", "avatar_url": "https://via.placeholder.com/150", "is_verified": 1,
            "phone_number": "08123456780", "media_name": "Example Press", "position": "Editor",
            "ukw_certification": "Intermediate",
        },
    ],
    "programs": [
        {"id": 1, "title": "Journalism Training", "description": "Skills for young reporters", "icon": "📰"},
        {"id": 2, "title": "Media IT Workshop", "description": "Technology for digital newsrooms", "icon": "💻"},
        {"id": 3, "title": "Public Forum", "description": "A venue for community voices", "icon": "👥"},
    ],
    "structure": [
        {"id": 1, "name": "Chair Person", "position": "Chair", "photo_url": "https://via.placeholder.com/150"},
        {"id": 2, "name": "Secretary Person", "position": "Secretary", "photo_url": "https://via.placeholder.com/150"},
        {"id": 3, "name": "Treasurer Person", "position": "Treasurer", "photo_url": "https://via.placeholder.com/150"},
    ],
    "contact_info": [
        {
            "id": 1, "organizationName": "Example Press Association", "address": "1 Example Street",
            "email": "info@example.org", "phone": "0812-3456-7890",
            "socials": json.dumps({"facebook": "https://facebook.com/example", "instagram": "https://instagram.com/example"}),
            "logo_url": "https://picsum.photos/seed/site-logo/200/200",
            "favicon_url": "https://picsum.photos/seed/site-favicon/32/32",
        },
    ],
    "site_profile": [
        {
            "id": 1,
            "about": "A professional association for online journalists.",
            "vision": "A credible and responsible online press.",
            "mission": json.dumps(["Raise reporting skills", "Uphold press ethics", "Fight misinformation"]),
            "purpose": "A healthy online media ecosystem.",
            "legality_text": "Registered as a professional organization.",
            "legality_sk": "SK-123/2025",
            "ad_art": "The bylaws define duties, functions and governance.",
        },
    ],
    "announcements": [
        {"id": 1, "title": "Monthly Meeting", "content": "The monthly members meeting is next week."},
        {"id": 2, "title": "Writing Workshop", "content": "Registration for the feature writing workshop is open."},
    ],
    "gallery": [
        {"id": 1, "title": "Board Inauguration", "imageUrl": "https://picsum.photos/seed/gallery1/800/600", "description": "Inauguration of the board"},
        {"id": 2, "title": "Media IT Workshop", "imageUrl": "https://picsum.photos/seed/gallery2/800/600", "description": "Workshop session"},
    ],
    "partners": [
        {"id": 1, "name": "City Government", "logo_url": "https://picsum.photos/seed/partner1/200/80", "link": "https://city.example.gov"},
        {"id": 2, "name": "Example University", "logo_url": "https://picsum.photos/seed/partner2/200/80", "link": "https://univ.example.edu"},
    ],
    "legal_content": [
        {"id": 1, "page_key": "codeOfEthics", "title": "Code of Ethics", "content": "1. Be accountable\n2. Be accurate\n3. Be fair"},
        {"id": 2, "page_key": "cyberMediaGuidelines", "title": "Cyber Media Guidelines", "content": "1. Verify\n2. Clarify\n3. Correct"},
        {"id": 3, "page_key": "legalAid", "title": "Legal Aid", "content": "Members receive advocacy and legal aid."},
    ],
    "articles": [
        {
            "id": 1, "title": "Board Inauguration", "content": "Full report of the inauguration ceremony.",
            "snippet": "Inauguration summary...", "status": "Published", "authorId": 2, "editor_feedback": None,
            "cover_image_url": "https://picsum.photos/seed/news1/1200/630",
        },
        {
            "id": 2, "title": "Young Journalists Workshop", "content": "Review of the workshop on news writing.",
            "snippet": "Workshop summary...", "status": "Published", "authorId": 2, "editor_feedback": None,
            "cover_image_url": "https://picsum.photos/seed/news2/1200/630",
        },
        {
            "id": 3, "title": "Public Forum Recap", "content": "Notes from the public forum on local issues.",
            "snippet": "Forum summary...", "status": "Pending", "authorId": 2,
            "editor_feedback": "Tighten the paragraphs and add a source.",
            "cover_image_url": "https://picsum.photos/seed/news3/1200/630",
        },
    ],
    "comments": [
        {"id": 1, "articleId": 1, "userId": 2, "content": "Very informative, thank you.", "status": "Approved"},
        {"id": 2, "articleId": 1, "userId": 3, "content": "Hope this becomes a regular event.", "status": "Pending"},
    ],
    "notifications": [
        {"id": 1, "userId": 2, "message": 'Your article "Board Inauguration" was published.', "isRead": 0},
        {"id": 2, "userId": 2, "message": 'Your article "Public Forum Recap" needs revision.', "isRead": 0},
    ],
    "inspiration_notes": [
        {"id": 1, "userId": 2, "content": "Explore the local press role in government transparency."},
    ],
}

# Older databases may hold these articles without a cover image.
COVER_BACKFILL: dict[int, str] = {
    1: "https://picsum.photos/seed/news1/1200/630",
    2: "https://picsum.photos/seed/news2/1200/630",
    3: "https://picsum.photos/seed/news3/1200/630",
}


async def reset_tables(db: Database) -> None:
    for table in bootstrap.TABLES:
        await db.execute(f"DELETE FROM {quote_ident(table)}")
    logger.warning("seed_reset tables=%s", len(bootstrap.TABLES))


async def insert_rows(db: Database, table: str, rows: list[dict]) -> None:
    for row in rows:
        columns = list(row)
        await db.execute(
            f"INSERT INTO {quote_ident(table)} ({column_list(columns)}) "
            f"VALUES ({placeholders(len(columns))}) "
            "ON CONFLICT DO NOTHING",
            *row.values(),
        )
    await sync_id_sequence(db, table)


async def backfill_covers(db: Database) -> None:
    for article_id, url in COVER_BACKFILL.items():
        await db.execute(
            """
            UPDATE articles
            SET cover_image_url = $2
            WHERE id = $1
              AND (cover_image_url IS NULL OR cover_image_url = '')
            """,
            article_id,
            url,
        )


async def seed(db: Database, *, reset: bool = False) -> None:
    await bootstrap.ensure_tables(db)
    await reconciler.reconcile_schema(db, DEFAULT_DIRECTIVES)
    await reconciler.run_followups(db)

    if reset:
        await reset_tables(db)

    for table, rows in SEED_ROWS.items():
        await insert_rows(db, table, rows)
    await backfill_covers(db)
    logger.info("seed_done tables=%s", len(SEED_ROWS))


async def _main(reset: bool) -> None:
    db = await Database.connect()
    try:
        await seed(db, reset=reset)
    finally:
        await db.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create, reconcile and seed the content database.")
    parser.add_argument("--reset", action="store_true", help="delete all rows before seeding")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    asyncio.run(_main(args.reset))


if __name__ == "__main__":
    main()
