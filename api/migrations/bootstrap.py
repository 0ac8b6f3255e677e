"""
Idempotent table bootstrap.

Tables are created in their current column convention. Older deployments
may still carry legacy column names; `reconciler` takes care of those.
"""

from __future__ import annotations

import logging

from core.db import Database

logger = logging.getLogger(__name__)

TABLES: dict[str, str] = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            name VARCHAR(100),
            email VARCHAR(100) UNIQUE,
            password VARCHAR(100),
            role VARCHAR(50),
            avatar_url VARCHAR(255),
            is_verified SMALLINT DEFAULT 0,
            phone_number VARCHAR(20),
            media_name VARCHAR(100),
            position VARCHAR(100),
            ukw_certification VARCHAR(50)
        )
    """,
    "articles": """
        CREATE TABLE IF NOT EXISTS articles (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            title VARCHAR(255),
            content TEXT,
            snippet VARCHAR(255),
            cover_image_url VARCHAR(255),
            status VARCHAR(50),
            "authorId" INTEGER,
            editor_feedback TEXT
        )
    """,
    "site_profile": """
        CREATE TABLE IF NOT EXISTS site_profile (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            about TEXT,
            vision TEXT,
            mission TEXT,
            purpose TEXT,
            legality_text TEXT,
            legality_sk TEXT,
            ad_art TEXT
        )
    """,
    "contact_info": """
        CREATE TABLE IF NOT EXISTS contact_info (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            "organizationName" VARCHAR(100),
            address VARCHAR(255),
            email VARCHAR(100),
            phone VARCHAR(50),
            socials JSONB,
            logo_url VARCHAR(255),
            favicon_url VARCHAR(255)
        )
    """,
    "programs": """
        CREATE TABLE IF NOT EXISTS programs (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            title VARCHAR(255),
            description TEXT,
            icon VARCHAR(10)
        )
    """,
    "structure": """
        CREATE TABLE IF NOT EXISTS structure (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            name VARCHAR(100),
            position VARCHAR(100),
            photo_url VARCHAR(255)
        )
    """,
    "announcements": """
        CREATE TABLE IF NOT EXISTS announcements (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            title VARCHAR(255),
            content TEXT
        )
    """,
    "gallery": """
        CREATE TABLE IF NOT EXISTS gallery (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            title VARCHAR(255),
            "imageUrl" VARCHAR(255),
            description TEXT
        )
    """,
    "comments": """
        CREATE TABLE IF NOT EXISTS comments (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            "articleId" INTEGER,
            "userId" INTEGER,
            content TEXT,
            status VARCHAR(50)
        )
    """,
    "notifications": """
        CREATE TABLE IF NOT EXISTS notifications (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            "userId" INTEGER,
            message VARCHAR(255),
            "isRead" SMALLINT DEFAULT 0
        )
    """,
    "inspiration_notes": """
        CREATE TABLE IF NOT EXISTS inspiration_notes (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            "userId" INTEGER,
            content TEXT,
            "timestamp" TIMESTAMPTZ DEFAULT now()
        )
    """,
    "partners": """
        CREATE TABLE IF NOT EXISTS partners (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            name VARCHAR(100),
            logo_url VARCHAR(255),
            link VARCHAR(255)
        )
    """,
    "legal_content": """
        CREATE TABLE IF NOT EXISTS legal_content (
            id INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            page_key VARCHAR(50),
            title VARCHAR(255),
            content TEXT
        )
    """,
}


async def ensure_tables(db: Database) -> None:
    """
    Create every table that does not exist yet. Existing tables are untouched.
    """
    for table, ddl in TABLES.items():
        await db.execute(ddl)
        logger.debug("table_ensured table=%s", table)
    logger.info("tables_ensured count=%s", len(TABLES))
