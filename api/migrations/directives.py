"""
Column reconciliation rules for this deployment.

A directive names one semantic attribute: where it may still live (legacy
column) and where it must end up (current column). Directives whose legacy
and current names are equal only make sure the column exists.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Directive:
    table: str
    legacy_column: str
    current_column: str
    definition: str

    @property
    def is_rename(self) -> bool:
        return self.legacy_column != self.current_column

    def describe(self) -> str:
        if self.is_rename:
            return f"{self.table}.{self.legacy_column}->{self.current_column}"
        return f"{self.table}.{self.current_column}"


DEFAULT_DIRECTIVES: tuple[Directive, ...] = (
    Directive("users", "avatarUrl", "avatar_url", "VARCHAR(255)"),
    Directive("users", "isVerified", "is_verified", "SMALLINT DEFAULT 0"),
    Directive("users", "phoneNumber", "phone_number", "VARCHAR(20)"),
    Directive("users", "mediaName", "media_name", "VARCHAR(100)"),
    Directive("users", "ukwCertification", "ukw_certification", "VARCHAR(50)"),
    Directive("contact_info", "site_logo", "logo_url", "VARCHAR(255)"),
    Directive("contact_info", "faviconUrl", "favicon_url", "VARCHAR(255)"),
    Directive("structure", "photoUrl", "photo_url", "VARCHAR(255)"),
    Directive("programs", "icon", "icon", "VARCHAR(10)"),
    Directive("partners", "logoUrl", "logo_url", "VARCHAR(255)"),
    Directive("partners", "websiteUrl", "link", "VARCHAR(255)"),
    # Gallery: older schemas used snake_case image and album/caption names.
    Directive("gallery", "image_url", "imageUrl", "VARCHAR(255)"),
    Directive("gallery", "album", "title", "VARCHAR(255)"),
    Directive("gallery", "title", "title", "VARCHAR(255)"),
    Directive("gallery", "caption", "description", "TEXT"),
    Directive("gallery", "description", "description", "TEXT"),
    Directive("articles", "editorFeedback", "editor_feedback", "TEXT"),
    Directive("articles", "author_id", "authorId", "INTEGER"),
    Directive("articles", "image_url", "cover_image_url", "VARCHAR(255)"),
    Directive("articles", "imageUrl", "cover_image_url", "VARCHAR(255)"),
    Directive("articles", "cover_image_url", "cover_image_url", "VARCHAR(255)"),
    Directive("comments", "user_id", "userId", "INTEGER"),
    Directive("notifications", "user_id", "userId", "INTEGER"),
    Directive("notifications", "is_read", "isRead", "SMALLINT DEFAULT 0"),
    Directive("notifications", "link", "link", "VARCHAR(255)"),
    Directive("notifications", "timestamp", "timestamp", "TIMESTAMPTZ DEFAULT now()"),
)

# Best-effort alterations that are not renames. Failures are logged and skipped.
FOLLOWUP_STATEMENTS: tuple[str, ...] = (
    'ALTER TABLE notifications ALTER COLUMN id TYPE BIGINT',
)
