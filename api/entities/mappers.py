"""
Per-entity mappers.

Read side: current column first, then legacy names that older schemas used.
Write side: current column only; override fields listed before general ones.
"""

from __future__ import annotations

from typing import Any, Mapping

from .fields import EntityMapper, encode_json, field_spec, json_list, json_object, to_flag

USER = EntityMapper(
    "user",
    (
        field_spec("name"),
        field_spec("email"),
        field_spec("password"),
        field_spec("role"),
        field_spec("avatarUrl", "avatar_url", "avatarUrl", sources=("formalPhotoUrl", "avatarUrl")),
        field_spec("isVerified", "is_verified", "isVerified", default=0, read=to_flag, write=to_flag),
        field_spec("phoneNumber", "phone_number", "phoneNumber"),
        field_spec("mediaName", "media_name", "mediaName"),
        field_spec("position"),
        field_spec("ukwCertification", "ukw_certification", "ukwCertification"),
    ),
)

ARTICLE = EntityMapper(
    "article",
    (
        field_spec("title"),
        field_spec("content"),
        field_spec("snippet"),
        field_spec("status"),
        field_spec("authorId", "authorId", "author_id"),
        field_spec("editorFeedback", "editor_feedback", "editorFeedback"),
        field_spec(
            "coverImageUrl",
            "cover_image_url",
            "coverImageUrl",
            "imageUrl",
            "image_url",
            mirrors=("imageUrl",),
            sources=("coverImageUrl", "imageUrl"),
        ),
    ),
)

PARTNER = EntityMapper(
    "partner",
    (
        field_spec("name"),
        field_spec("logoUrl", "logo_url", "logoUrl"),
        field_spec("link", "link", "websiteUrl"),
    ),
)

STRUCTURE = EntityMapper(
    "structure",
    (
        field_spec("name"),
        field_spec("position"),
        field_spec("photoUrl", "photo_url", "photoUrl"),
    ),
)

PROGRAM = EntityMapper(
    "program",
    (
        field_spec("title"),
        field_spec("description"),
        field_spec("icon"),
    ),
)

ANNOUNCEMENT = EntityMapper(
    "announcement",
    (
        field_spec("title"),
        field_spec("content"),
    ),
)

GALLERY = EntityMapper(
    "gallery",
    (
        field_spec("title", "title", "album"),
        field_spec("imageUrl", "imageUrl", "image_url"),
        field_spec("description", "description", "caption"),
    ),
)

COMMENT = EntityMapper(
    "comment",
    (
        field_spec("articleId", "articleId", "article_id"),
        field_spec("userId", "userId", "user_id"),
        field_spec("content"),
        field_spec("status"),
    ),
)

NOTIFICATION = EntityMapper(
    "notification",
    (
        field_spec("userId", "userId", "user_id"),
        field_spec("message"),
        field_spec("isRead", "isRead", "is_read", default=0, read=to_flag, write=to_flag),
        field_spec("link"),
        field_spec("timestamp"),
    ),
)

INSPIRATION_NOTE = EntityMapper(
    "inspiration_note",
    (
        field_spec("userId", "userId", "user_id"),
        field_spec("content"),
        field_spec("timestamp"),
    ),
)

LEGAL_CONTENT = EntityMapper(
    "legal_content",
    (
        field_spec("pageKey", "page_key", "pageKey"),
        field_spec("title"),
        field_spec("content"),
    ),
)

# Singleton rows: no id in the API shape, empty strings instead of nulls.
CONTACT_INFO = EntityMapper(
    "contact_info",
    (
        field_spec("organizationName", default="", blank_is_missing=True),
        field_spec("address", default="", blank_is_missing=True),
        field_spec("email", default="", blank_is_missing=True),
        field_spec("phone", default="", blank_is_missing=True),
        field_spec("siteLogo", "logo_url", "site_logo", default="", blank_is_missing=True),
        field_spec("faviconUrl", "favicon_url", "faviconUrl", default="", blank_is_missing=True),
        field_spec("socials", default=None, read=json_object, write=encode_json),
    ),
    id_column=None,
)

SITE_PROFILE = EntityMapper(
    "site_profile",
    (
        field_spec("about", default="", blank_is_missing=True),
        field_spec("vision", default="", blank_is_missing=True),
        field_spec("mission", default=None, read=json_list, write=encode_json),
        field_spec("purpose", default="", blank_is_missing=True),
        field_spec("text", "legality_text", group="legality", default="", blank_is_missing=True),
        field_spec("sk", "legality_sk", group="legality", default="", blank_is_missing=True),
        field_spec("adArt", "ad_art", default="", blank_is_missing=True),
    ),
    id_column=None,
)

MAPPERS: dict[str, EntityMapper] = {
    mapper.kind: mapper
    for mapper in (
        USER,
        ARTICLE,
        PARTNER,
        STRUCTURE,
        PROGRAM,
        ANNOUNCEMENT,
        GALLERY,
        COMMENT,
        NOTIFICATION,
        INSPIRATION_NOTE,
        LEGAL_CONTENT,
        CONTACT_INFO,
        SITE_PROFILE,
    )
}


def get_mapper(kind: str) -> EntityMapper:
    try:
        return MAPPERS[kind]
    except KeyError:
        raise KeyError(f"Unknown entity kind: {kind!r}") from None


def map_row_to_api(kind: str, row: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return get_mapper(kind).to_api(row)


def map_api_to_db(kind: str, payload: Mapping[str, Any] | None) -> dict[str, Any]:
    return get_mapper(kind).to_db(payload)
