"""
Pydantic schemas for write payloads.

Every field is optional. Routes pass `model_dump(exclude_unset=True)` to the
mappers, so a field left out of the request body is left out of the UPDATE,
while an explicit `null` clears the column.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def present(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UserPayload(_Payload):
    id: int | None = None
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    avatarUrl: str | None = None
    # Takes priority over avatarUrl when both are sent.
    formalPhotoUrl: str | None = None
    isVerified: bool | int | str | None = None
    phoneNumber: str | None = None
    mediaName: str | None = None
    position: str | None = None
    ukwCertification: str | None = None


class ArticlePayload(_Payload):
    id: int | None = None
    title: str | None = None
    content: str | None = None
    snippet: str | None = None
    status: str | None = None
    authorId: int | None = None
    editorFeedback: str | None = None
    coverImageUrl: str | None = None
    imageUrl: str | None = None


class StructureItem(_Payload):
    id: int | None = None
    name: str | None = None
    position: str | None = None
    photoUrl: str | None = None


class PartnerItem(_Payload):
    id: int | None = None
    name: str | None = None
    logoUrl: str | None = None
    link: str | None = None


class ContactInfoPayload(_Payload):
    organizationName: str | None = None
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    siteLogo: str | None = None
    faviconUrl: str | None = None
    socials: dict[str, Any] | None = None


class LegalityPayload(_Payload):
    text: str | None = None
    sk: str | None = None


class ProfilePayload(_Payload):
    about: str | None = None
    vision: str | None = None
    mission: list[Any] | None = None
    purpose: str | None = None
    legality: LegalityPayload | None = None
    adArt: str | None = None
