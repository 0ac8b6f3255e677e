"""
Content API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database
from core.dependencies import get_db
from entities import schemas

from . import service

router = APIRouter(prefix="/api")


@router.get("/users")
async def list_users(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_items(db, service.USERS)


@router.get("/users/{user_id}")
async def get_user(user_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.get_item(db, service.USERS, user_id)


@router.post("/users", status_code=201)
async def create_user(request: schemas.UserPayload, db: Database = Depends(get_db)) -> dict:
    return await service.create_item(db, service.USERS, request.present())


@router.put("/users/{user_id}")
async def update_user(user_id: int, request: schemas.UserPayload, db: Database = Depends(get_db)) -> dict:
    """
    Partial update: only fields present in the body are written.
    """
    return await service.update_item(db, service.USERS, user_id, request.present())


@router.delete("/users/{user_id}")
async def delete_user(user_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.delete_item(db, service.USERS, user_id)


@router.get("/articles")
async def list_articles(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_items(db, service.ARTICLES)


@router.get("/articles/{article_id}")
async def get_article(article_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.get_item(db, service.ARTICLES, article_id)


@router.post("/articles", status_code=201)
async def create_article(request: schemas.ArticlePayload, db: Database = Depends(get_db)) -> dict:
    return await service.create_item(db, service.ARTICLES, request.present())


@router.put("/articles/{article_id}")
async def update_article(article_id: int, request: schemas.ArticlePayload, db: Database = Depends(get_db)) -> dict:
    return await service.update_item(db, service.ARTICLES, article_id, request.present())


@router.delete("/articles/{article_id}")
async def delete_article(article_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.delete_item(db, service.ARTICLES, article_id)


@router.put("/structure")
async def replace_structure(request: list[schemas.StructureItem], db: Database = Depends(get_db)) -> list[dict]:
    """
    Replace the whole organization structure with the given list.
    """
    return await service.replace_items(db, service.STRUCTURE, [item.present() for item in request])


@router.put("/partners")
async def replace_partners(request: list[schemas.PartnerItem], db: Database = Depends(get_db)) -> list[dict]:
    return await service.replace_items(db, service.PARTNERS, [item.present() for item in request])


@router.get("/contact-info")
async def get_contact_info(db: Database = Depends(get_db)) -> dict | None:
    return await service.get_singleton(db, service.CONTACT_INFO)


@router.put("/contact-info")
async def put_contact_info(request: schemas.ContactInfoPayload, db: Database = Depends(get_db)) -> dict:
    return await service.put_singleton(db, service.CONTACT_INFO, request.present())


@router.get("/profile")
async def get_profile(db: Database = Depends(get_db)) -> dict | None:
    return await service.get_singleton(db, service.SITE_PROFILE)


@router.put("/profile")
async def put_profile(request: schemas.ProfilePayload, db: Database = Depends(get_db)) -> dict:
    return await service.put_singleton(db, service.SITE_PROFILE, request.present())
