"""
Article CRUD endpoints.

Open to anonymous callers, like the rest of the read/write article API.
Missing articles answer with a plain-text 404.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from core.store import RecordStore, get_store

from . import schemas, service

router = APIRouter()

NOT_FOUND_TEXT = "Article not found"


def _not_found() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND)


@router.get("/articles")
async def list_articles(store: RecordStore = Depends(get_store)) -> list[dict[str, Any]]:
    return await service.list_articles(store=store)


@router.get("/articles/{article_id}", response_model=None)
async def get_article(
    article_id: str,
    store: RecordStore = Depends(get_store),
) -> dict[str, Any] | PlainTextResponse:
    row = await service.get_article(article_id, store=store)
    if row is None:
        return _not_found()
    return row


@router.post("/articles", status_code=status.HTTP_201_CREATED)
async def create_article(
    request: schemas.ArticleWrite,
    store: RecordStore = Depends(get_store),
) -> dict[str, Any]:
    return await service.create_article(request.title, request.content, store=store)


@router.put("/articles/{article_id}", response_model=None)
async def update_article(
    article_id: str,
    request: schemas.ArticleWrite,
    store: RecordStore = Depends(get_store),
) -> dict[str, Any] | PlainTextResponse:
    row = await service.update_article(article_id, request.title, request.content, store=store)
    if row is None:
        return _not_found()
    return row


@router.delete("/articles/{article_id}", response_model=None)
async def delete_article(
    article_id: str,
    store: RecordStore = Depends(get_store),
) -> dict[str, Any] | PlainTextResponse:
    row = await service.delete_article(article_id, store=store)
    if row is None:
        return _not_found()
    return row
