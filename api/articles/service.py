"""
Article business logic.

Each call loads the whole collection; mutations save it back whole. There is
no lock, so concurrent writers on this collection can lose updates.
"""

from __future__ import annotations

import logging
from typing import Any

from core.store import RecordStore

from . import repository

logger = logging.getLogger(__name__)


async def list_articles(*, store: RecordStore) -> list[dict[str, Any]]:
    return await repository.list_articles(store)


async def get_article(article_id: Any, *, store: RecordStore) -> dict[str, Any] | None:
    articles = await repository.list_articles(store)
    return repository.find_article(articles, article_id)


async def create_article(title: str, content: str, *, store: RecordStore) -> dict[str, Any]:
    articles = await repository.list_articles(store)
    row = await repository.insert_article(store, articles=articles, title=title, content=content)
    logger.info("article_created id=%s", row["id"])
    return row


async def update_article(
    article_id: Any,
    title: str,
    content: str,
    *,
    store: RecordStore,
) -> dict[str, Any] | None:
    articles = await repository.list_articles(store)
    row = await repository.replace_article(
        store,
        articles=articles,
        article_id=article_id,
        title=title,
        content=content,
    )
    if row is not None:
        logger.info("article_updated id=%s", row.get("id"))
    return row


async def delete_article(article_id: Any, *, store: RecordStore) -> dict[str, Any] | None:
    articles = await repository.list_articles(store)
    row = await repository.remove_article(store, articles=articles, article_id=article_id)
    if row is not None:
        logger.info("article_deleted id=%s", row.get("id"))
    return row
