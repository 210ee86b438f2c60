"""
Article persistence over the `articles` collection.

Every function takes the already-loaded collection where it mutates, so a
caller's load -> compute -> save stays visible in one place.
"""

from __future__ import annotations

from typing import Any

from core.store import RecordStore, find_index, next_id

ARTICLES = "articles"


async def list_articles(store: RecordStore) -> list[dict[str, Any]]:
    return await store.load(ARTICLES)


def find_article(articles: list[dict[str, Any]], article_id: Any) -> dict[str, Any] | None:
    index = find_index(articles, article_id)
    return articles[index] if index is not None else None


async def insert_article(
    store: RecordStore,
    *,
    articles: list[dict[str, Any]],
    title: str,
    content: str,
) -> dict[str, Any]:
    row = {"id": next_id(articles), "title": title, "content": content}
    await store.save(ARTICLES, [*articles, row])
    return row


async def replace_article(
    store: RecordStore,
    *,
    articles: list[dict[str, Any]],
    article_id: Any,
    title: str,
    content: str,
) -> dict[str, Any] | None:
    """
    Overwrite title/content of the first match. Returns None (and saves nothing) when missing.
    """
    index = find_index(articles, article_id)
    if index is None:
        return None

    updated = {**articles[index], "title": title, "content": content}
    next_rows = list(articles)
    next_rows[index] = updated
    await store.save(ARTICLES, next_rows)
    return updated


async def remove_article(
    store: RecordStore,
    *,
    articles: list[dict[str, Any]],
    article_id: Any,
) -> dict[str, Any] | None:
    index = find_index(articles, article_id)
    if index is None:
        return None

    next_rows = list(articles)
    removed = next_rows.pop(index)
    await store.save(ARTICLES, next_rows)
    return removed
