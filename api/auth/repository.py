"""
Auth persistence helpers over the `users` collection.

Stored shape (kept compatible with existing users.json files):
    {"username": str, "password": <bcrypt hash>, "isAdmin": bool}
"""

from __future__ import annotations

from typing import Any

from core.store import RecordStore

USERS = "users"


async def list_users(store: RecordStore) -> list[dict[str, Any]]:
    return await store.load(USERS)


def find_user(users: list[dict[str, Any]], username: str) -> dict[str, Any] | None:
    # Exact, case-sensitive match.
    for user in users:
        if user.get("username") == username:
            return user
    return None


async def get_user_by_username(store: RecordStore, username: str) -> dict[str, Any] | None:
    return find_user(await list_users(store), username)


async def insert_user(
    store: RecordStore,
    *,
    users: list[dict[str, Any]],
    username: str,
    password_hash: str,
    is_admin: bool = False,
) -> dict[str, Any]:
    """
    Append a user to an already-loaded collection and save it.
    """
    row = {"username": username, "password": password_hash, "isAdmin": bool(is_admin)}
    await store.save(USERS, [*users, row])
    return row
