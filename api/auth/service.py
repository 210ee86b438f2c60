"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.store import RecordStore

from . import repository, schemas, security

logger = logging.getLogger(__name__)


async def register(payload: schemas.RegisterRequest, *, store: RecordStore) -> dict:
    users = await repository.list_users(store)
    if repository.find_user(users, payload.username) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )

    try:
        password_hash = security.hash_password(payload.password)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    user_row = await repository.insert_user(
        store,
        users=users,
        username=payload.username,
        password_hash=password_hash,
        is_admin=payload.is_admin,
    )
    logger.info("user_registered username=%s is_admin=%s", user_row["username"], user_row["isAdmin"])
    return user_row


async def authenticate(username: str, password: str, *, store: RecordStore) -> dict | None:
    """
    Return the stored user if the password matches, else None.
    """
    user_row = await repository.get_user_by_username(store, username)
    if user_row is None:
        return None
    if not security.verify_password(password, str(user_row.get("password") or "")):
        return None
    return user_row


async def login(payload: schemas.LoginRequest, *, store: RecordStore) -> schemas.TokenResponse:
    user_row = await authenticate(payload.username, payload.password, store=store)
    if user_row is None:
        logger.info("login_failed username=%s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = security.build_session_token(
        username=str(user_row["username"]),
        is_admin=bool(user_row.get("isAdmin", False)),
    )
    return schemas.TokenResponse(token=token)


def claim_from_token(access_token: str) -> security.SessionClaim:
    try:
        return security.decode_session_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(exc),
        ) from exc
