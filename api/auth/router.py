"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.store import RecordStore, get_store

from . import dependencies, schemas, security, service

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    store: RecordStore = Depends(get_store),
) -> schemas.MessageResponse:
    await service.register(payload, store=store)
    return schemas.MessageResponse(message="User registered successfully")


@router.post("/login")
async def login(
    payload: schemas.LoginRequest,
    store: RecordStore = Depends(get_store),
) -> schemas.TokenResponse:
    return await service.login(payload, store=store)


@router.get("/protected")
async def protected(
    _: security.SessionClaim = Depends(dependencies.get_current_claim),
) -> schemas.MessageResponse:
    return schemas.MessageResponse(message="Protected route accessed successfully")
