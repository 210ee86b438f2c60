"""
Auth dependencies for protected FastAPI routes.

No credential presented -> 401. A presented credential that fails verification -> 403.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import security, service


def _extract_bearer_token(authorization: str | None) -> str:
    """
    Second space-separated part of the header, e.g. "Bearer <token>".

    Only an absent header or one with no second part means "no credential";
    anything else is handed to token verification, which answers 403.
    """
    raw = authorization or ""
    if not raw.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
        )

    parts = raw.split(" ")
    if len(parts) < 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return parts[1]


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_claim(access_token: str = Depends(get_bearer_token)) -> security.SessionClaim:
    return service.claim_from_token(access_token)
