"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=200)
    password: str = Field(..., min_length=1, max_length=128)
    is_admin: bool = Field(default=False, alias="isAdmin")


class LoginRequest(BaseModel):
    # Empty credentials reach the login check and fail there with 401.
    username: str = Field(..., max_length=200)
    password: str = Field(..., max_length=128)


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str
