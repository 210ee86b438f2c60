"""
Auth security helpers: password hashing and session tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
import jwt

from core.settings import env_int, env_str

DEFAULT_BCRYPT_ROUNDS = 10


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class SessionClaim:
    username: str
    is_admin: bool

    def to_dict(self) -> dict:
        return {"username": self.username, "isAdmin": self.is_admin}


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def session_token_expire_minutes() -> int:
    # 0 keeps tokens valid until the secret changes.
    return max(env_int("SESSION_TOKEN_EXPIRE_MIN", 0), 0)


def bcrypt_rounds() -> int:
    # bcrypt accepts 4..31.
    return min(max(env_int("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS), 4), 31)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    try:
        return bcrypt.hashpw(password, bcrypt.gensalt(rounds=bcrypt_rounds())).decode("utf-8")
    except ValueError as exc:
        # Newer bcrypt releases refuse passwords over 72 bytes.
        raise AuthSecurityError("Password is too long.") from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_session_token(*, username: str, is_admin: bool) -> str:
    issued_at = now_epoch_s()
    payload: dict = {
        "username": username,
        "isAdmin": bool(is_admin),
        "iat": issued_at,
    }
    expire_minutes = session_token_expire_minutes()
    if expire_minutes:
        payload["exp"] = issued_at + (expire_minutes * 60)
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_session_token(token: str) -> SessionClaim:
    """
    Verify the signature (and `exp`, when the token has one) and return the claim.

    The username is not checked against the users file.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Session token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid session token.") from exc

    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise AuthSecurityError("Session token has no username.")

    return SessionClaim(username=username, is_admin=bool(payload.get("isAdmin", False)))
