"""
Environment-backed settings shared across features.

Feature-specific knobs (JWT secret, upload limits) live next to the code that
reads them; this module only holds what more than one package needs.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_DATA_DIR = "./data"


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def data_dir() -> Path:
    return Path(env_str("DATA_DIR", DEFAULT_DATA_DIR))


def uploads_dir() -> Path:
    raw = os.environ.get("UPLOADS_DIR", "").strip()
    if raw:
        return Path(raw)
    return data_dir() / "uploads"


def cors_allowed_origins() -> list[str]:
    raw = env_str("CORS_ALLOWED_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
