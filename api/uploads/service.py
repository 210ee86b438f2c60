"""
Upload "service layer".

Stores one uploaded binary part under a generated name and returns the URL
path clients fetch it from. No record links the file to a user or article.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from fastapi import HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from core import settings

# Keep this conservative in dev; you can raise it later.
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_UPLOAD_URL_PREFIX = "./assets/uploads"
FALLBACK_NAME = "upload"

logger = logging.getLogger(__name__)


def max_upload_bytes_from_env() -> int:
    """
    Read MAX_UPLOAD_BYTES from env, falling back to a sane default.
    """
    value = settings.env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def upload_url_prefix() -> str:
    return settings.env_str("UPLOAD_URL_PREFIX", DEFAULT_UPLOAD_URL_PREFIX).rstrip("/")


async def get_upload_dir() -> Path:
    return settings.uploads_dir()


def base_name(original_name: str | None) -> str:
    """
    Client filename without any directory part ("../a/b.png" -> "b.png").
    """
    name = os.path.basename((original_name or "").replace("\\", "/")).strip()
    if name in {"", ".", ".."}:
        return FALLBACK_NAME
    return name


def generate_filename(original_name: str | None, *, now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    return f"{stamp}-{base_name(original_name)}"


def resolve_upload(filename: str, *, upload_dir: Path) -> Path:
    """
    Path of a stored upload. Anything outside `upload_dir` or not a file is a 404.
    """
    if base_name(filename) != filename or filename.startswith("."):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    path = upload_dir / filename
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return path


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Max is {max_bytes} bytes.",
            )

    return bytes(buf)


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def store_upload(file: UploadFile | None, *, upload_dir: Path) -> str:
    """
    Persist `file` into `upload_dir` and return its public path.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    data = await read_upload_bytes(file, max_bytes=max_upload_bytes_from_env())
    filename = generate_filename(file.filename)
    await run_in_threadpool(_write_file, upload_dir / filename, data)

    logger.info("upload_stored filename=%s size_bytes=%s", filename, len(data))
    return f"{upload_url_prefix()}/{filename}"
