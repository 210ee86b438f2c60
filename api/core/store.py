"""
Flat-file record store.

Each collection ("users", "articles") is one JSON file holding an array of
objects. There is no caching: every `load` re-reads the file and every `save`
rewrites it whole.

This module owns the process-wide store. FastAPI initializes it on startup
and closes it on shutdown (see `api/main.py`); routes receive it through the
`get_store` dependency.

Concurrency:
- file I/O runs in the threadpool, so `load`/`save` are await points
- a load -> modify -> save sequence is not atomic across requests; two
  writers on the same collection can lose one update (accepted, no locking)
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from fastapi.concurrency import run_in_threadpool

from . import settings

logger = logging.getLogger(__name__)

Record = dict[str, Any]

_store: RecordStore | None = None


class StoreError(RuntimeError):
    pass


class StoreIOError(StoreError):
    pass


class CorruptStoreError(StoreError):
    pass


class RecordStore:
    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def path_for(self, collection: str) -> Path:
        name = (collection or "").strip()
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid collection name: {collection!r}")
        return self.root / f"{name}.json"

    async def load(self, collection: str) -> list[Record]:
        """
        Return the full collection, in stored order.

        A collection that was never saved is empty.
        """
        return await run_in_threadpool(self._read, self.path_for(collection))

    async def save(self, collection: str, records: list[Record]) -> None:
        """
        Replace the full collection. Either the whole file is replaced or it is untouched.
        """
        await run_in_threadpool(self._write, self.path_for(collection), list(records))

    def _read(self, path: Path) -> list[Record]:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StoreIOError(f"Failed to read {path.name}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(f"{path.name} is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise CorruptStoreError(f"{path.name} must contain a JSON array.")
        return data

    def _write(self, path: Path, records: list[Record]) -> None:
        try:
            payload = json.dumps(records, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StoreIOError(f"Records for {path.name} are not serializable: {exc}") from exc

        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Same directory as the target so os.replace stays a rename.
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise StoreIOError(f"Failed to write {path.name}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("store_tmp_cleanup_failed path=%s", tmp_name)


def id_key(value: Any) -> float | str:
    """
    Canonical form for comparing record ids coming from JSON or a URL path.

    Numbers and numeric strings compare by value ("3" matches 3 and 3.0);
    anything else compares as stripped text.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    try:
        return float(text)
    except ValueError:
        return text


def find_index(records: list[Record], record_id: Any) -> int | None:
    wanted = id_key(record_id)
    for index, record in enumerate(records):
        if isinstance(record, dict) and "id" in record and id_key(record["id"]) == wanted:
            return index
    return None


def next_id(records: list[Record]) -> int:
    # Last element's id, not the max: matches the ids existing data files were built with.
    if not records:
        return 1
    last = records[-1]
    try:
        return int(last["id"]) + 1
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptStoreError(f"Last record has no integer id: {last!r}") from exc


def init_store(root: str | os.PathLike[str] | None = None) -> RecordStore:
    global _store
    if _store is None:
        _store = RecordStore(root if root is not None else settings.data_dir())
        logger.info("store_initialized root=%s", _store.root)
    return _store


def close_store() -> None:
    global _store
    _store = None


def store() -> RecordStore:
    if _store is None:
        raise RuntimeError("Record store is not initialized. Call init_store() on startup.")
    return _store


async def get_store() -> RecordStore:
    return store()
