"""
Process logging setup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Attach one stream handler to the root logger.

    Safe to call more than once (e.g. app reloads): an existing handler is reused.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_cms_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._cms_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(getattr(logging, (level or settings.log_level()).upper(), logging.INFO))
