"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from app.config import get_settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging() -> None:
    """Send application logs to stdout at the configured ``LOG_LEVEL``."""

    level = get_settings().log_level

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_schneejob", False) for h in root.handlers):
        handler._schneejob = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # websocket send failures are routine; keep the library quiet
    for noisy in ("websockets", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
