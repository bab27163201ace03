"""Logging helpers for the fingerprint indexer."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_level(value: str | int | None) -> int:
    if isinstance(value, int):
        return value
    text = (value or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | int | None = None) -> None:
    """Configure default logging if no handlers are present.

    The Lambda runtime installs its own root handler; in that case only the
    level is applied.
    """
    resolved = resolve_log_level(level)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(resolved)
        return
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
