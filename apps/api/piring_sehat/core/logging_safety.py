"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def configure_logging(level: str = "INFO") -> None:
    """Install a single root handler; called once by the process entry point."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT, force=True)
