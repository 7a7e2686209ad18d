"""
Canvas kernel configuration — all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import logging
import os

from canvas.kernel.types import PROJECT_CLASSIC


class Settings:
    """Kernel settings from environment variables."""

    # Project defaults for empty_state()
    PROJECT_TYPE: str = os.environ.get("CANVAS_PROJECT_TYPE", PROJECT_CLASSIC)
    PROJECT_NAME: str = os.environ.get("CANVAS_PROJECT_NAME", "")

    # Session
    HISTORY_LIMIT: int = int(os.environ.get("CANVAS_HISTORY_LIMIT", "50"))

    # Logging
    LOG_LEVEL: str = os.environ.get("CANVAS_LOG_LEVEL", "WARNING")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL to the kernel's loggers. Handlers are left to the host."""
    logging.getLogger("canvas").setLevel((level or settings.LOG_LEVEL).upper())
