"""Logging setup shared by the CLI and the HTTP server."""

from __future__ import annotations

import logging
from pathlib import Path

from tramfinder.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "tramfinder.log"


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging to stderr and to a file under ``config.log_dir``."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {config.level}")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


__all__ = ["LOG_FORMAT", "configure_logging"]
