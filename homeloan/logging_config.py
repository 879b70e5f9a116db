# homeloan/logging_config.py
"""
Logger factory for the homeloan package.

All loggers hang off a single "homeloan" logger. Importing the package adds
no handlers; entry points call configure_logging() once:
  - level from HOMELOAN_LOG_LEVEL (default WARNING)
  - stderr stream handler always
  - rotating file handler when HOMELOAN_LOG_FILE is set (1 MB x 3, UTF-8)
  - HOMELOAN_DEBUG=1 forces DEBUG regardless of HOMELOAN_LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "homeloan"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "(%Y-%m-%d %H:%M:%S)"

_CONFIGURED = False


def _debug_enabled() -> bool:
    return os.getenv("HOMELOAN_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _resolve_level() -> int:
    if _debug_enabled():
        return logging.DEBUG
    name = (os.getenv("HOMELOAN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, force: bool = False) -> logging.Logger:
    """Configure the package root logger (idempotent unless force=True)."""
    global _CONFIGURED
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _CONFIGURED and not force:
        return root

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.setLevel(_resolve_level())
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    log_path = os.getenv("HOMELOAN_LOG_FILE", "").strip()
    if log_path:
        try:
            parent = os.path.dirname(log_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(formatter)
            root.addHandler(handler)
        except OSError as e:
            # keep stderr logging if the file can't be opened
            root.warning("file logging disabled (%s): %s", log_path, e)

    _CONFIGURED = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger. Handlers come from configure_logging()."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
