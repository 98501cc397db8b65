"""
Centralized logging configuration for gedcom_ancestry.

Key behaviors
-------------
* Single entry point via ``get_logger`` to keep handlers/formatters consistent.
* Console logging that respects the configured debug flag.
* Optional master log file (``logging.file`` in ``config/gedcom_ancestry.yml``)
  with optional rotation.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from gedcom_ancestry.config import get_config

# -----------------------------------------------------------------------------
# Paths and configuration
# -----------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "gedcom_ancestry"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Cache so the base handlers are only created once
_logger_cache: Dict[str, Logger] = {}
_base_configured: bool = False
_effective_level: int = logging.INFO


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _resolve_log_dir() -> Path:
    """Resolve and create the log directory from configuration."""
    cfg = get_config()

    log_dir_cfg = cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs"
    log_dir = Path(log_dir_cfg)
    if not log_dir.is_absolute():
        log_dir = PROJECT_ROOT / log_dir

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _build_file_handler(path: Path, level: int, rotate: bool) -> logging.Handler:
    """Create a file handler with optional rotation."""
    if rotate:
        handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure_base_logger() -> Logger:
    """Configure the shared base logger once."""
    global _base_configured, _effective_level

    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if _base_configured:
        return base_logger

    cfg = get_config()
    level_name = str(cfg.logging.get("level", "INFO")).upper()
    base_level = getattr(logging, level_name, logging.INFO)
    _effective_level = logging.DEBUG if cfg.debug else base_level

    base_logger.setLevel(_effective_level)
    base_logger.propagate = False

    master_name = cfg.logging.get("file")
    if master_name:
        rotate = bool(cfg.logging.get("rotate", False))
        master_path = _resolve_log_dir() / master_name
        base_logger.addHandler(_build_file_handler(master_path, _effective_level, rotate))

    console = StreamHandler()
    console.setLevel(logging.DEBUG if cfg.debug else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base_logger.addHandler(console)

    _base_configured = True
    return base_logger


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger that inherits the project-wide handlers.

    Names outside the ``gedcom_ancestry`` namespace are nested under it so
    that every module shares the base console/file handlers.
    """
    base_logger = _configure_base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    if logger_name == BASE_LOGGER_NAME:
        logger = base_logger
    else:
        logger = logging.getLogger(logger_name)
        logger.setLevel(_effective_level)
        logger.propagate = True

    _logger_cache[logger_name] = logger
    return logger


def set_debug(enabled: bool = True) -> None:
    """Switch every configured logger (and the console) to DEBUG or back."""
    global _effective_level
    base_logger = _configure_base_logger()
    _effective_level = logging.DEBUG if enabled else logging.INFO

    base_logger.setLevel(_effective_level)
    for handler in base_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.setLevel(_effective_level)
        else:
            handler.setLevel(logging.DEBUG if enabled else logging.WARNING)
    for logger in _logger_cache.values():
        logger.setLevel(_effective_level)


def list_active_loggers() -> List[str]:
    """Helper for debugging configuration issues in tests."""
    return list(_logger_cache.keys())
