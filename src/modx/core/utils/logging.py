"""Process-wide stdlib logging setup for the modx CLI and embedders.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
module installs the single handler those loggers write through.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from modx.core.utils.io import ensure_directory

_MODX_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install one stderr or file handler on the ``modx`` logger.

    Idempotent per-process: calling again with the same target only
    adjusts the level; a different target replaces the previous handler.
    """
    global _MODX_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    logger = logging.getLogger("modx")
    logger.setLevel(_level_from_name(level))

    if _MODX_HANDLER is not None and _CONFIGURED_TARGET == target:
        _MODX_HANDLER.setLevel(_level_from_name(level))
        return

    if _MODX_HANDLER is not None:
        logger.removeHandler(_MODX_HANDLER)
        _MODX_HANDLER.close()
        _MODX_HANDLER = None

    handler: logging.Handler
    if log_path:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    _MODX_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _MODX_HANDLER, _CONFIGURED_TARGET
    if _MODX_HANDLER is not None:
        logging.getLogger("modx").removeHandler(_MODX_HANDLER)
        _MODX_HANDLER.close()
    _MODX_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
