from __future__ import annotations

import logging
import sys

from minipcmon.core.config import LOG_LEVEL

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured: bool = False


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def setup_logging(level_name: str | None = None) -> None:
    """Attach one stream handler to the root logger.

    Safe to call more than once; later calls only adjust the level.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel(_resolve_level(level_name or LOG_LEVEL))
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
