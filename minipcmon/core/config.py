from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env_str(name: str, default: str) -> str:
    value = os.environ.get(name, "").strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


APP_NAME: str = "MiniPC Monitor"

HOST: str = _env_str("MINIPCMON_HOST", "0.0.0.0")
PORT: int = _env_int("MINIPCMON_PORT", 9999)
LOG_LEVEL: str = _env_str("MINIPCMON_LOG_LEVEL", "INFO").upper()

DOCKER_BASE_URL: str = _env_str("DOCKER_HOST", "unix:///var/run/docker.sock")
DOCKER_TIMEOUT_SECONDS: float = _env_float("MINIPCMON_DOCKER_TIMEOUT", 0.3)
# Pinned so building a client does not cost an extra GET /version round trip.
DOCKER_API_VERSION: str = _env_str("MINIPCMON_DOCKER_API_VERSION", "1.41")
# Slack on top of the Docker timeout before the aggregator gives up on the thread.
DOCKER_TIMEOUT_GRACE_SECONDS: float = 0.1
CONTAINER_LOG_TAIL: int = _env_int("MINIPCMON_LOG_TAIL", 50)
DOCKER_LOGS_TIMEOUT_SECONDS: float = _env_float("MINIPCMON_LOGS_TIMEOUT", 5.0)

POLL_INTERVAL_SECONDS: int = _env_int("MINIPCMON_POLL_INTERVAL", 2)
