from __future__ import annotations

import logging
import os
from typing import Any

from minipcmon.core.config import (
    CONTAINER_LOG_TAIL,
    DOCKER_API_VERSION,
    DOCKER_BASE_URL,
    DOCKER_LOGS_TIMEOUT_SECONDS,
    DOCKER_TIMEOUT_SECONDS,
)
from minipcmon.core.models import ContainerInfo

logger = logging.getLogger(__name__)

LIFECYCLE_STATES: frozenset[str] = frozenset(
    {"created", "running", "paused", "restarting", "removing", "exited", "dead"}
)

NO_LOGS_MESSAGE: str = "No logs available."
NO_SOCKET_MESSAGE: str = "Unable to reach the Docker socket."


class DockerUnavailable(Exception):
    """The engine endpoint is absent or the SDK is not installed."""


def _humanize_docker_error(err: Exception) -> str:
    msg = (str(err) or "").strip()
    lower = msg.lower()

    if "no such file or directory" in lower or "is the docker daemon running" in lower:
        return "Docker engine not running"
    if "connection refused" in lower:
        return "Docker engine refused the connection"

    if "access is denied" in lower or "permission" in lower:
        return "Docker not accessible (permission denied)"

    if "timed out" in lower or "timeout" in lower:
        return "Docker engine not responding (timeout)"

    if not msg:
        return "docker unavailable"

    # One line, bounded length
    first_line = msg.splitlines()[0].strip()
    if len(first_line) > 180:
        return first_line[:177] + "..."
    return first_line


def _get_docker():
    try:
        import docker  # type: ignore

        return docker
    except Exception:
        return None


def preload_sdk() -> bool:
    # The first import takes longer than a listing is allowed to.
    return _get_docker() is not None


def _unix_socket_path(base_url: str) -> str | None:
    if base_url.startswith("unix://"):
        return base_url[len("unix://"):]
    return None


def connect(*, timeout: float = DOCKER_TIMEOUT_SECONDS, base_url: str | None = None):
    """Open a client whose every request is bounded by ``timeout`` seconds.

    Raises DockerUnavailable without touching the network when the SDK is
    missing or the unix socket does not exist.
    """
    docker = _get_docker()
    if docker is None:
        raise DockerUnavailable("python package 'docker' not installed")

    url = base_url or DOCKER_BASE_URL
    socket_path = _unix_socket_path(url)
    if socket_path is not None and not os.path.exists(socket_path):
        raise DockerUnavailable(f"socket {socket_path} not found")

    return docker.DockerClient(base_url=url, version=DOCKER_API_VERSION, timeout=timeout)


def _close(client: Any) -> None:
    try:
        client.close()
    except Exception:
        logger.debug("Error closing docker client", exc_info=True)


def docker_available(*, timeout: float = DOCKER_TIMEOUT_SECONDS) -> tuple[bool, str]:
    try:
        client = connect(timeout=timeout)
    except DockerUnavailable as e:
        return False, str(e)
    except Exception as e:
        return False, _humanize_docker_error(e)

    try:
        client.ping()
        return True, "ok"
    except Exception as e:
        return False, _humanize_docker_error(e)
    finally:
        _close(client)


def normalize_state(raw: Any) -> str:
    state = str(raw or "").strip().lower()
    if state in LIFECYCLE_STATES:
        return state
    return "unknown"


def _format_name(names: Any) -> str:
    if isinstance(names, str):
        names = [names]
    if not isinstance(names, list):
        return ""
    return ", ".join(str(n).lstrip("/") for n in names if n)


def _format_ports(ports: Any) -> str:
    if not isinstance(ports, list):
        return "-"

    results: list[str] = []
    for p in ports:
        if not isinstance(p, dict):
            continue
        public_port = p.get("PublicPort")
        if not public_port:
            continue
        proto = str(p.get("Type") or "tcp").lower()
        text = f"{public_port}:{p.get('PrivatePort')} ({proto})"
        # IPv4 and IPv6 bindings of the same port are listed separately.
        if text not in results:
            results.append(text)
    return ", ".join(results) if results else "-"


def _to_container_info(entry: Any) -> ContainerInfo:
    if not isinstance(entry, dict):
        raise TypeError(f"unexpected container entry: {type(entry).__name__}")
    return ContainerInfo(
        name=_format_name(entry.get("Names")),
        status=str(entry.get("Status") or ""),
        state=normalize_state(entry.get("State")),
        ports=_format_ports(entry.get("Ports")),
    )


def list_containers(*, timeout: float = DOCKER_TIMEOUT_SECONDS) -> list[ContainerInfo]:
    """All containers, running and stopped, in the engine's listing order.

    An absent, refusing or slow engine yields an empty list.
    """
    try:
        client = connect(timeout=timeout)
    except DockerUnavailable as e:
        logger.debug("Container runtime unavailable: %s", e)
        return []
    except Exception as e:
        logger.debug("Container runtime unavailable: %s", _humanize_docker_error(e))
        return []

    try:
        entries = client.api.containers(all=True)
    except Exception as e:
        logger.warning("Listing containers failed: %s", _humanize_docker_error(e))
        return []
    finally:
        _close(client)

    items: list[ContainerInfo] = []
    for entry in entries or []:
        try:
            items.append(_to_container_info(entry))
        except Exception:
            logger.debug("Skipping malformed container entry: %r", entry)
            continue
    return items


def get_container_logs(
    name: str,
    *,
    tail: int = CONTAINER_LOG_TAIL,
    timeout: float = DOCKER_LOGS_TIMEOUT_SECONDS,
) -> str:
    try:
        client = connect(timeout=timeout)
    except Exception as e:
        logger.debug("Container runtime unavailable: %s", e)
        return NO_SOCKET_MESSAGE

    try:
        raw = client.api.logs(name, stdout=True, stderr=True, tail=max(1, int(tail)))
    except Exception as e:
        logger.debug("Fetching logs for %s failed: %s", name, _humanize_docker_error(e))
        return NO_LOGS_MESSAGE
    finally:
        _close(client)

    if isinstance(raw, bytes):
        output = raw.decode("utf-8", errors="replace")
    else:
        output = str(raw or "")
    return output if output else NO_LOGS_MESSAGE
