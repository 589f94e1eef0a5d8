from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Callable, TypeVar

from minipcmon.collectors.disk import collect_disks
from minipcmon.collectors.docker_containers import list_containers
from minipcmon.collectors.sensors import read_host
from minipcmon.core.config import DOCKER_TIMEOUT_GRACE_SECONDS, DOCKER_TIMEOUT_SECONDS
from minipcmon.core.models import ContainerInfo, DiskUsage, HostReading, Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _safe_collect(
    name: str,
    func: Callable[[], T],
    default: Callable[[], T],
    *,
    timeout: float | None = None,
) -> T:
    """Run a blocking reader in a worker thread, falling back on any failure."""
    try:
        call = asyncio.to_thread(func)
        if timeout is not None:
            return await asyncio.wait_for(call, timeout=timeout)
        return await call
    except MemoryError:
        raise
    except asyncio.TimeoutError:
        logger.warning("Collector timed out (limit %ss): %s", timeout, name)
        return default()
    except Exception:
        logger.exception("Collector failed: %s", name)
        return default()


async def produce_snapshot(*, container_timeout: float = DOCKER_TIMEOUT_SECONDS) -> Snapshot:
    """Sample every source concurrently and merge them into one Snapshot.

    A failing or slow source contributes its empty value; only running out of
    memory escapes as an error.
    """
    host, disks, containers = await asyncio.gather(
        _safe_collect("sensors", read_host, HostReading.empty),
        _safe_collect("disks", collect_disks, list),
        _safe_collect(
            "containers",
            partial(list_containers, timeout=container_timeout),
            list,
            timeout=container_timeout + DOCKER_TIMEOUT_GRACE_SECONDS,
        ),
    )
    return _merge(host, disks, containers)


def _merge(
    host: HostReading,
    disks: list[DiskUsage],
    containers: list[ContainerInfo],
) -> Snapshot:
    snapshot = Snapshot.build(host, disks, containers)
    logger.debug(
        "Snapshot: cpu=%.1f%% ram=%d/%dMB sensors=%d disks=%d containers=%d",
        snapshot.cpu_usage,
        snapshot.ram_used_mb,
        snapshot.ram_total_mb,
        len(snapshot.sensors),
        len(snapshot.disks),
        len(snapshot.containers),
    )
    return snapshot
