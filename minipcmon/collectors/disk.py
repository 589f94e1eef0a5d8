from __future__ import annotations

import logging

import psutil

from minipcmon.core.models import DiskUsage

logger = logging.getLogger(__name__)

_GB: int = 1024 * 1024 * 1024


def _to_disk_usage(device: str, mount_point: str, total_bytes: int, free_bytes: int) -> DiskUsage:
    total = max(int(total_bytes), 0)
    # free can momentarily exceed total while the filesystem is changing.
    used = min(max(total - int(free_bytes), 0), total)
    return DiskUsage(
        name=device,
        mount_point=mount_point,
        total_gb=total // _GB,
        used_gb=used // _GB,
    )


def collect_disks() -> list[DiskUsage]:
    try:
        partitions = psutil.disk_partitions(all=False)
    except (OSError, psutil.Error) as exc:
        logger.warning("Unable to enumerate mounted filesystems: %s", exc)
        return []

    results: list[DiskUsage] = []
    seen: set[str] = set()
    for part in partitions:
        mount_point = str(getattr(part, "mountpoint", "") or "")
        if not mount_point or mount_point in seen:
            continue
        try:
            usage = psutil.disk_usage(mount_point)
        except (OSError, psutil.Error) as exc:
            logger.debug("Skipping mount %s: %s", mount_point, exc)
            continue
        seen.add(mount_point)
        device = str(getattr(part, "device", "") or mount_point)
        results.append(_to_disk_usage(device, mount_point, usage.total, usage.free))
    return results
