from __future__ import annotations

import psutil

_MB: int = 1024 * 1024


def collect_memory() -> tuple[int, int]:
    """Return ``(used_mb, total_mb)``; used counts everything not available."""
    mem = psutil.virtual_memory()
    total = int(mem.total)
    used = max(total - int(mem.available), 0)
    return used // _MB, total // _MB
