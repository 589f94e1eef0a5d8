from __future__ import annotations

import psutil


def prime_cpu() -> None:
    # psutil compares against the previous call; the very first one returns 0.0.
    psutil.cpu_percent(interval=None)


def collect_cpu() -> float:
    percent = float(psutil.cpu_percent(interval=None))
    return max(0.0, min(100.0, percent))
