from __future__ import annotations

import logging
import math
from typing import Any

import psutil

from minipcmon.collectors.cpu import collect_cpu
from minipcmon.collectors.memory import collect_memory
from minipcmon.core.models import HostReading

logger = logging.getLogger(__name__)


def _probe_label(chip: str, entry: Any) -> str:
    label = str(getattr(entry, "label", "") or "").strip()
    chip = str(chip or "").strip()
    if label and chip:
        return f"{chip} {label}"
    return label or chip or "sensor"


def _probe_value(entry: Any) -> float | None:
    current = getattr(entry, "current", None)
    if current is None or isinstance(current, bool):
        return None
    try:
        value = float(current)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def collect_temperatures() -> list[tuple[str, float]]:
    # Not available on Windows and macOS builds of psutil.
    reader = getattr(psutil, "sensors_temperatures", None)
    if reader is None:
        return []

    try:
        chips = reader() or {}
    except (OSError, psutil.Error, RuntimeError) as exc:
        logger.debug("Temperature query failed: %s", exc)
        return []

    readings: list[tuple[str, float]] = []
    for chip, entries in chips.items():
        for entry in entries or []:
            value = _probe_value(entry)
            if value is None:
                continue
            readings.append((_probe_label(chip, entry), value))
    return readings


def read_host() -> HostReading:
    """Sample CPU, memory and temperatures in one go.

    Temperatures are read on their own path, so a failing resource-accounting
    call only zeroes the CPU and memory figures.
    """
    temperatures = tuple(collect_temperatures())
    try:
        cpu_usage = collect_cpu()
        ram_used_mb, ram_total_mb = collect_memory()
    except (OSError, psutil.Error, RuntimeError) as exc:
        logger.warning("CPU/memory accounting unavailable: %s", exc)
        return HostReading(cpu_usage=0.0, ram_used_mb=0, ram_total_mb=0, sensors=temperatures)
    return HostReading(
        cpu_usage=cpu_usage,
        ram_used_mb=ram_used_mb,
        ram_total_mb=ram_total_mb,
        sensors=temperatures,
    )
