from __future__ import annotations

from types import SimpleNamespace

import psutil

from minipcmon.collectors import cpu, memory, sensors
from minipcmon.core.models import HostReading

MB = 1024 * 1024


def _probe(label: str, current: object) -> SimpleNamespace:
    return SimpleNamespace(label=label, current=current, high=None, critical=None)


def test_collect_cpu_returns_percent(monkeypatch):
    monkeypatch.setattr(psutil, "cpu_percent", lambda interval=None: 37.5)
    assert cpu.collect_cpu() == 37.5


def test_collect_cpu_clamps_out_of_range(monkeypatch):
    monkeypatch.setattr(psutil, "cpu_percent", lambda interval=None: 104.2)
    assert cpu.collect_cpu() == 100.0


def test_collect_memory_in_megabytes(monkeypatch):
    fake = SimpleNamespace(total=8192 * MB, available=6144 * MB)
    monkeypatch.setattr(psutil, "virtual_memory", lambda: fake)

    used_mb, total_mb = memory.collect_memory()

    assert (used_mb, total_mb) == (2048, 8192)


def test_collect_memory_never_negative(monkeypatch):
    fake = SimpleNamespace(total=1024 * MB, available=2048 * MB)
    monkeypatch.setattr(psutil, "virtual_memory", lambda: fake)

    used_mb, total_mb = memory.collect_memory()

    assert used_mb == 0
    assert used_mb <= total_mb


def test_temperatures_labels_and_order(monkeypatch):
    chips = {
        "coretemp": [_probe("Package id 0", 54.0), _probe("Core 0", 51.5)],
        "CPU": [_probe("", 48.0)],
    }
    monkeypatch.setattr(psutil, "sensors_temperatures", lambda: chips, raising=False)

    assert sensors.collect_temperatures() == [
        ("coretemp Package id 0", 54.0),
        ("coretemp Core 0", 51.5),
        ("CPU", 48.0),
    ]


def test_temperatures_skip_bad_probes(monkeypatch):
    chips = {
        "acpitz": [_probe("", None), _probe("temp2", float("nan")), _probe("temp3", "n/a")],
        "nvme": [_probe("Composite", 39.85)],
    }
    monkeypatch.setattr(psutil, "sensors_temperatures", lambda: chips, raising=False)

    assert sensors.collect_temperatures() == [("nvme Composite", 39.85)]


def test_no_sensors_is_empty_list(monkeypatch):
    monkeypatch.setattr(psutil, "sensors_temperatures", lambda: {}, raising=False)
    assert sensors.collect_temperatures() == []


def test_platform_without_sensor_support(monkeypatch):
    monkeypatch.delattr(psutil, "sensors_temperatures", raising=False)
    assert sensors.collect_temperatures() == []


def test_sensor_query_failure_is_empty_list(monkeypatch):
    def boom():
        raise OSError("no /sys/class/hwmon")

    monkeypatch.setattr(psutil, "sensors_temperatures", boom, raising=False)
    assert sensors.collect_temperatures() == []


def test_read_host_combines_readings(monkeypatch):
    monkeypatch.setattr(sensors, "collect_cpu", lambda: 12.5)
    monkeypatch.setattr(sensors, "collect_memory", lambda: (2048, 7820))
    monkeypatch.setattr(sensors, "collect_temperatures", lambda: [("CPU", 54.0)])

    assert sensors.read_host() == HostReading(
        cpu_usage=12.5, ram_used_mb=2048, ram_total_mb=7820, sensors=(("CPU", 54.0),)
    )


def test_read_host_keeps_temperatures_when_accounting_fails(monkeypatch):
    def boom():
        raise psutil.AccessDenied()

    monkeypatch.setattr(sensors, "collect_cpu", lambda: 5.0)
    monkeypatch.setattr(sensors, "collect_memory", boom)
    monkeypatch.setattr(sensors, "collect_temperatures", lambda: [("CPU", 54.0)])

    assert sensors.read_host() == HostReading(
        cpu_usage=0.0, ram_used_mb=0, ram_total_mb=0, sensors=(("CPU", 54.0),)
    )
