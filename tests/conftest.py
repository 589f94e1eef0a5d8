from __future__ import annotations

from typing import Callable

import pytest

from minipcmon.core.models import ContainerInfo, DiskUsage, HostReading
from minipcmon.services import aggregator


@pytest.fixture
def install_sources(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Replace the three readers used by the aggregator with canned results.

    Pass an Exception instance instead of a value to make that reader raise.
    """

    def _install(
        host: HostReading | Exception | None = None,
        disks: list[DiskUsage] | Exception | None = None,
        containers: list[ContainerInfo] | Exception | None = None,
    ) -> None:
        def fake_read_host() -> HostReading:
            if isinstance(host, Exception):
                raise host
            return host if host is not None else HostReading.empty()

        def fake_collect_disks() -> list[DiskUsage]:
            if isinstance(disks, Exception):
                raise disks
            return list(disks or [])

        def fake_list_containers(*, timeout: float) -> list[ContainerInfo]:
            if isinstance(containers, Exception):
                raise containers
            return list(containers or [])

        monkeypatch.setattr(aggregator, "read_host", fake_read_host)
        monkeypatch.setattr(aggregator, "collect_disks", fake_collect_disks)
        monkeypatch.setattr(aggregator, "list_containers", fake_list_containers)

    return _install


@pytest.fixture
def example_host() -> HostReading:
    return HostReading(cpu_usage=12.5, ram_used_mb=2048, ram_total_mb=7820, sensors=(("CPU", 54.0),))


@pytest.fixture
def example_disk() -> DiskUsage:
    return DiskUsage(name="/", mount_point="/", total_gb=100, used_gb=42)
