from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DiskUsage:
    name: str
    mount_point: str
    total_gb: int
    used_gb: int

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "mount_point": self.mount_point,
            "total_gb": int(self.total_gb),
            "used_gb": int(self.used_gb),
        }


@dataclass(frozen=True, slots=True)
class ContainerInfo:
    name: str
    status: str
    state: str
    ports: str = "-"

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "status": self.status,
            "state": self.state,
            "ports": self.ports,
        }


@dataclass(frozen=True, slots=True)
class HostReading:
    """CPU, memory and temperature probes sampled together."""

    cpu_usage: float
    ram_used_mb: int
    ram_total_mb: int
    sensors: tuple[tuple[str, float], ...] = ()

    @classmethod
    def empty(cls) -> HostReading:
        return cls(cpu_usage=0.0, ram_used_mb=0, ram_total_mb=0, sensors=())


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One consolidated status record, built fresh for every query.

    Unavailable sources show up as zeros or empty tuples, never as missing
    fields.
    """

    cpu_usage: float
    ram_used_mb: int
    ram_total_mb: int
    sensors: tuple[tuple[str, float], ...]
    disks: tuple[DiskUsage, ...]
    containers: tuple[ContainerInfo, ...]

    @classmethod
    def empty(cls) -> Snapshot:
        return cls.build(HostReading.empty(), (), ())

    @classmethod
    def build(
        cls,
        host: HostReading,
        disks: tuple[DiskUsage, ...] | list[DiskUsage],
        containers: tuple[ContainerInfo, ...] | list[ContainerInfo],
    ) -> Snapshot:
        return cls(
            cpu_usage=float(host.cpu_usage),
            ram_used_mb=int(host.ram_used_mb),
            ram_total_mb=int(host.ram_total_mb),
            sensors=tuple((str(label), float(value)) for label, value in host.sensors),
            disks=tuple(disks),
            containers=tuple(containers),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "cpu_usage": float(self.cpu_usage),
            "ram_used_mb": int(self.ram_used_mb),
            "ram_total_mb": int(self.ram_total_mb),
            "sensors": [[label, value] for label, value in self.sensors],
            "disks": [d.to_dict() for d in self.disks],
            "containers": [c.to_dict() for c in self.containers],
        }
