from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthData(BaseModel):
    status: str


class HealthResponse(BaseModel):
    ok: bool
    data: HealthData | None = None
    meta: dict[str, Any] = Field(default_factory=dict)


class DiskItem(BaseModel):
    name: str
    mount_point: str
    total_gb: int
    used_gb: int


class ContainerItem(BaseModel):
    name: str
    status: str
    state: str
    ports: str = "-"


class StatusResponse(BaseModel):
    cpu_usage: float = 0.0
    ram_used_mb: int = 0
    ram_total_mb: int = 0
    sensors: list[tuple[str, float]] = Field(default_factory=list)
    disks: list[DiskItem] = Field(default_factory=list)
    containers: list[ContainerItem] = Field(default_factory=list)


class DockerStatusData(BaseModel):
    available: bool
    reason: str


class DockerStatusResponse(BaseModel):
    ok: bool
    data: DockerStatusData | None = None
    meta: dict[str, Any] = Field(default_factory=dict)
