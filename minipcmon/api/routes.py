from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from minipcmon.api.schemas import DockerStatusResponse, HealthResponse, StatusResponse
from minipcmon.collectors.docker_containers import docker_available, get_container_logs
from minipcmon.core.config import CONTAINER_LOG_TAIL
from minipcmon.services.aggregator import produce_snapshot
from minipcmon.services.status_state import StatusState

router = APIRouter(prefix="/api")


@router.get("/health")
def health(request: Request) -> HealthResponse:
    state: StatusState | None = getattr(request.app.state, "status_state", None)
    last_query_utc = None
    last_snapshot = None
    query_count = 0
    if state is not None:
        query_count = state.query_count
        if state.last_snapshot is not None:
            last_snapshot = state.last_snapshot.to_dict()
        if state.last_query_utc is not None:
            last_query_utc = state.last_query_utc.isoformat()
    return HealthResponse(
        ok=True,
        data={"status": "ok"},
        meta={
            "last_query_utc": last_query_utc,
            "query_count": query_count,
            "last_snapshot": last_snapshot,
        },
    )


@router.get("/status")
async def status(request: Request) -> StatusResponse:
    snapshot = await produce_snapshot()

    state: StatusState | None = getattr(request.app.state, "status_state", None)
    if state is not None:
        await state.record(snapshot)

    return StatusResponse(**snapshot.to_dict())


@router.get("/docker/status")
async def docker_status() -> DockerStatusResponse:
    ok, reason = await asyncio.to_thread(docker_available)
    return DockerStatusResponse(ok=True, data={"available": ok, "reason": reason}, meta={})


@router.get("/logs/{name}", response_class=PlainTextResponse)
async def container_logs(name: str) -> PlainTextResponse:
    text = await asyncio.to_thread(get_container_logs, name, tail=CONTAINER_LOG_TAIL)
    return PlainTextResponse(text)
