from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from minipcmon.api.routes import router as api_router
from minipcmon.collectors.cpu import prime_cpu
from minipcmon.collectors.docker_containers import preload_sdk
from minipcmon.core.config import APP_NAME, POLL_INTERVAL_SECONDS
from minipcmon.core.logging import setup_logging
from minipcmon.services.status_state import StatusState

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME)
app.include_router(api_router)
app.state.status_state = StatusState()

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "web" / "templates"))
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "web" / "static")), name="static")


@app.get("/", response_class=HTMLResponse)
def dashboard(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"app_name": APP_NAME, "poll_interval_ms": int(POLL_INTERVAL_SECONDS * 1000)},
    )


@app.on_event("startup")
async def on_startup() -> None:
    try:
        prime_cpu()
    except Exception:
        logger.exception("Failed to prime CPU sampling")
    if not preload_sdk():
        logger.info("Docker SDK not installed, container listing disabled")
    logger.info("%s started", APP_NAME)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("%s stopped", APP_NAME)
