from fastapi import FastAPI

from src.common.logging import get_logger, setup_logging
from src.common.metrics import setup_metrics
from src.common.settings import settings
from src.common.telemetry import setup_otel

from . import deps
from .api import router

app = FastAPI(title="directions")
setup_metrics(app, "directions")
setup_otel(app, "directions")


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.log_level)
    cfg = deps.get_settings()
    get_logger(__name__).info(
        "directions service started",
        openroute=bool(cfg.openroute_api_key),
        tomtom=bool(cfg.tomtom_api_key),
        graphhopper=bool(cfg.graphhopper_api_key),
        osrm_servers=len(cfg.osrm_servers),
    )


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/readyz")
async def readyz() -> dict[str, str]:
    return {"status": "ready"}


app.include_router(router)
