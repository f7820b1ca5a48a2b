# Nombre de archivo: health.py
# Ubicación de archivo: api/app/routes/health.py
# Descripción: Endpoints de health, versión de build y métricas en memoria
from fastapi import APIRouter, Request
from datetime import datetime, timezone
import os

router = APIRouter()


@router.get("/health")
def health(request: Request):
    base_response = {
        "status": "ok",
        "service": "api",
        "time": datetime.now(timezone.utc).isoformat(),
    }
    ping = getattr(request.app.state.store, "ping", None)
    if ping is None:
        return base_response
    return {**base_response, **ping()}


def _detect_build_version() -> str:
    # Preferir variables específicas y luego un fallback simple
    return (
        os.getenv("API_BUILD_VERSION")
        or os.getenv("BUILD_VERSION")
        or os.getenv("APP_VERSION")
        or "0.1.0"
    )


BUILD_VERSION = _detect_build_version()


@router.get("/health/version")
def health_version():
    return {"status": "ok", "service": "api", "version": BUILD_VERSION}


@router.get("/metrics")
def metrics(request: Request):
    return request.app.state.metrics.snapshot()
