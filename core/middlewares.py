# Nombre de archivo: middlewares.py
# Ubicación de archivo: core/middlewares.py
# Descripción: Middlewares de la API (request_id propagado y métricas de latencia)

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from core.logging import request_id_var
from core.metrics import SubmissionMetrics


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reutiliza el X-Request-ID entrante o genera uno nuevo."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Registra la latencia de cada solicitud en las métricas del servicio."""

    def __init__(self, app: ASGIApp, metrics: SubmissionMetrics) -> None:
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        inicio = time.perf_counter()
        try:
            return await call_next(request)
        finally:
            self.metrics.record(time.perf_counter() - inicio)
