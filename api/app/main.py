# Nombre de archivo: main.py
# Ubicación de archivo: api/app/main.py
# Descripción: Aplicación FastAPI principal (alta de registros, consulta/exportación, health y métricas)

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from core.config import Settings, get_settings
from core.logging import setup_logging
from core.metrics import SubmissionMetrics
from core.middlewares import MetricsMiddleware, RequestIDMiddleware
from core.repositories.records import RecordStore, SqlRecordStore
from core.services.email_service import ReportMailer, build_transport
from core.services.submissions import SubmissionService
from db.base import Base
from db.session import build_engine, build_session_factory
from modules.informes_registros import ReportConfig
from modules.informes_registros.photos import PhotoFetcher
from .routes import health_router, interventions_router, reclamations_router, records_router

logger = logging.getLogger(__name__)


def _build_store(settings: Settings) -> RecordStore:
    engine = build_engine(settings.database_url)
    if settings.db_auto_create:
        Base.metadata.create_all(engine)
        logger.info("action=startup stage=db_auto_create")
    return SqlRecordStore(build_session_factory(engine))


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("action=request_error path=%s error=%s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": {"error": "Internal server error"}})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    mailer: Optional[ReportMailer] = None,
    photo_fetcher: Optional[PhotoFetcher] = None,
) -> FastAPI:
    """Arma la aplicación; los colaboradores pueden inyectarse (tests)."""

    settings = settings or get_settings()
    setup_logging("api", settings.log_level)

    metrics = SubmissionMetrics()
    store = store or _build_store(settings)
    mailer = mailer or ReportMailer(build_transport(settings))
    photo_fetcher = photo_fetcher or PhotoFetcher(timeout=settings.reports.photo_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("action=startup stage=ready")
        try:
            yield
        finally:
            mailer.close()
            logger.info("action=shutdown stage=mailer_closed")

    app = FastAPI(title="Field Records API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.store = store
    app.state.submissions = SubmissionService(
        store=store,
        mailer=mailer,
        photo_fetcher=photo_fetcher,
        report_config=ReportConfig.from_settings(settings),
        daily_limit=settings.daily_submission_limit,
        metrics=metrics,
    )

    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(health_router, tags=["health"])
    app.include_router(interventions_router)
    app.include_router(reclamations_router)
    app.include_router(records_router)
    return app


app = create_app()
