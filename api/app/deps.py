# Nombre de archivo: deps.py
# Ubicación de archivo: api/app/deps.py
# Descripción: Dependencias FastAPI (principal de sesión, servicios en app.state) y traducción de errores

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request

from core.auth import Principal, principal_from_session
from core.config import Settings
from core.errors import SubmissionError, Unauthorized
from core.repositories.records import RecordStore
from core.schemas import serialize_record
from core.services.submissions import SubmissionOutcome, SubmissionService

logger = logging.getLogger(__name__)


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submissions


def get_optional_principal(request: Request) -> Optional[Principal]:
    """Principal de la sesión o None; el flujo de envío decide cómo rechazar."""
    return principal_from_session(request.session)


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise as_http_exception(Unauthorized())
    return principal


def as_http_exception(exc: SubmissionError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.detail)


async def read_json_body(request: Request) -> Any:
    """Lee el cuerpo sin validarlo.

    Un cuerpo ilegible se entrega como None para que la validación ocurra
    recién después del control de límite diario.
    """

    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.info("action=read_body error=invalid_json detail=%s", exc)
        return None


def submission_response(outcome: SubmissionOutcome) -> dict[str, Any]:
    return {
        **serialize_record(outcome.record),
        "message": outcome.message,
        "emailSent": outcome.email_sent,
    }


__all__ = [
    "get_settings_dep",
    "get_store",
    "get_submission_service",
    "get_optional_principal",
    "get_current_principal",
    "as_http_exception",
    "read_json_body",
    "submission_response",
]
