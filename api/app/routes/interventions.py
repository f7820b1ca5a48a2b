# Nombre de archivo: interventions.py
# Ubicación de archivo: api/app/routes/interventions.py
# Descripción: Alta de intervenciones (persistencia, informe DOCX y correo a destinatarios)

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from core.auth import Principal
from core.errors import SubmissionError
from core.services.submissions import SubmissionService
from ..deps import (
    as_http_exception,
    get_optional_principal,
    get_submission_service,
    read_json_body,
    submission_response,
)

router = APIRouter(tags=["interventions"])


@router.post("/interventions", status_code=status.HTTP_201_CREATED)
async def create_intervention(
    request: Request,
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: SubmissionService = Depends(get_submission_service),
) -> dict:
    """Registra una intervención y envía su informe a ``recipientEmails``.

    El registro queda guardado aunque el correo falle; ``emailSent`` lo indica.
    """

    payload = await read_json_body(request)
    try:
        outcome = await service.submit_intervention(principal, payload)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc
    return submission_response(outcome)
