# Nombre de archivo: reclamations.py
# Ubicación de archivo: api/app/routes/reclamations.py
# Descripción: Alta de reclamaciones (persistencia, informe DOCX y correo a destinatarios)

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

router = APIRouter(tags=["reclamations"])


@router.post("/reclamations", status_code=status.HTTP_201_CREATED)
async def create_reclamation(
    request: Request,
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: SubmissionService = Depends(get_submission_service),
) -> dict:
    payload = await read_json_body(request)
    try:
        outcome = await service.submit_reclamation(principal, payload)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc
    return submission_response(outcome)
