# Nombre de archivo: errors.py
# Ubicación de archivo: core/errors.py
# Descripción: Taxonomía de errores del flujo de envío de intervenciones y reclamaciones

from __future__ import annotations

from typing import Any, Optional


class SubmissionError(Exception):
    """Error terminal de un envío, con el código HTTP con que se expone."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    @property
    def detail(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.field:
            payload["field"] = self.field
        return payload


class Unauthorized(SubmissionError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(SubmissionError):
    status_code = 403
    default_message = "Access denied. Admin privileges required."


class InvalidInput(SubmissionError):
    """Campo faltante o con formato inválido. No hubo efectos secundarios."""

    status_code = 400
    default_message = "Missing required fields"


class RateLimited(SubmissionError):
    status_code = 429
    default_message = "Daily submission limit reached. Please try again tomorrow."


class PersistenceError(SubmissionError):
    """Falla de escritura/lectura en la capa de almacenamiento."""

    status_code = 500
    default_message = "Internal server error"


class DocumentSynthesisError(SubmissionError):
    """El renderizador DOCX falló; el registro ya persistido se conserva."""

    status_code = 500
    default_message = "The record was saved but its report could not be generated"


__all__ = [
    "SubmissionError",
    "Unauthorized",
    "Forbidden",
    "InvalidInput",
    "RateLimited",
    "PersistenceError",
    "DocumentSynthesisError",
]
