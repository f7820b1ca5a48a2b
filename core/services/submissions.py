# Nombre de archivo: submissions.py
# Ubicación de archivo: core/services/submissions.py
# Descripción: Flujo de alta de intervenciones/reclamaciones (límite diario, validación, persistencia, informe y correo)

"""Orquestador del envío de registros.

Cada solicitud recorre, en orden estricto:

1. autenticación (principal presente),
2. límite diario de registros por usuario,
3. validación del cuerpo,
4. persistencia,
5. generación del DOCX,
6. envío del correo (best-effort, solo se registra el resultado),
7. respuesta.

Los pasos 1-4 cortan sin efectos secundarios. Desde el paso 5 el registro ya
está guardado y no se revierte.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.auth import Principal
from core.errors import InvalidInput, RateLimited, Unauthorized
from core.metrics import SubmissionMetrics
from core.repositories.records import RecordStore, StoredRecord
from core.schemas import InterventionCreate, ReclamationCreate
from core.services.email_service import ReportKind, ReportMailer
from modules.informes_registros.photos import PhotoFetcher
from modules.informes_registros.schemas import GeneratedDocument
from modules.informes_registros.service import (
    ReportConfig,
    generate_intervention_doc,
    generate_reclamation_doc,
)

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 15

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(slots=True)
class SubmissionOutcome:
    """Resultado visible para el usuario: el registro quedó guardado."""

    record: StoredRecord
    message: str
    email_sent: bool
    report_filename: str


def _field_name(loc: tuple) -> Optional[str]:
    for part in loc:
        if isinstance(part, str):
            return part
    return None


def _describe_error(error: dict) -> tuple[str, Optional[str]]:
    field = _field_name(tuple(error.get("loc", ())))
    kind = error.get("type", "")
    in_list = any(isinstance(part, int) for part in error.get("loc", ()))
    if kind == "missing":
        return "Missing required fields", field
    if kind == "string_too_short":
        # Un texto vacío cuenta como campo faltante; dentro de una lista, como elemento inválido
        if in_list:
            return f"{field} must not contain empty values", field
        return "Missing required fields", field
    value = error.get("input")
    if not in_list and (value is None or (isinstance(value, str) and not value.strip())):
        # null o texto en blanco cuenta como faltante aunque el tipo falle por otra regla (enum)
        return "Missing required fields", field
    if field == "reclamationType" and kind == "enum":
        return "Invalid reclamationType. Must be one of: hydraulic, electric, mechanic", field
    if kind == "too_short" and field in ("teamMembers", "recipientEmails"):
        return f"{field} must be a non-empty array", field
    if kind == "list_type":
        return f"{field} must be an array", field
    return f"Invalid value for {field}: {error.get('msg', 'invalid')}", field


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    """Valida el cuerpo y traduce el primer error a :class:`InvalidInput`."""

    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errores = exc.errors()
        message, field = _describe_error(errores[0])
        raise InvalidInput(message, field=field) from exc


def validate_intervention(payload: Any) -> InterventionCreate:
    data = validate_payload(InterventionCreate, payload)
    if data.end_date < data.start_date:
        raise InvalidInput("endDate must be on or after startDate", field="endDate")
    return data


def validate_reclamation(payload: Any) -> ReclamationCreate:
    return validate_payload(ReclamationCreate, payload)


class SubmissionService:
    """Coordina almacén, generador de informes y despachador de correo."""

    def __init__(
        self,
        store: RecordStore,
        mailer: ReportMailer,
        photo_fetcher: PhotoFetcher,
        report_config: ReportConfig,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        metrics: Optional[SubmissionMetrics] = None,
    ) -> None:
        self.store = store
        self.mailer = mailer
        self.photo_fetcher = photo_fetcher
        self.report_config = report_config
        self.daily_limit = daily_limit
        self.metrics = metrics or SubmissionMetrics()

    async def _check_rate_limit(self, principal: Principal) -> None:
        # Cuota aproximada: conteo e inserción no son atómicos entre solicitudes concurrentes
        count = await asyncio.to_thread(self.store.count_today_records, principal.id)
        if count >= self.daily_limit:
            self.metrics.incr("submissions_rate_limited")
            logger.warning(
                "action=submission stage=rate_limited user_id=%s count=%s limit=%s",
                principal.id,
                count,
                self.daily_limit,
            )
            raise RateLimited()

    def _validate(self, validator: Callable[[Any], ModelT], payload: Any) -> ModelT:
        try:
            return validator(payload)
        except InvalidInput as exc:
            self.metrics.incr("submissions_rejected")
            logger.info("action=submission stage=invalid_input field=%s error=%s", exc.field, exc.message)
            raise

    async def _notify(
        self,
        record: StoredRecord,
        document: GeneratedDocument,
        subject: str,
        kind: ReportKind,
    ) -> bool:
        try:
            sent = await asyncio.to_thread(
                self.mailer.send_report_email,
                list(record.recipient_emails),
                subject,
                document.content,
                document.filename,
                kind,
            )
        except Exception:  # noqa: BLE001
            logger.exception("action=submission stage=notify_error kind=%s id=%s", kind, record.id)
            sent = False
        if not sent:
            self.metrics.incr("notifications_failed")
        logger.info("action=submission stage=notified kind=%s id=%s email_sent=%s", kind, record.id, sent)
        return sent

    async def _submit(
        self,
        principal: Optional[Principal],
        payload: Any,
        kind: ReportKind,
        validator: Callable[[Any], BaseModel],
        create: Callable[[dict], StoredRecord],
        synthesize: Callable[[StoredRecord, Principal, PhotoFetcher, ReportConfig], Awaitable[GeneratedDocument]],
        subject_for: Callable[[StoredRecord], str],
    ) -> SubmissionOutcome:
        if principal is None:
            raise Unauthorized()

        await self._check_rate_limit(principal)
        data = self._validate(validator, payload)

        fields = data.model_dump()
        fields["user_id"] = principal.id
        fields["user_email"] = principal.email or None
        record = await asyncio.to_thread(create, fields)
        self.metrics.incr("submissions_created")

        document = await synthesize(record, principal, self.photo_fetcher, self.report_config)
        email_sent = await self._notify(record, document, subject_for(record), kind)

        label = kind.capitalize()
        if email_sent:
            message = f"{label} submitted successfully and report sent to provided emails."
        else:
            message = f"{label} submitted successfully. The report email could not be delivered."
        return SubmissionOutcome(
            record=record,
            message=message,
            email_sent=email_sent,
            report_filename=document.filename,
        )

    async def submit_intervention(self, principal: Optional[Principal], payload: Any) -> SubmissionOutcome:
        return await self._submit(
            principal,
            payload,
            "intervention",
            validate_intervention,
            self.store.create_intervention,
            generate_intervention_doc,
            lambda record: f"New Intervention Report - {record.site_name}",
        )

    async def submit_reclamation(self, principal: Optional[Principal], payload: Any) -> SubmissionOutcome:
        return await self._submit(
            principal,
            payload,
            "reclamation",
            validate_reclamation,
            self.store.create_reclamation,
            generate_reclamation_doc,
            lambda record: f"New Reclamation Report - {record.station_name}",
        )


__all__ = [
    "SubmissionService",
    "SubmissionOutcome",
    "validate_intervention",
    "validate_reclamation",
    "validate_payload",
    "DEFAULT_DAILY_LIMIT",
]
