# Nombre de archivo: records.py
# Ubicación de archivo: api/app/routes/records.py
# Descripción: Consulta, exportación Excel y borrado de los registros del usuario

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from core.auth import Principal
from core.config import Settings
from core.errors import Forbidden, SubmissionError
from core.repositories.records import RecordStore
from core.schemas import serialize_record
from core.services.records_overview import summarize_by_owner
from modules.exportacion_registros import XLSX_MIME_TYPE, export_filename, export_records_xlsx
from ..deps import as_http_exception, get_current_principal, get_settings_dep, get_store

router = APIRouter(prefix="/records", tags=["records"])

logger = logging.getLogger(__name__)


@router.get("")
async def list_records(
    principal: Principal = Depends(get_current_principal),
    store: RecordStore = Depends(get_store),
) -> list[dict]:
    """Intervenciones y reclamaciones del usuario, más recientes primero."""

    try:
        records = await asyncio.to_thread(store.list_records, principal.id)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc
    return [serialize_record(record) for record in records]


def _require_admin(principal: Principal, settings: Settings, action: str) -> None:
    if not principal.is_admin(settings.admin_emails):
        logger.warning("action=%s stage=forbidden user_id=%s", action, principal.id)
        raise as_http_exception(Forbidden())


@router.get("/admin")
async def admin_overview(
    principal: Principal = Depends(get_current_principal),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
) -> dict:
    """Registros de todos los usuarios agrupados por dueño, con conteos y última actividad."""

    _require_admin(principal, settings, "records.admin")
    try:
        records = await asyncio.to_thread(store.list_all_records)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc
    return {"success": True, "data": summarize_by_owner(records)}


@router.get("/export")
async def export_records(
    admin: bool = Query(False, description="Exporta los registros de todos los usuarios"),
    principal: Principal = Depends(get_current_principal),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
) -> Response:
    if admin:
        _require_admin(principal, settings, "records.export")

    try:
        if admin:
            records = await asyncio.to_thread(store.list_all_records)
        else:
            records = await asyncio.to_thread(store.list_records, principal.id)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc

    content = await asyncio.to_thread(export_records_xlsx, records, admin)
    filename = export_filename()
    return Response(
        content=content,
        media_type=XLSX_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("")
async def delete_records(
    principal: Principal = Depends(get_current_principal),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Borra todos los registros del usuario (limpieza previa a la baja de cuenta)."""

    try:
        deleted = await asyncio.to_thread(store.delete_user_records, principal.id)
    except SubmissionError as exc:
        raise as_http_exception(exc) from exc
    return {"deleted": deleted}
