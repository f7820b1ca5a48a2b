# Nombre de archivo: service.py
# Ubicación de archivo: modules/informes_registros/service.py
# Descripción: Servicio que normaliza intervenciones/reclamaciones y genera su informe DOCX

"""Servicios compartidos para el informe de registros.

Las funciones ``build_*_report_data`` traducen un registro persistido al
formato genérico :class:`ReportData`; ``generate_report_document`` descarga la
foto (best-effort) y delega el armado del DOCX en :mod:`.report`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from core.auth import Principal
from core.errors import DocumentSynthesisError
from db.models.records import Intervention, Reclamation
from . import config as report_config
from .photos import PhotoFetcher
from .report import render_report_docx
from .schemas import GeneratedDocument, ReportData

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReportConfig:
    """Parámetros de configuración para la generación del informe."""

    logo_path: Optional[Path] = None
    company_name: str = "UTILITY FIRM"
    priority: str = "Medium"
    status: str = "Pending"

    @classmethod
    def from_settings(cls, settings) -> "ReportConfig":
        """Construye la configuración a partir de ``Settings.reports``."""
        reports = settings.reports
        return cls(
            logo_path=reports.logo_path,
            company_name=reports.company_name,
            priority=reports.default_priority,
            status=reports.default_status,
        )


def report_filename(kind_title: str, moment: Optional[datetime] = None) -> str:
    """``Intervention_Report_2024-01-01T10-00-00-000000+00-00.docx``."""

    stamp = (moment or datetime.now(timezone.utc)).isoformat().replace(":", "-").replace(".", "-")
    return f"{kind_title}_Report_{stamp}.docx"


def _bold_line(label: str, value: str) -> str:
    return f"**{label}:** {value}"


def build_intervention_report_data(
    record: Intervention,
    principal: Principal,
    config: ReportConfig,
) -> ReportData:
    team = ", ".join(record.team_members)
    dates = f"{record.start_date.isoformat()} to {record.end_date.isoformat()}"
    description = "\n".join(
        [
            _bold_line("Responsible", record.responsable),
            _bold_line("Team Members", team),
            _bold_line("Dates", dates),
            _bold_line("Company", record.entreprise_name),
            _bold_line("Site", record.site_name),
        ]
    )
    return ReportData(
        title=report_config.INTERVENTION_TITLE,
        employee_name=record.responsable,
        employee_id=principal.id,
        site_name=record.site_name,
        station_name=record.site_name,
        type_label=report_config.INTERVENTION_TYPE_LABEL,
        type_value=report_config.INTERVENTION_TYPE_VALUE,
        description=description,
        priority=config.priority,
        status=config.status,
        photo_url=record.photo_url,
        recipient_emails=list(record.recipient_emails),
        created_at=record.created_at,
        extra_details=[
            ("Company Name", record.entreprise_name),
            ("Start Date", record.start_date.isoformat()),
            ("End Date", record.end_date.isoformat()),
            ("Team Members", team),
        ],
    )


def build_reclamation_report_data(
    record: Reclamation,
    principal: Principal,
    config: ReportConfig,
) -> ReportData:
    category = getattr(record.reclamation_type, "value", record.reclamation_type)
    description = "\n".join(
        [
            _bold_line("Station", record.station_name),
            _bold_line("Date", record.date.isoformat()),
            _bold_line("Category", category),
            _bold_line("Details", record.description),
        ]
    )
    return ReportData(
        title=report_config.RECLAMATION_TITLE,
        employee_name=principal.name or "N/A",
        employee_id=principal.id,
        site_name=record.station_name,
        station_name=record.station_name,
        type_label=report_config.RECLAMATION_TYPE_LABEL,
        type_value=category,
        description=description,
        priority=config.priority,
        status=config.status,
        photo_url=record.photo_url,
        recipient_emails=list(record.recipient_emails),
        created_at=record.created_at,
        extra_details=[("Reclamation Date", record.date.isoformat())],
    )


async def generate_report_document(
    data: ReportData,
    filename: str,
    photo_fetcher: PhotoFetcher,
    config: ReportConfig,
) -> GeneratedDocument:
    """Descarga la foto (si hay) y renderiza el DOCX fuera del event loop.

    La foto es opcional: cualquier falla de descarga se registra y el informe
    se genera sin esa sección. Una falla del renderizador se propaga como
    :class:`DocumentSynthesisError`.
    """

    photo: Optional[bytes] = None
    if data.photo_url:
        result = await photo_fetcher.fetch(data.photo_url)
        if result.ok:
            photo = result.content
        else:
            logger.info("action=generate_report stage=photo_skipped reason=%s", result.reason)

    try:
        content, photo_included = await asyncio.to_thread(
            render_report_docx,
            data,
            photo,
            config.logo_path,
            config.company_name,
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("action=generate_report stage=render_failed filename=%s", filename)
        raise DocumentSynthesisError() from exc

    return GeneratedDocument(content=content, filename=filename, photo_included=photo_included)


async def generate_intervention_doc(
    record: Intervention,
    principal: Principal,
    photo_fetcher: PhotoFetcher,
    config: ReportConfig,
) -> GeneratedDocument:
    data = build_intervention_report_data(record, principal, config)
    return await generate_report_document(data, report_filename("Intervention"), photo_fetcher, config)


async def generate_reclamation_doc(
    record: Reclamation,
    principal: Principal,
    photo_fetcher: PhotoFetcher,
    config: ReportConfig,
) -> GeneratedDocument:
    data = build_reclamation_report_data(record, principal, config)
    return await generate_report_document(data, report_filename("Reclamation"), photo_fetcher, config)
