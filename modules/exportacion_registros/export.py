# Nombre de archivo: export.py
# Ubicación de archivo: modules/exportacion_registros/export.py
# Descripción: Exporta intervenciones y reclamaciones a un libro Excel (hojas por tipo y combinada)

from __future__ import annotations

import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_INTERVENTIONS = "Interventions"
SHEET_RECLAMATIONS = "Reclamations"
SHEET_ALL = "All Records"

INTERVENTION_COLUMNS = [
    "ID",
    "Type",
    "User Email",
    "Start Date",
    "End Date",
    "Company Name",
    "Responsible Person",
    "Team Members",
    "Site Name",
    "Photo URL",
    "Recipient Emails",
    "Created At",
]

RECLAMATION_COLUMNS = [
    "ID",
    "Type",
    "User Email",
    "Date",
    "Station Name",
    "Reclamation Type",
    "Description",
    "Photo URL",
    "Recipient Emails",
    "Created At",
]


def _fmt_date(value: Any) -> str:
    return value.isoformat() if value is not None else ""


def _fmt_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _owner(record, include_owner: bool) -> str:
    if not include_owner:
        return "N/A"
    return record.user_email or record.user_id


def _intervention_row(idx: int, record, include_owner: bool) -> Dict[str, Any]:
    return {
        "ID": idx,
        "Type": "Intervention",
        "User Email": _owner(record, include_owner),
        "Start Date": _fmt_date(record.start_date),
        "End Date": _fmt_date(record.end_date),
        "Company Name": record.entreprise_name,
        "Responsible Person": record.responsable,
        "Team Members": ", ".join(record.team_members or []),
        "Site Name": record.site_name,
        "Photo URL": record.photo_url or "N/A",
        "Recipient Emails": ", ".join(record.recipient_emails or []),
        "Created At": _fmt_datetime(record.created_at),
    }


def _reclamation_row(idx: int, record, include_owner: bool) -> Dict[str, Any]:
    return {
        "ID": idx,
        "Type": "Reclamation",
        "User Email": _owner(record, include_owner),
        "Date": _fmt_date(record.date),
        "Station Name": record.station_name,
        "Reclamation Type": getattr(record.reclamation_type, "value", record.reclamation_type),
        "Description": record.description,
        "Photo URL": record.photo_url or "N/A",
        "Recipient Emails": ", ".join(record.recipient_emails or []),
        "Created At": _fmt_datetime(record.created_at),
    }


def export_records_xlsx(records: Iterable[Any], include_owner: bool = False) -> bytes:
    """Genera el XLSX en memoria.

    Las intervenciones se numeran primero y las reclamaciones continúan la
    numeración, de modo que el ID es único en la hoja combinada.
    """

    records = list(records)
    interventions = [r for r in records if r.kind.value == "intervention"]
    reclamations = [r for r in records if r.kind.value == "reclamation"]

    intervention_rows: List[Dict[str, Any]] = [
        _intervention_row(idx, record, include_owner) for idx, record in enumerate(interventions, start=1)
    ]
    offset = len(intervention_rows)
    reclamation_rows: List[Dict[str, Any]] = [
        _reclamation_row(offset + idx, record, include_owner) for idx, record in enumerate(reclamations, start=1)
    ]

    df_interventions = pd.DataFrame(intervention_rows, columns=INTERVENTION_COLUMNS)
    df_reclamations = pd.DataFrame(reclamation_rows, columns=RECLAMATION_COLUMNS)
    df_all = pd.concat([df_interventions, df_reclamations], ignore_index=True, sort=False)

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:  # type: ignore[arg-type]
        df_interventions.to_excel(writer, sheet_name=SHEET_INTERVENTIONS, index=False)
        df_reclamations.to_excel(writer, sheet_name=SHEET_RECLAMATIONS, index=False)
        df_all.to_excel(writer, sheet_name=SHEET_ALL, index=False)
    buffer.seek(0)

    logger.info(
        "action=export_records interventions=%s reclamations=%s include_owner=%s",
        len(interventions),
        len(reclamations),
        include_owner,
    )
    return buffer.getvalue()


def export_filename(moment: Optional[datetime] = None) -> str:
    stamp = (moment or datetime.now(timezone.utc)).isoformat().replace(":", "-").replace(".", "-")
    return f"Records_Export_{stamp}.xlsx"
