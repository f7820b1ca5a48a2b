# Nombre de archivo: test_records_export.py
# Ubicación de archivo: tests/test_records_export.py
# Descripción: Pruebas del libro Excel de registros (hojas, columnas y numeración)

from __future__ import annotations

import io
from datetime import date, datetime, timezone

import pandas as pd
from openpyxl import load_workbook

from db.models.records import Intervention, Reclamation, ReclamationType
from modules.exportacion_registros import export_filename, export_records_xlsx
from modules.exportacion_registros.export import INTERVENTION_COLUMNS, RECLAMATION_COLUMNS

CREATED = datetime(2024, 5, 3, 9, 30, tzinfo=timezone.utc)


def _records():
    return [
        Reclamation(
            id=1,
            user_id="emp-042",
            user_email="j.doe@example.com",
            date=date(2024, 6, 10),
            station_name="Station 7",
            reclamation_type=ReclamationType.MECHANIC,
            description="Pump noise",
            photo_url=None,
            recipient_emails=["ops@example.com"],
            created_at=CREATED,
        ),
        Intervention(
            id=5,
            user_id="emp-042",
            user_email="j.doe@example.com",
            start_date=date(2024, 5, 1),
            end_date=date(2024, 5, 3),
            entreprise_name="Acme",
            responsable="J. Doe",
            team_members=["A. Smith"],
            site_name="North Plant",
            photo_url="https://photos.test/p.png",
            recipient_emails=["ops@example.com", "lead@example.com"],
            created_at=CREATED,
        ),
    ]


def _sheets(content: bytes) -> dict:
    return pd.read_excel(io.BytesIO(content), sheet_name=None, engine="openpyxl", keep_default_na=False)


def test_hojas_y_columnas() -> None:
    sheets = _sheets(export_records_xlsx(_records()))
    assert list(sheets) == ["Interventions", "Reclamations", "All Records"]
    assert list(sheets["Interventions"].columns) == INTERVENTION_COLUMNS
    assert list(sheets["Reclamations"].columns) == RECLAMATION_COLUMNS


def test_numeracion_continua_entre_hojas() -> None:
    sheets = _sheets(export_records_xlsx(_records()))
    assert list(sheets["Interventions"]["ID"]) == [1]
    assert list(sheets["Reclamations"]["ID"]) == [2]
    assert list(sheets["All Records"]["ID"]) == [1, 2]


def test_valores_formateados() -> None:
    sheets = _sheets(export_records_xlsx(_records(), include_owner=True))
    row = sheets["Interventions"].iloc[0]
    assert row["Start Date"] == "2024-05-01"
    assert row["Recipient Emails"] == "ops@example.com, lead@example.com"
    assert row["User Email"] == "j.doe@example.com"
    assert sheets["Reclamations"].iloc[0]["Photo URL"] == "N/A"
    assert sheets["Reclamations"].iloc[0]["Reclamation Type"] == "mechanic"


def test_celdas_sin_dato_quedan_como_texto() -> None:
    workbook = load_workbook(io.BytesIO(export_records_xlsx(_records())), read_only=True)
    rows = list(workbook["Reclamations"].iter_rows(values_only=True))
    header, first = rows[0], rows[1]
    assert first[header.index("Photo URL")] == "N/A"
    assert first[header.index("User Email")] == "N/A"


def test_sin_registros() -> None:
    sheets = _sheets(export_records_xlsx([]))
    assert all(df.empty for df in sheets.values())
    assert list(sheets["Interventions"].columns) == INTERVENTION_COLUMNS


def test_nombre_de_archivo() -> None:
    moment = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert export_filename(moment) == "Records_Export_2024-01-01T10-00-00+00-00.xlsx"
