# Nombre de archivo: test_records_report.py
# Ubicación de archivo: tests/test_records_report.py
# Descripción: Pruebas de generación del informe DOCX de intervenciones y reclamaciones

from __future__ import annotations

import asyncio
import io
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from docx import Document

from core.errors import DocumentSynthesisError
from db.models.records import Intervention, Reclamation, ReclamationType
from modules.informes_registros import ReportConfig, generate_intervention_doc, generate_reclamation_doc
from modules.informes_registros.report import render_report_docx
from modules.informes_registros.schemas import ReportData
from modules.informes_registros.service import build_intervention_report_data, report_filename

CREATED = datetime(2024, 5, 3, 9, 30, tzinfo=timezone.utc)


def _intervention(photo_url=None) -> Intervention:
    return Intervention(
        id=7,
        user_id="emp-042",
        user_email="j.doe@example.com",
        start_date=date(2024, 5, 1),
        end_date=date(2024, 5, 3),
        entreprise_name="Acme",
        responsable="J. Doe",
        team_members=["A. Smith", "B. Jones"],
        site_name="North Plant",
        photo_url=photo_url,
        recipient_emails=["ops@example.com", "lead@example.com"],
        created_at=CREATED,
    )


def _reclamation() -> Reclamation:
    return Reclamation(
        id=3,
        user_id="emp-042",
        date=date(2024, 6, 10),
        station_name="Station 7",
        reclamation_type=ReclamationType.HYDRAULIC,
        description="Leak at **valve 3**",
        recipient_emails=["ops@example.com"],
        created_at=CREATED,
    )


def _details(content: bytes) -> dict[str, str]:
    doc = Document(io.BytesIO(content))
    return {row.cells[0].text: row.cells[1].text for row in doc.tables[0].rows}


def _data(**overrides) -> ReportData:
    base = dict(
        title="Intervention Report",
        employee_name="J. Doe",
        employee_id="emp-042",
        site_name="North Plant",
        station_name="North Plant",
        type_label="Intervention Type",
        type_value="Maintenance",
        description="**Company:** Acme",
        recipient_emails=["ops@example.com"],
        created_at=CREATED,
    )
    base.update(overrides)
    return ReportData(**base)


def test_tabla_de_detalles() -> None:
    content, photo_included = render_report_docx(_data())
    assert content
    assert photo_included is False
    details = _details(content)
    assert details["Employee Name:"] == "J. Doe"
    assert details["Employee ID:"] == "emp-042"
    assert details["Intervention Type:"] == "Maintenance"
    assert details["Priority:"] == "Medium"
    assert details["Status:"] == "Pending"
    assert details["Date Created:"] == "2024-05-03"


def test_titulo_descripcion_y_destinatarios() -> None:
    content, _ = render_report_docx(_data(recipient_emails=["a@example.com", "b@example.com"]))
    textos = [p.text for p in Document(io.BytesIO(content)).paragraphs]
    assert "Intervention Report" in textos
    assert "Description:" in textos
    assert "Company: Acme" in textos
    assert "Report Recipients:" in textos
    assert "a@example.com, b@example.com" in textos
    assert "Photo:" not in textos


def test_foto_embebida(photo_png) -> None:
    content, photo_included = render_report_docx(_data(), photo=photo_png)
    assert photo_included is True
    doc = Document(io.BytesIO(content))
    assert "Photo:" in [p.text for p in doc.paragraphs]


def test_foto_corrupta_se_omite() -> None:
    content, photo_included = render_report_docx(_data(), photo=b"no es una imagen")
    assert photo_included is False
    assert "Photo:" not in [p.text for p in Document(io.BytesIO(content)).paragraphs]


def test_foto_malformada_se_omite(malformed_png) -> None:
    content, photo_included = render_report_docx(_data(), photo=malformed_png)
    assert photo_included is False
    doc = Document(io.BytesIO(content))
    assert "Photo:" not in [p.text for p in doc.paragraphs]
    assert "Report Recipients:" in [p.text for p in doc.paragraphs]


def test_membrete_faltante_usa_nombre_de_empresa(tmp_path: Path) -> None:
    content, _ = render_report_docx(_data(), logo_path=tmp_path / "no-existe.png", company_name="ACME UTILITIES")
    assert "ACME UTILITIES" in [p.text for p in Document(io.BytesIO(content)).paragraphs]


def test_mismos_datos_misma_tabla() -> None:
    primero, _ = render_report_docx(_data())
    segundo, _ = render_report_docx(_data())
    assert _details(primero) == _details(segundo)


def test_datos_de_intervencion(principal) -> None:
    data = build_intervention_report_data(_intervention(), principal, ReportConfig())
    assert data.employee_name == "J. Doe"
    assert data.employee_id == "emp-042"
    assert "**Team Members:** A. Smith, B. Jones" in data.description.splitlines()
    assert ("Company Name", "Acme") in data.extra_details


def test_nombre_de_archivo() -> None:
    moment = datetime(2024, 1, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)
    assert report_filename("Intervention", moment) == "Intervention_Report_2024-01-01T10-00-00-123456+00-00.docx"


def test_documento_de_intervencion(principal, photo_fetcher) -> None:
    doc = asyncio.run(
        generate_intervention_doc(
            _intervention("https://photos.test/photo.png"), principal, photo_fetcher, ReportConfig()
        )
    )
    assert doc.photo_included is True
    assert doc.filename.startswith("Intervention_Report_")
    details = _details(doc.content)
    assert details["Company Name:"] == "Acme"
    assert details["Start Date:"] == "2024-05-01"
    assert details["Team Members:"] == "A. Smith, B. Jones"


def test_documento_sin_foto_si_la_descarga_falla(principal, photo_fetcher) -> None:
    doc = asyncio.run(
        generate_intervention_doc(
            _intervention("https://photos.test/slow.png"), principal, photo_fetcher, ReportConfig()
        )
    )
    assert doc.content
    assert doc.photo_included is False


def test_documento_de_reclamacion(principal, photo_fetcher) -> None:
    doc = asyncio.run(generate_reclamation_doc(_reclamation(), principal, photo_fetcher, ReportConfig()))
    details = _details(doc.content)
    assert details["Reclamation Type:"] == "hydraulic"
    assert details["Station Name:"] == "Station 7"
    assert details["Employee Name:"] == "J. Doe"


def test_falla_del_renderizador(principal, photo_fetcher, monkeypatch) -> None:
    import modules.informes_registros.service as service_module

    def _boom(*_args, **_kwargs):
        raise ValueError("bad template")

    monkeypatch.setattr(service_module, "render_report_docx", _boom)
    with pytest.raises(DocumentSynthesisError):
        asyncio.run(generate_reclamation_doc(_reclamation(), principal, photo_fetcher, ReportConfig()))
