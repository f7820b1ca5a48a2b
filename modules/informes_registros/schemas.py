# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/informes_registros/schemas.py
# Descripción: Modelos de datos normalizados para generar el informe DOCX de un registro

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class ReportData(BaseModel):
    """Datos que el renderizador vuelca en el documento."""

    title: str
    employee_name: str
    employee_id: str
    site_name: str
    station_name: str
    type_label: str
    type_value: str
    description: str = ""
    priority: str = "Medium"
    status: str = "Pending"
    photo_url: Optional[str] = None
    recipient_emails: List[str] = Field(min_length=1)
    created_at: Optional[datetime] = None
    extra_details: List[Tuple[str, str]] = Field(default_factory=list)

    def title_lines(self) -> List[str]:
        return [line.strip() for line in self.title.splitlines() if line.strip()]

    def details_rows(self, date_format: str) -> List[Tuple[str, str]]:
        creado = (self.created_at or datetime.now()).strftime(date_format)
        rows = [
            ("Employee Name:", self.employee_name),
            ("Employee ID:", self.employee_id),
            ("Site Name:", self.site_name),
            ("Station Name:", self.station_name),
            (f"{self.type_label}:", self.type_value),
            ("Priority:", self.priority),
            ("Status:", self.status),
            ("Date Created:", creado),
        ]
        rows.extend((f"{label}:", value) for label, value in self.extra_details)
        return rows


class GeneratedDocument(BaseModel):
    """Resultado de la síntesis: bytes del DOCX y nombre sugerido de archivo."""

    content: bytes
    filename: str
    photo_included: bool = False
