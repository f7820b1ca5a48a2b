# Nombre de archivo: records.py
# Ubicación de archivo: db/models/records.py
# Descripción: Modelos SQLAlchemy para intervenciones (mantenimiento) y reclamaciones (quejas)

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import JSON, Column, Date, DateTime, Enum as SQLEnum, Integer, String, Text

from db.base import Base


class RecordKind(str, Enum):
    """Discriminador de tipo de registro."""

    INTERVENTION = "intervention"
    RECLAMATION = "reclamation"


class ReclamationType(str, Enum):
    """Subsistema afectado por una reclamación."""

    HYDRAULIC = "hydraulic"
    ELECTRIC = "electric"
    MECHANIC = "mechanic"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Intervention(Base):
    __tablename__ = "interventions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False, index=True)
    user_email = Column(String(320), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    entreprise_name = Column(String(255), nullable=False)
    responsable = Column(String(255), nullable=False)
    team_members = Column(JSON, nullable=False, default=list)
    site_name = Column(String(255), nullable=False)
    photo_url = Column(Text, nullable=True)
    recipient_emails = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    kind = RecordKind.INTERVENTION


class Reclamation(Base):
    __tablename__ = "reclamations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False, index=True)
    user_email = Column(String(320), nullable=True)
    date = Column(Date, nullable=False)
    station_name = Column(String(255), nullable=False)
    reclamation_type = Column(
        SQLEnum(
            ReclamationType,
            name="reclamation_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
    )
    description = Column(Text, nullable=False)
    photo_url = Column(Text, nullable=True)
    recipient_emails = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    kind = RecordKind.RECLAMATION


__all__ = ["Intervention", "Reclamation", "RecordKind", "ReclamationType", "utcnow"]
