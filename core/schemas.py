# Nombre de archivo: schemas.py
# Ubicación de archivo: core/schemas.py
# Descripción: Modelos Pydantic de entrada/salida para intervenciones y reclamaciones (JSON camelCase)

from __future__ import annotations

import datetime as dt
from typing import Annotated, List, Literal, Optional

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from db.models.records import ReclamationType

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _check_email(value: str) -> str:
    # Se valida el formato pero se conserva la dirección tal como fue escrita
    validate_email(value, check_deliverability=False)
    return value


RecipientEmail = Annotated[NonEmptyStr, AfterValidator(_check_email)]


def _normalize_photo_url(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InterventionCreate(_CamelModel):
    """Formulario de alta de intervención."""

    start_date: dt.date
    end_date: dt.date
    entreprise_name: NonEmptyStr
    responsable: NonEmptyStr
    team_members: List[NonEmptyStr] = Field(min_length=1)
    site_name: NonEmptyStr
    photo_url: Optional[str] = None
    recipient_emails: List[RecipientEmail] = Field(min_length=1)

    @field_validator("photo_url")
    @classmethod
    def _photo_url(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_photo_url(value)


class ReclamationCreate(_CamelModel):
    """Formulario de alta de reclamación."""

    date: dt.date
    station_name: NonEmptyStr
    reclamation_type: ReclamationType
    description: NonEmptyStr
    photo_url: Optional[str] = None
    recipient_emails: List[RecipientEmail] = Field(min_length=1)

    @field_validator("photo_url")
    @classmethod
    def _photo_url(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_photo_url(value)


class InterventionOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    type: Literal["intervention"] = "intervention"
    user_id: str
    start_date: dt.date
    end_date: dt.date
    entreprise_name: str
    responsable: str
    team_members: List[str]
    site_name: str
    photo_url: Optional[str] = None
    recipient_emails: List[str]
    created_at: dt.datetime


class ReclamationOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    type: Literal["reclamation"] = "reclamation"
    user_id: str
    date: dt.date
    station_name: str
    reclamation_type: ReclamationType
    description: str
    photo_url: Optional[str] = None
    recipient_emails: List[str]
    created_at: dt.datetime


def serialize_record(record) -> dict:
    """Convierte un registro ORM en el JSON camelCase que consume la UI."""

    model = InterventionOut if record.kind.value == "intervention" else ReclamationOut
    return model.model_validate(record).model_dump(mode="json", by_alias=True)


__all__ = [
    "InterventionCreate",
    "ReclamationCreate",
    "InterventionOut",
    "ReclamationOut",
    "serialize_record",
]
