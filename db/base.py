# Nombre de archivo: base.py
# Ubicación de archivo: db/base.py
# Descripción: Base declarativa SQLAlchemy compartida por los modelos de intervenciones y reclamaciones

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Convención de nombres estable para que Alembic genere constraints reproducibles
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
