# Nombre de archivo: secrets.py
# Ubicación de archivo: core/secrets.py
# Descripción: Lectura de credenciales (SMTP, API de correo, base de datos) desde entorno o Docker secrets

"""Resolución de secretos para la API de registros.

El orden de búsqueda es:

1. La variable de entorno ``NAME``.
2. Un archivo indicado por ``NAME_FILE`` (convención de imágenes oficiales).
3. ``/run/secrets/name`` (Docker secrets, nombre en minúsculas).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

SECRETS_DIR = Path(os.getenv("SECRETS_DIR", "/run/secrets"))


def _read(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8").strip()
    except (FileNotFoundError, IsADirectoryError, PermissionError):
        return None


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Obtiene el secreto `name`.

    Parameters
    ----------
    name:
        Nombre de la variable de entorno a buscar.
    default:
        Valor a retornar si no se encuentra el secreto.
    """

    value = os.getenv(name)
    if value:
        return value

    pointer = os.getenv(f"{name}_FILE")
    if pointer:
        value = _read(Path(pointer))
        if value:
            return value

    return _read(SECRETS_DIR / name.lower()) or default
