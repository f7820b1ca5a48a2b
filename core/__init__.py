# Nombre de archivo: __init__.py
# Ubicación de archivo: core/__init__.py
# Descripción: Inicializa el paquete de utilidades centrales (configuración, logging, errores, servicios)

"""Utilidades compartidas por la API de intervenciones y reclamaciones."""

from .secrets import get_secret

__all__ = ["get_secret"]
