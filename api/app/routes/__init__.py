# Nombre de archivo: __init__.py
# Ubicación de archivo: api/app/routes/__init__.py
# Descripción: Init del paquete routes

"""Routers de la API.

Cada módulo expone un ``router`` que ``create_app`` registra.
"""

from .health import router as health_router
from .interventions import router as interventions_router
from .reclamations import router as reclamations_router
from .records import router as records_router

__all__ = ["health_router", "interventions_router", "reclamations_router", "records_router"]
