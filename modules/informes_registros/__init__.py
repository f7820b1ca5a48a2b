# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/informes_registros/__init__.py
# Descripción: Inicializa el paquete de informes DOCX de intervenciones y reclamaciones

from .service import ReportConfig, generate_intervention_doc, generate_reclamation_doc

__all__ = ["ReportConfig", "generate_intervention_doc", "generate_reclamation_doc"]
