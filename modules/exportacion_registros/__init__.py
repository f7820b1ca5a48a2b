# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/exportacion_registros/__init__.py
# Descripción: Inicializa el paquete de exportación Excel de registros

from .export import XLSX_MIME_TYPE, export_filename, export_records_xlsx

__all__ = ["XLSX_MIME_TYPE", "export_filename", "export_records_xlsx"]
