# Nombre de archivo: config.py
# Ubicación de archivo: modules/informes_registros/config.py
# Descripción: Constantes de maquetación y rótulos del informe DOCX de intervenciones/reclamaciones

from pathlib import Path

from docx.shared import Inches, Pt, RGBColor

ASSETS_DIR = Path(__file__).resolve().parent / "assets"
LETTERHEAD_PATH = ASSETS_DIR / "letterhead.png"

LETTERHEAD_WIDTH = Inches(6.0)
PHOTO_WIDTH = Inches(4.2)
PHOTO_MAX_HEIGHT = Inches(3.2)

HEADER_SIZE = Pt(16)
TITLE_SIZE = Pt(14)
SECTION_SIZE = Pt(12)
BODY_SIZE = Pt(11)

HEADER_COLOR = RGBColor(0x1F, 0x29, 0x37)
TITLE_COLOR = RGBColor(0x37, 0x41, 0x51)
LABEL_FILL = "E5E7EB"

# Rótulos del documento (el informe se distribuye en inglés a los destinatarios)
INTERVENTION_TITLE = "Intervention Report"
RECLAMATION_TITLE = "Reclamation Report"
INTERVENTION_TYPE_LABEL = "Intervention Type"
INTERVENTION_TYPE_VALUE = "Maintenance"
RECLAMATION_TYPE_LABEL = "Reclamation Type"
DESCRIPTION_HEADER = "Description:"
PHOTO_HEADER = "Photo:"
RECIPIENTS_HEADER = "Report Recipients:"
DATE_FORMAT = "%Y-%m-%d"
