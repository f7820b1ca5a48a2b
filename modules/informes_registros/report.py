# Nombre de archivo: report.py
# Ubicación de archivo: modules/informes_registros/report.py
# Descripción: Renderizado DOCX del informe de un registro (membrete, título, tabla, descripción, foto, destinatarios)

import io
import logging
from pathlib import Path
from typing import Optional

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.image import Image
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shape import InlineShape
from docx.shared import Pt
from docx.text.paragraph import Paragraph

from core.docx_utils.markup import add_markup_runs
from .config import (
    BODY_SIZE,
    DATE_FORMAT,
    DESCRIPTION_HEADER,
    HEADER_COLOR,
    HEADER_SIZE,
    LABEL_FILL,
    LETTERHEAD_WIDTH,
    PHOTO_HEADER,
    PHOTO_MAX_HEIGHT,
    PHOTO_WIDTH,
    RECIPIENTS_HEADER,
    SECTION_SIZE,
    TITLE_COLOR,
    TITLE_SIZE,
)
from .schemas import ReportData

logger = logging.getLogger(__name__)


def _label_cell(cell, text: str) -> None:
    cell.text = ""
    run = cell.paragraphs[0].add_run(text)
    run.bold = True
    run.font.size = BODY_SIZE
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:fill"), LABEL_FILL)
    cell._tc.get_or_add_tcPr().append(shading)


def _value_cell(cell, text: str) -> None:
    cell.text = ""
    run = cell.paragraphs[0].add_run(text or "-")
    run.font.size = BODY_SIZE


def _section_header(doc: Document, text: str) -> Paragraph:
    paragraph = doc.add_paragraph()
    paragraph.paragraph_format.space_before = Pt(20)
    paragraph.paragraph_format.space_after = Pt(10)
    run = paragraph.add_run(text)
    run.bold = True
    run.font.size = SECTION_SIZE
    return paragraph


def _add_letterhead(doc: Document, logo_path: Optional[Path], company_name: str) -> None:
    """Inserta el membrete; si el asset no está disponible usa el nombre de la empresa."""

    paragraph = doc.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_after = Pt(10)
    if logo_path is not None and logo_path.exists():
        try:
            paragraph.add_run().add_picture(str(logo_path), width=LETTERHEAD_WIDTH)
            return
        except Exception as exc:  # noqa: BLE001
            logger.warning("action=render_report stage=letterhead_failed path=%s error=%s", logo_path, exc)
    else:
        logger.warning("action=render_report stage=letterhead_missing path=%s", logo_path)
    run = paragraph.add_run(company_name)
    run.bold = True
    run.font.size = HEADER_SIZE
    run.font.color.rgb = HEADER_COLOR


def _add_title(doc: Document, data: ReportData) -> None:
    lines = data.title_lines() or [data.title]
    for idx, line in enumerate(lines):
        paragraph = doc.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.space_after = Pt(24 if idx == len(lines) - 1 else 2)
        run = paragraph.add_run(line)
        run.bold = True
        run.font.size = TITLE_SIZE
        run.font.color.rgb = TITLE_COLOR


def _add_details_table(doc: Document, data: ReportData) -> None:
    rows = data.details_rows(DATE_FORMAT)
    table = doc.add_table(rows=len(rows), cols=2)
    table.style = "Table Grid"
    table.alignment = WD_TABLE_ALIGNMENT.CENTER
    for row, (label, value) in zip(table.rows, rows):
        _label_cell(row.cells[0], label)
        _value_cell(row.cells[1], value)


def _add_description(doc: Document, description: str) -> None:
    _section_header(doc, DESCRIPTION_HEADER)
    lines = description.splitlines() or [""]
    for line in lines:
        paragraph = doc.add_paragraph()
        paragraph.paragraph_format.space_after = Pt(4)
        add_markup_runs(paragraph, line, size=BODY_SIZE)


def _photo_is_embeddable(photo: bytes) -> bool:
    """True si python-docx puede leer la imagen y esta tiene ancho y alto."""

    try:
        image = Image.from_blob(photo)
    except Exception as exc:  # noqa: BLE001
        logger.warning("action=render_report stage=photo_invalid error=%r", exc)
        return False
    if not image.px_width or not image.px_height:
        logger.warning(
            "action=render_report stage=photo_invalid error=zero_size width=%s height=%s",
            image.px_width,
            image.px_height,
        )
        return False
    return True


def _add_photo(doc: Document, photo: bytes) -> bool:
    """Agrega la sección de foto; False si la imagen no es embebible."""

    if not _photo_is_embeddable(photo):
        return False

    header = _section_header(doc, PHOTO_HEADER)
    paragraph = doc.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    try:
        picture = paragraph.add_run().add_picture(io.BytesIO(photo), width=PHOTO_WIDTH)
        _fit_inline_picture(picture)
    except Exception as exc:  # noqa: BLE001
        # Sin foto el informe sigue siendo válido: se quita la sección a medio armar
        logger.warning("action=render_report stage=photo_embed_failed error=%r", exc)
        for element in (paragraph._p, header._p):
            element.getparent().remove(element)
        return False
    return True


def _fit_inline_picture(picture: InlineShape) -> None:
    width = float(picture.width)
    height = float(picture.height)
    if height > float(PHOTO_MAX_HEIGHT):
        ratio = float(PHOTO_MAX_HEIGHT) / height
        picture.height = int(PHOTO_MAX_HEIGHT)
        picture.width = int(width * ratio)


def _add_recipients(doc: Document, recipients: list[str]) -> None:
    _section_header(doc, RECIPIENTS_HEADER)
    paragraph = doc.add_paragraph()
    run = paragraph.add_run(", ".join(recipients))
    run.font.size = BODY_SIZE


def render_report_docx(
    data: ReportData,
    photo: Optional[bytes] = None,
    logo_path: Optional[Path] = None,
    company_name: str = "UTILITY FIRM",
) -> tuple[bytes, bool]:
    """Arma el DOCX en memoria y devuelve (bytes, foto_incluida)."""

    doc = Document()
    _add_letterhead(doc, logo_path, company_name)
    _add_title(doc, data)
    _add_details_table(doc, data)
    _add_description(doc, data.description)

    photo_included = False
    if photo:
        photo_included = _add_photo(doc, photo)

    _add_recipients(doc, data.recipient_emails)

    buffer = io.BytesIO()
    doc.save(buffer)
    content = buffer.getvalue()
    logger.info(
        "action=render_report title=%s bytes=%s photo=%s recipients=%s",
        data.title_lines()[:1],
        len(content),
        photo_included,
        len(data.recipient_emails),
    )
    return content, photo_included
