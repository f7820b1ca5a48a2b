# Nombre de archivo: markup.py
# Ubicación de archivo: core/docx_utils/markup.py
# Descripción: Interpreta marcado simple de negritas (**texto**) y lo vuelca como runs de python-docx

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from docx.shared import Pt
from docx.text.paragraph import Paragraph

BOLD_MARKER = "**"


@dataclass(frozen=True, slots=True)
class Span:
    text: str
    bold: bool = False


def parse_bold_markup(line: str, marker: str = BOLD_MARKER) -> List[Span]:
    """Divide una línea en tramos planos/negrita delimitados por ``marker``.

    Un tramo en negrita sin cierre se conserva como texto plano, incluyendo el
    marcador de apertura, para no perder contenido del usuario.
    """

    if not line:
        return []

    partes = line.split(marker)
    spans: List[Span] = []
    # Con cantidad par de partes el último marcador quedó abierto
    abierto = len(partes) % 2 == 0
    for idx, texto in enumerate(partes):
        es_negrita = idx % 2 == 1
        if abierto and idx == len(partes) - 1:
            texto = marker + texto
            es_negrita = False
        if texto:
            spans.append(Span(texto, es_negrita))
    return _merge_adjacent(spans)


def _merge_adjacent(spans: List[Span]) -> List[Span]:
    merged: List[Span] = []
    for span in spans:
        if merged and merged[-1].bold == span.bold:
            merged[-1] = Span(merged[-1].text + span.text, span.bold)
        else:
            merged.append(span)
    return merged


def add_markup_runs(paragraph: Paragraph, line: str, size: Optional[Pt] = None) -> Paragraph:
    """Agrega al párrafo un run por tramo de la línea interpretada."""

    for span in parse_bold_markup(line):
        run = paragraph.add_run(span.text)
        run.bold = span.bold
        if size is not None:
            run.font.size = size
    return paragraph


__all__ = ["BOLD_MARKER", "Span", "parse_bold_markup", "add_markup_runs"]
