"""fpdf2 backend: font metrics for layout and replay of a Document into PDF bytes."""

from __future__ import annotations

import logging

from fpdf import FPDF

from cv_renderer.export.document import Document, LineOp, MarkerOp, TextOp

logger = logging.getLogger(__name__)

FONT_FAMILY = "helvetica"


def _new_pdf() -> FPDF:
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(False)
    pdf.set_margins(0, 0, 0)
    return pdf


class FPDFTextMeasurer:
    """TextMeasurer backed by the core Helvetica metrics of fpdf2."""

    def __init__(self, family: str = FONT_FAMILY):
        self.family = family
        self._pdf = _new_pdf()

    def width(self, text: str, font_size: float, style: str = "") -> float:
        self._pdf.set_font(self.family, style=style, size=font_size)
        return self._pdf.get_string_width(_safe_text(text, self._pdf))


def render_pdf(document: Document, family: str = FONT_FAMILY) -> bytes:
    """Flatten every page of the document into a PDF."""
    pdf = _new_pdf()
    meta = document.metadata
    pdf.set_title(meta.title)
    pdf.set_subject(meta.subject)
    pdf.set_author(meta.author)
    pdf.set_keywords(meta.keywords)
    pdf.set_creator(meta.creator)

    for page in document.pages:
        pdf.add_page()
        for op in [*page.ops, *page.footer]:
            if isinstance(op, TextOp):
                _draw_text(pdf, op, family)
            elif isinstance(op, LineOp):
                pdf.set_draw_color(*op.color)
                pdf.set_line_width(op.width)
                pdf.line(op.x1, op.y1, op.x2, op.y2)
            elif isinstance(op, MarkerOp):
                pdf.set_fill_color(*op.color)
                d = op.radius * 2
                pdf.ellipse(op.x - op.radius, op.y - op.radius, d, d, style="F")

    logger.debug("Rendered %d PDF pages", document.page_count)
    return bytes(pdf.output())


def _draw_text(pdf: FPDF, op: TextOp, family: str) -> None:
    pdf.set_font(family, style=op.style, size=op.size)
    pdf.set_text_color(*op.color)
    text = _safe_text(op.text, pdf)
    pdf.text(op.x, op.y, text)
    if op.link:
        width = pdf.get_string_width(text)
        height = op.size * 25.4 / 72
        pdf.link(op.x, op.y - height * 0.8, width, height, op.link)


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")
