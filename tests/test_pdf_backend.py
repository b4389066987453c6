"""Tests for the fpdf2 backend."""

import pytest

from cv_renderer.export.document import Document, DocumentMetadata
from cv_renderer.export.generator import render_document
from cv_renderer.export.pdf_backend import FPDFTextMeasurer, render_pdf


@pytest.fixture(scope="module")
def fpdf_measurer():
    return FPDFTextMeasurer()


class TestMeasurer:
    def test_positive_width(self, fpdf_measurer):
        assert fpdf_measurer.width("Data pipelines", 10) > 0

    def test_empty_text(self, fpdf_measurer):
        assert fpdf_measurer.width("", 10) == 0

    def test_bold_is_wider(self, fpdf_measurer):
        text = "Reliable ML infrastructure"
        assert fpdf_measurer.width(text, 10, "B") > fpdf_measurer.width(text, 10)

    def test_scales_with_font_size(self, fpdf_measurer):
        small = fpdf_measurer.width("Engineer", 10)
        large = fpdf_measurer.width("Engineer", 20)
        assert large == pytest.approx(small * 2, rel=0.01)

    def test_non_latin_text_measured(self, fpdf_measurer):
        assert fpdf_measurer.width("data 日本", 10) > 0


class TestRenderPdf:
    def test_pdf_bytes(self):
        document = Document(metadata=DocumentMetadata(title="Test"))
        document.add_page()
        document.text(20, 30, "Hello", 10, style="B")
        document.line(20, 32, 80, 32)
        document.marker(22, 40, 0.55)
        document.current_page.stamp(document.current_page.texts()[0])
        pdf = render_pdf(document)
        assert pdf.startswith(b"%PDF")

    def test_link_and_unencodable_text(self):
        document = Document()
        document.add_page()
        document.text(20, 30, "Full CV online: cv.example.com", 8, link="https://cv.example.com")
        document.text(20, 40, "日本 data", 8)
        assert render_pdf(document).startswith(b"%PDF")

    @pytest.mark.parametrize("fmt", ["full", "resume", "summary"])
    def test_render_document(self, sample_cv, fmt):
        result = render_document(sample_cv, fmt, full_version_url="https://cv.example.com")
        assert result.pdf.startswith(b"%PDF")
        assert result.page_count >= 1
        assert result.profile.name == fmt
        assert result.filename.startswith("Ana_Lopez_")
