"""Tests for the HTML CV page."""

import pytest
from markupsafe import Markup

from cv_renderer.export.html_page import highlight_html, marked_html, render_html_page, save_html
from cv_renderer.models.cv import Highlight
from cv_renderer.models.markup import mark_metrics


class TestMarkedHtml:
    def test_metric_wrapped_in_strong(self):
        html = highlight_html(Highlight(text="Cut latency by 40%", metrics={"latency": "40%"}))
        assert isinstance(html, Markup)
        assert str(html) == "Cut latency by <strong>40%</strong>"

    def test_text_is_escaped(self):
        html = marked_html(mark_metrics("Moved <script> to 5 hosts", {"hosts": 5}))
        assert "&lt;script&gt;" in html
        assert "<strong>5</strong>" in html


class TestRenderHtmlPage:
    def test_full_page_lists_all_experience(self, sample_cv, experience_titles):
        html = render_html_page(sample_cv, "full")
        for title in experience_titles:
            assert title in html
        assert 'data-cv-format="full"' in html

    @pytest.mark.parametrize("fmt, shown", [("resume", 3), ("summary", 2)])
    def test_experience_trimmed_per_format(self, sample_cv, experience_titles, fmt, shown):
        html = render_html_page(sample_cv, fmt)
        for title in experience_titles[:shown]:
            assert title in html
        for title in experience_titles[shown:]:
            assert title not in html

    def test_metrics_bold(self, sample_cv):
        assert "<strong>40%</strong>" in render_html_page(sample_cv)

    def test_dates(self, sample_cv):
        html = render_html_page(sample_cv)
        assert "Aug 2022 - Present" in html
        assert "2019 - Expected 2025" in html

    def test_download_links(self, sample_cv):
        html = render_html_page(sample_cv)
        for name in ("Ana_Lopez_CV.pdf", "Ana_Lopez_Resume.pdf", "Ana_Lopez_Summary.pdf"):
            assert f'href="{name}"' in html

    def test_record_text_escaped(self, sample_record):
        from cv_renderer.models.cv import CVData

        sample_record["personal"]["title"] = "<b>Engineer</b>"
        html = render_html_page(CVData.model_validate(sample_record))
        assert "&lt;b&gt;Engineer&lt;/b&gt;" in html
        assert "<b>Engineer</b>" not in html

    def test_unknown_format(self, sample_cv):
        with pytest.raises(ValueError, match="Unknown format"):
            render_html_page(sample_cv, "poster")


class TestSaveHtml:
    def test_creates_parent_dirs(self, tmp_path):
        path = save_html("<html></html>", tmp_path / "out" / "cv.html")
        assert path.read_text(encoding="utf-8") == "<html></html>"
