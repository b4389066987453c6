"""Render the interactive CV page as standalone HTML."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from cv_renderer.export.composer import document_filename
from cv_renderer.export.profiles import PROFILES, get_profile
from cv_renderer.models.cv import CVData, Highlight
from cv_renderer.models.markup import MarkedText, mark_metrics
from cv_renderer.utils.dates import format_date, format_date_range

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Experience entries shown on the page per format; None shows all.
PAGE_EXPERIENCE_LIMITS: dict[str, int | None] = {"full": None, "resume": 3, "summary": 2}


def marked_html(text: MarkedText) -> Markup:
    """Escape text and wrap styled spans in <strong>."""
    parts = []
    for segment, style in text.runs():
        if style:
            parts.append(Markup("<strong>{}</strong>").format(segment))
        else:
            parts.append(escape(segment))
    return Markup("").join(parts)


def highlight_html(highlight: Highlight) -> Markup:
    return marked_html(mark_metrics(highlight.text, highlight.metrics))


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["highlight"] = highlight_html
    env.filters["date"] = format_date
    env.globals["date_range"] = format_date_range
    return env


def render_html_page(cv: CVData, fmt: str = "full") -> str:
    """Render the CV page for a format (the format only trims experience)."""
    profile = get_profile(fmt)
    limit = PAGE_EXPERIENCE_LIMITS[profile.name]
    experience = cv.experience if limit is None else cv.experience[:limit]
    downloads = [
        {"format": p.name, "label": p.label, "description": p.description, "filename": document_filename(cv, p)}
        for p in PROFILES.values()
    ]
    template = _environment().get_template("cv_page.html")
    return template.render(
        cv=cv,
        personal=cv.personal,
        experience=experience,
        skill_groups=cv.skill_groups(),
        format=profile.name,
        downloads=downloads,
    )


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path
