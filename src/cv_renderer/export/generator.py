"""Entry points: render a record to PDF bytes, or load, render and save a file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cv_renderer.cache.record_cache import RecordCache
from cv_renderer.config import AppConfig, load_config
from cv_renderer.export.composer import DocumentComposer, document_filename
from cv_renderer.export.document import Document
from cv_renderer.export.pdf_backend import FPDFTextMeasurer, render_pdf
from cv_renderer.export.profiles import FormatProfile, get_profile
from cv_renderer.export.text_layout import TextMeasurer
from cv_renderer.models.cv import CVData
from cv_renderer.parsers.cv_loader import load_cv

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    filename: str
    pdf: bytes
    document: Document
    profile: FormatProfile
    rendered_sections: list[str] = field(default_factory=list)
    omitted_sections: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return self.document.page_count


def default_full_version_url(cv: CVData) -> str | None:
    contact = cv.personal.contact
    return contact.website or contact.linkedin or contact.github


def render_document(
    cv: CVData,
    fmt: str = "full",
    *,
    measurer: TextMeasurer | None = None,
    full_version_url: str | None = None,
    repair_spacing: bool = True,
) -> RenderResult:
    """Lay out and render one format of the CV to PDF bytes."""
    profile = get_profile(fmt)
    composer = DocumentComposer(
        cv,
        profile,
        measurer or FPDFTextMeasurer(),
        full_version_url=full_version_url,
        repair_spacing=repair_spacing,
    )
    document = composer.compose()
    return RenderResult(
        filename=document_filename(cv, profile),
        pdf=render_pdf(document),
        document=document,
        profile=profile,
        rendered_sections=composer.rendered_sections,
        omitted_sections=composer.omitted_sections,
    )


def generate_document(
    fmt: str = "full",
    *,
    config: AppConfig | None = None,
    source: str | None = None,
    output_dir: str | Path | None = None,
    cache: RecordCache | None = None,
    cv: CVData | None = None,
) -> Path:
    """Load the record fresh, render the requested format and write the PDF.

    Raises:
        DataUnavailableError: when no fresh or cached record is available.
    """
    config = config or load_config()
    profile = get_profile(fmt)
    if cv is None:
        if cache is None:
            cache = RecordCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
        cv = load_cv(source or config.data.source, cache=cache, timeout=config.data.timeout)

    result = render_document(
        cv,
        profile.name,
        full_version_url=config.export.full_version_url or default_full_version_url(cv),
        repair_spacing=config.export.repair_split_text,
    )

    out_dir = Path(output_dir or config.export.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / result.filename
    path.write_bytes(result.pdf)
    logger.info("Saved %s (%d pages) to %s", profile.name, result.page_count, path)
    return path
