"""Compose a CV record into a paginated Document for one format profile.

Layout is a single greedy pass over SECTION_ORDER: every block is measured,
space is reserved, then it is drawn; nothing already placed is moved. Page
footers (numbers or the full-version link) are stamped once all pages exist.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cv_renderer.export.blocks import (
    ASCENT,
    BULLET_INDENT,
    PT_TO_MM,
    BlockRenderer,
    BulletParagraph,
    EntryHeading,
    PlainParagraph,
    SectionHeader,
    TwoColumnSkillBlock,
)
from cv_renderer.export.document import (
    ACCENT,
    DARK_GRAY,
    GRAY,
    LIGHT_GRAY,
    Color,
    Document,
    DocumentMetadata,
    TextOp,
)
from cv_renderer.export.flow import PageFlow
from cv_renderer.export.profiles import (
    SECTION_ORDER,
    FooterLink,
    FormatProfile,
    SectionMode,
    SectionRule,
)
from cv_renderer.export.text_layout import TextMeasurer
from cv_renderer.models.cv import CVData, Experience, Highlight
from cv_renderer.models.markup import MarkedText, mark_metrics
from cv_renderer.parsers.text_sanitizer import sanitize
from cv_renderer.utils.dates import format_date, format_date_range

logger = logging.getLogger(__name__)

SECTION_TITLES = {
    "summary": "Professional Summary",
    "experience": "Professional Experience",
    "education": "Education",
    "skills": "Technical Skills",
    "certifications": "Certifications & Training",
    "leadership": "Leadership & Activities",
    "awards": "Awards & Honors",
    "publications": "Publications",
    "languages": "Languages",
    "projects": "Selected Projects",
    "interests": "Interests",
}

CREATOR = "cv-renderer"


@dataclass(frozen=True)
class ExperienceEntry:
    experience: Experience
    highlights: tuple[Highlight, ...]


def select_experience(experiences: Sequence[Experience], rule: SectionRule) -> list[ExperienceEntry]:
    """Apply the entry limit and per-entry highlight limits of a rule.

    The first (most recent) entry uses ``lead_highlights`` when set.
    """
    selected: list[ExperienceEntry] = []
    for index, exp in enumerate(rule.take(list(experiences))):
        limit = rule.highlights
        if index == 0 and rule.lead_highlights is not None:
            limit = rule.lead_highlights
        highlights = exp.highlights if limit is None else exp.highlights[:limit]
        selected.append(ExperienceEntry(exp, tuple(highlights)))
    return selected


def document_filename(cv: CVData, profile: FormatProfile, extension: str = "pdf") -> str:
    """``<FirstName>_<LastName>_<Label>.<ext>``, using the first given and family name."""
    first = sanitize(cv.personal.name.first).split(" ")[0]
    last = sanitize(cv.personal.name.last).split(" ")[0]
    return f"{first}_{last}_{profile.label}.{extension}"


class DocumentComposer:
    """One render session: builds a Document once, then is spent."""

    def __init__(
        self,
        cv: CVData,
        profile: FormatProfile,
        measurer: TextMeasurer,
        *,
        full_version_url: str | None = None,
        repair_spacing: bool = True,
    ):
        self.cv = cv
        self.profile = profile
        self.measurer = measurer
        self.full_version_url = full_version_url
        self.repair_spacing = repair_spacing

        self.document = Document(margins=profile.margins)
        self.flow = PageFlow(self.document, on_new_page=self._running_header)
        self.blocks = BlockRenderer(self.flow, measurer, profile)

        self.rendered_sections: list[str] = []
        self.omitted_sections: list[str] = []
        self._composed = False
        self._truncated = False

    def clean(self, text: str | int | None) -> str:
        if text is None:
            return ""
        return sanitize(str(text), repair_spacing=self.repair_spacing)

    def compose(self) -> Document:
        if self._composed:
            raise RuntimeError("DocumentComposer instances render a single document")
        self._composed = True

        for section in SECTION_ORDER:
            rule = self.profile.rule(section)
            if not rule.included:
                if rule.mode is SectionMode.SKIP:
                    self.omitted_sections.append(section)
                continue
            if self._truncated or (rule.min_remaining and self.flow.remaining < rule.min_remaining):
                if not self._truncated:
                    logger.info(
                        "Omitting %s and later sections: %.1f mm left on page %d",
                        section,
                        self.flow.remaining,
                        self.flow.page_number,
                    )
                self._truncated = True
                self.omitted_sections.append(section)
                continue

            getattr(self, f"_render_{section}")(rule)
            self.rendered_sections.append(section)

        self._finalize()
        return self.document

    # Header

    def _contact_parts(self) -> list[str]:
        personal = self.cv.personal
        parts = [personal.location, personal.contact.phone, personal.contact.email]
        return [self.clean(p) for p in parts if p]

    def _link_parts(self) -> list[str]:
        contact = self.cv.personal.contact
        links = [contact.website, contact.linkedin, contact.github, contact.orcid]
        return [_display_url(self.clean(u)) for u in links if u]

    def _render_header(self, rule: SectionRule) -> None:
        fonts = self.profile.fonts
        personal = self.cv.personal
        name = self.clean(personal.name.display)

        self.blocks.paragraph(
            PlainParagraph(name, fonts.name, line_height=fonts.name * PT_TO_MM * 1.25, style="B")
        )
        if personal.title:
            self.blocks.paragraph(PlainParagraph(self.clean(personal.title), fonts.title, color=ACCENT))
        contact = " | ".join(self._contact_parts())
        if contact:
            self.blocks.paragraph(PlainParagraph(contact, fonts.contact, color=GRAY))
        if rule.details:
            links = " | ".join(self._link_parts())
            if links:
                self.blocks.paragraph(PlainParagraph(links, fonts.small, color=GRAY))

        self._rule_line()

    def _running_header(self, flow: PageFlow) -> None:
        fonts = self.profile.fonts
        personal = self.cv.personal
        left = self.document.margins.left

        identity = self.clean(personal.name.display)
        if personal.title:
            identity = f"{identity} | {self.clean(personal.title)}"
        baseline = flow.y_pos + fonts.contact * PT_TO_MM * ASCENT
        self.document.text(left, baseline, identity, fonts.contact, "B", DARK_GRAY)
        flow.advance(self.profile.line_height(fonts.contact))

        contact_info = self.cv.personal.contact
        contact = " | ".join(self.clean(p) for p in (contact_info.phone, contact_info.email) if p)
        if contact:
            baseline = flow.y_pos + fonts.small * PT_TO_MM * ASCENT
            self.document.text(left, baseline, contact, fonts.small, "", GRAY)
            flow.advance(self.profile.line_height(fonts.small))

        self._rule_line()

    def _rule_line(self) -> None:
        margins = self.document.margins
        y = self.flow.y_pos + 1.0
        self.document.line(margins.left, y, self.document.width - margins.right, y, LIGHT_GRAY, 0.3)
        self.flow.advance(1.0 + self.profile.section_spacing)

    # Sections

    def _section(self, name: str, title: str | None = None) -> None:
        self.blocks.section_header(SectionHeader(title or SECTION_TITLES[name]))

    def _end_section(self) -> None:
        self.flow.advance(self.profile.section_spacing)

    def _bullet(self, text: str | MarkedText, size: float | None = None) -> None:
        self.blocks.bullet(BulletParagraph(text, size))

    def _note(self, text: str, indent: float = BULLET_INDENT) -> None:
        self.blocks.paragraph(
            PlainParagraph(text, self.profile.fonts.small, color=GRAY, indent=indent)
        )

    def _render_summary(self, rule: SectionRule) -> None:
        summary = self.cv.personal.summary
        self._section("summary")
        for paragraph in rule.take(summary.paragraphs()):
            self.blocks.paragraph(PlainParagraph(self.clean(paragraph)))
            self.flow.advance(self.profile.bullet_gap)
        if rule.details:
            for strength in summary.strengths:
                self._bullet(self.clean(strength))
        self._end_section()

    def _render_experience(self, rule: SectionRule) -> None:
        self._section("experience")
        entries = select_experience(self.cv.experience, rule)
        for i, entry in enumerate(entries):
            exp = entry.experience
            subtitle = " | ".join(self.clean(p) for p in (exp.company, exp.location) if p)
            end = None if exp.current else exp.end_date
            bullets = [BulletParagraph(self._marked(h)) for h in entry.highlights]
            self.blocks.entry_heading(
                EntryHeading(
                    title=self.clean(exp.title),
                    subtitle=subtitle,
                    dates=format_date_range(exp.start_date, end),
                    keep_with=self._first_height(bullets),
                )
            )
            for bullet in bullets:
                self.blocks.bullet(bullet)
            if i < len(entries) - 1:
                self.flow.advance(self.profile.entry_gap)
        self._end_section()

    def _first_height(self, bullets: list[BulletParagraph]) -> float | None:
        return self.blocks.bullet_height(bullets[0]) if bullets else None

    def _marked(self, highlight: Highlight) -> MarkedText:
        metrics = {
            key: self.clean(value) if isinstance(value, str) else value
            for key, value in highlight.metrics.items()
        }
        return mark_metrics(self.clean(highlight.text), metrics)

    def _render_education(self, rule: SectionRule) -> None:
        self._section("education")
        for edu in rule.take(self.cv.education):
            dates = format_date_range(
                edu.start_date, edu.end_date, year_only=True, expected_end=edu.expected_end_date
            )
            if rule.mode is SectionMode.COMPACT:
                title = ", ".join(self.clean(p) for p in (edu.degree, edu.institution) if p)
                self.blocks.entry_heading(EntryHeading(title=title, dates=dates))
                continue

            detail = f"GPA: {self.clean(edu.gpa)}" if edu.gpa else ""
            self.blocks.entry_heading(
                EntryHeading(
                    title=self.clean(edu.degree),
                    subtitle=self.clean(edu.institution),
                    dates=dates,
                    detail=detail,
                )
            )
            if rule.details:
                if edu.coursework:
                    self._note(f"Coursework: {self.clean(edu.coursework)}", indent=0.0)
                if edu.achievement:
                    self._bullet(self.clean(edu.achievement))
            self.flow.advance(self.profile.entry_gap)
        self._end_section()

    def _render_skills(self, rule: SectionRule) -> None:
        self._section("skills")
        groups = rule.take(self.cv.skill_groups())
        self.blocks.skill_columns(
            [
                TwoColumnSkillBlock(self.clean(g.title), tuple(self.clean(i) for i in g.items))
                for g in groups
            ]
        )
        self._end_section()

    def _render_certifications(self, rule: SectionRule) -> None:
        self._section("certifications")
        for cert in rule.take(self.cv.certifications):
            text = self.clean(cert.name)
            if cert.issuer:
                text = f"{text} - {self.clean(cert.issuer)}"
            if cert.date:
                text = f"{text} ({format_date(cert.date)})"
            self._bullet(text)
            if rule.details and cert.description:
                self._note(self.clean(cert.description))
        self._end_section()

    def _render_leadership(self, rule: SectionRule) -> None:
        self._section("leadership")
        for item in rule.take(self.cv.leadership):
            subtitle = " | ".join(self.clean(p) for p in (item.organization, item.location) if p)
            highlights = item.highlights if rule.highlights is None else item.highlights[: rule.highlights]
            bullets = [BulletParagraph(self.clean(text)) for text in highlights]
            self.blocks.entry_heading(
                EntryHeading(
                    title=self.clean(item.role),
                    subtitle=subtitle,
                    dates=self._period(item.period),
                    keep_with=self._first_height(bullets),
                )
            )
            for bullet in bullets:
                self.blocks.bullet(bullet)
            if rule.details and item.description:
                self._note(self.clean(item.description))
            self.flow.advance(self.profile.entry_gap)
        self._end_section()

    def _period(self, period: str) -> str:
        parts = self.clean(period).split(" - ")
        return " - ".join(format_date(p) for p in parts)

    def _render_awards(self, rule: SectionRule) -> None:
        self._section("awards")
        for award in rule.take(self.cv.awards):
            text = self.clean(award.title)
            if award.organization:
                text = f"{text} - {self.clean(award.organization)}"
            if award.year:
                text = f"{text} ({award.year})"
            self._bullet(text)
            if rule.details and award.description:
                self._note(self.clean(award.description))
        self._end_section()

    def _render_publications(self, rule: SectionRule) -> None:
        self._section("publications")
        for pub in rule.take(self.cv.publications):
            text = self.clean(pub.title)
            venue = pub.journal or pub.institution
            if venue:
                text = f"{text}. {self.clean(venue)}"
            if pub.year:
                text = f"{text} ({pub.year})"
            self._bullet(text)
            if rule.details and pub.doi:
                self._note(f"DOI: {self.clean(pub.doi)}")
        self._end_section()

    def _render_languages(self, rule: SectionRule) -> None:
        blocks = []
        for lang in rule.take(self.cv.languages):
            items = [self.clean(lang.level)] if lang.level else []
            items.extend(self.clean(c.name) for c in lang.certifications)
            blocks.append(TwoColumnSkillBlock(self.clean(lang.name), tuple(items), inline=False))

        awards_rule = self.profile.rule("awards")
        title = None
        if awards_rule.mode is SectionMode.MERGED and self.cv.awards:
            title = f"{SECTION_TITLES['languages']} & Awards"
            for award in awards_rule.take(self.cv.awards):
                detail = ", ".join(
                    str(p) for p in (self.clean(award.organization), award.year) if p
                )
                blocks.append(
                    TwoColumnSkillBlock(self.clean(award.title), (detail,) if detail else (), inline=False)
                )

        self._section("languages", title)
        self.blocks.skill_columns(blocks)
        self._end_section()

    def _render_projects(self, rule: SectionRule) -> None:
        self._section("projects")
        for project in rule.take(self.cv.projects):
            text = self.clean(project.name)
            if project.year:
                text = f"{text} ({project.year})"
            if project.description:
                text = f"{text}: {self.clean(project.description)}"
            self._bullet(text)
        self._end_section()

    def _render_interests(self, rule: SectionRule) -> None:
        interests = self.cv.interests
        self._section("interests")
        if interests.professional:
            self.blocks.paragraph(
                PlainParagraph("Professional: " + ", ".join(self.clean(i) for i in interests.professional))
            )
        if interests.personal:
            self.blocks.paragraph(
                PlainParagraph("Personal: " + ", ".join(self.clean(i) for i in interests.personal))
            )
        if interests.philosophy:
            self.flow.advance(self.profile.bullet_gap)
            self.blocks.paragraph(PlainParagraph(self.clean(interests.philosophy), style="I", color=GRAY))
        self._end_section()

    # Finalization

    def _footer_link_page(self) -> int | None:
        mode = self.profile.footer_link
        if mode is FooterLink.FIRST_PAGE:
            return 1
        if mode is FooterLink.LAST_PAGE:
            return self.document.page_count
        return None

    def _finalize(self) -> None:
        document = self.document
        size = self.profile.fonts.footer
        baseline = document.height - document.margins.bottom / 2
        total = document.page_count
        link_page = self._footer_link_page()

        for page in document.pages:
            if page.number == link_page:
                url = self.full_version_url
                text = f"Full CV online: {url}" if url else "Full CV available on request"
                width = self.measurer.width(text, size)
                x = (document.width - width) / 2
                page.stamp(_text_op(x, baseline, text, size, ACCENT, url))
            else:
                text = f"Page {page.number} / {total}"
                width = self.measurer.width(text, size)
                page.stamp(_text_op((document.width - width) / 2, baseline, text, size, GRAY))

        document.metadata = self._metadata()
        logger.debug(
            "Composed %s document: %d pages, sections=%s",
            self.profile.name,
            total,
            ",".join(self.rendered_sections),
        )

    def _metadata(self) -> DocumentMetadata:
        personal = self.cv.personal
        name = self.clean(personal.name.display)
        keywords = [self.clean(personal.title)] if personal.title else []
        keywords.extend(self.clean(g.title) for g in self.cv.skill_groups()[:3])
        keywords.append(self.profile.label)
        return DocumentMetadata(
            title=f"{name} - {self.profile.label}",
            subject=f"Curriculum Vitae ({self.profile.description})",
            author=name,
            keywords=", ".join(keywords),
            creator=CREATOR,
        )


def _text_op(x: float, y: float, text: str, size: float, color: Color, link: str | None = None) -> TextOp:
    return TextOp(x, y, text, size, "", color, link)


def _display_url(url: str) -> str:
    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            url = url[len(prefix) :]
    return url.removeprefix("www.").rstrip("/")
