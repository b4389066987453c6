"""Format profiles: density, spacing and per-section inclusion rules.

Three profiles exist: ``full`` (everything), ``resume`` (condensed, about
two pages) and ``summary`` (one page). Every profile must define a rule for
every section in SECTION_ORDER.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cv_renderer.export.document import Margins

SECTION_ORDER: tuple[str, ...] = (
    "header",
    "summary",
    "experience",
    "education",
    "skills",
    "certifications",
    "leadership",
    "awards",
    "publications",
    "languages",
    "projects",
    "interests",
)


class SectionMode(str, Enum):
    FULL = "full"
    COMPACT = "compact"
    COLUMNS = "columns"
    MERGED = "merged"  # drawn inside another section's column block
    SKIP = "skip"


class FooterLink(str, Enum):
    NONE = "none"
    FIRST_PAGE = "first_page"
    LAST_PAGE = "last_page"


@dataclass(frozen=True)
class SectionRule:
    mode: SectionMode = SectionMode.FULL
    limit: int | None = None
    highlights: int | None = None
    lead_highlights: int | None = None
    min_remaining: float = 0.0
    details: bool = False

    @property
    def included(self) -> bool:
        return self.mode not in (SectionMode.SKIP, SectionMode.MERGED)

    def take(self, items: list) -> list:
        return list(items) if self.limit is None else list(items)[: self.limit]


@dataclass(frozen=True)
class FontSizes:
    """Font sizes in points."""

    name: float
    title: float
    contact: float
    section: float
    entry_title: float
    entry_subtitle: float
    body: float
    bullet: float
    small: float
    footer: float


@dataclass(frozen=True)
class FormatProfile:
    name: str
    label: str
    description: str
    fonts: FontSizes
    margins: Margins
    section_spacing: float
    bullet_gap: float
    header_height: float
    line_spacing: float
    entry_gap: float
    footer_link: FooterLink
    rules: dict[str, SectionRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [s for s in SECTION_ORDER if s not in self.rules]
        if missing:
            raise ValueError(f"Profile {self.name!r} has no rule for sections: {', '.join(missing)}")
        unknown = [s for s in self.rules if s not in SECTION_ORDER]
        if unknown:
            raise ValueError(f"Profile {self.name!r} has rules for unknown sections: {', '.join(unknown)}")

    def rule(self, section: str) -> SectionRule:
        return self.rules[section]

    def line_height(self, font_size: float) -> float:
        """Line pitch in mm for a font size in points."""
        return font_size * 25.4 / 72 * self.line_spacing


_S = SectionMode

FULL = FormatProfile(
    name="full",
    label="CV",
    description="Complete CV with every entry in every section",
    fonts=FontSizes(
        name=22, title=14, contact=10, section=12, entry_title=11,
        entry_subtitle=10, body=10, bullet=9, small=9, footer=9,
    ),
    margins=Margins(top=20, bottom=20, left=20, right=20),
    section_spacing=6.0,
    bullet_gap=1.5,
    header_height=9.0,
    line_spacing=1.35,
    entry_gap=4.0,
    footer_link=FooterLink.NONE,
    rules={
        "header": SectionRule(details=True),
        "summary": SectionRule(details=True),
        "experience": SectionRule(),
        "education": SectionRule(details=True),
        "skills": SectionRule(_S.COLUMNS),
        "certifications": SectionRule(details=True),
        "leadership": SectionRule(details=True),
        "awards": SectionRule(details=True),
        "publications": SectionRule(details=True),
        "languages": SectionRule(_S.COLUMNS),
        "projects": SectionRule(limit=3, min_remaining=50.0),
        "interests": SectionRule(min_remaining=30.0),
    },
)

RESUME = FormatProfile(
    name="resume",
    label="Resume",
    description="Condensed resume of about two pages",
    fonts=FontSizes(
        name=20, title=12, contact=9, section=11, entry_title=10.5,
        entry_subtitle=9.5, body=9.5, bullet=9, small=8.5, footer=8,
    ),
    margins=Margins(top=15, bottom=18, left=18, right=18),
    section_spacing=4.0,
    bullet_gap=1.0,
    header_height=7.5,
    line_spacing=1.25,
    entry_gap=3.0,
    footer_link=FooterLink.LAST_PAGE,
    rules={
        "header": SectionRule(),
        "summary": SectionRule(_S.COMPACT, limit=2),
        "experience": SectionRule(limit=3, highlights=3),
        "education": SectionRule(limit=2),
        "skills": SectionRule(_S.COLUMNS),
        "certifications": SectionRule(limit=5),
        "leadership": SectionRule(limit=2, highlights=2),
        "awards": SectionRule(limit=4),
        "publications": SectionRule(limit=1),
        "languages": SectionRule(_S.COLUMNS),
        "projects": SectionRule(_S.SKIP),
        "interests": SectionRule(_S.SKIP),
    },
)

SUMMARY = FormatProfile(
    name="summary",
    label="Summary",
    description="Single-page summary",
    fonts=FontSizes(
        name=18, title=11, contact=8.5, section=10, entry_title=9.5,
        entry_subtitle=9, body=9, bullet=8.5, small=8, footer=7.5,
    ),
    margins=Margins(top=12, bottom=15, left=15, right=15),
    section_spacing=2.5,
    bullet_gap=0.6,
    header_height=6.0,
    line_spacing=1.2,
    entry_gap=1.5,
    footer_link=FooterLink.FIRST_PAGE,
    rules={
        "header": SectionRule(),
        "summary": SectionRule(_S.COMPACT, limit=1),
        "experience": SectionRule(limit=3, highlights=1, lead_highlights=3),
        "education": SectionRule(_S.COMPACT, limit=3),
        "skills": SectionRule(_S.COLUMNS, limit=4),
        "certifications": SectionRule(_S.SKIP),
        "leadership": SectionRule(_S.SKIP),
        "awards": SectionRule(_S.MERGED, limit=3),
        "publications": SectionRule(_S.SKIP),
        "languages": SectionRule(_S.COLUMNS),
        "projects": SectionRule(_S.SKIP),
        "interests": SectionRule(_S.SKIP),
    },
)

PROFILES: dict[str, FormatProfile] = {p.name: p for p in (FULL, RESUME, SUMMARY)}


def get_profile(name: str) -> FormatProfile:
    """Look up a profile by format keyword."""
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown format {name!r}; expected one of: {', '.join(PROFILES)}"
        ) from None
