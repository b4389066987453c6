"""Drawing primitives that consume the page flow.

The cursor always marks the top edge of the next block; text is placed on
baselines computed from it. Every block measures itself and reserves its
height with ``PageFlow.ensure_space`` before anything is drawn.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from cv_renderer.export.document import ACCENT, DARK_GRAY, GRAY, Color
from cv_renderer.export.flow import PageFlow
from cv_renderer.export.profiles import FormatProfile
from cv_renderer.export.text_layout import TextMeasurer, wrap_ranges, wrap_text
from cv_renderer.models.markup import BOLD, MarkedText

PT_TO_MM = 25.4 / 72
ASCENT = 0.78  # baseline offset below the line top, as a fraction of font size
MARKER_RAISE = 0.35  # marker centre above the baseline, as a fraction of font size
MARKER_RADIUS = 0.55
BULLET_INDENT = 4.0
BULLET_PADDING = 0.5
HEADER_CLEARANCE = 15.0
ACCENT_BAR_LENGTH = 50.0
ACCENT_BAR_OFFSET = 2.0
COLUMN_GUTTER = 8.0
DATE_GAP = 4.0

_STYLE_CODES = {BOLD: "B", "italic": "I"}


@dataclass(frozen=True)
class SectionHeader:
    title: str


@dataclass(frozen=True)
class BulletParagraph:
    text: Union[str, MarkedText]
    font_size: float | None = None
    color: Color = DARK_GRAY


@dataclass(frozen=True)
class PlainParagraph:
    text: str
    font_size: float | None = None
    line_height: float | None = None
    style: str = ""
    color: Color = DARK_GRAY
    indent: float = 0.0


@dataclass(frozen=True)
class EntryHeading:
    """Title with a right-aligned date, then an italic subtitle and a detail line.

    keep_with is the height of the block that follows, reserved together
    with the heading so the two start on the same page.
    """

    title: str
    subtitle: str = ""
    dates: str = ""
    detail: str = ""
    keep_with: float | None = None


@dataclass(frozen=True)
class TwoColumnSkillBlock:
    title: str
    items: tuple[str, ...] = ()
    inline: bool = True


Block = Union[SectionHeader, BulletParagraph, PlainParagraph, EntryHeading, TwoColumnSkillBlock]


@dataclass
class ColumnPlacement:
    column: int
    page: int
    top: float
    height: float


@dataclass
class ColumnLayout:
    """Column heights measured from the top of the last page the block group used."""

    left: float = 0.0
    right: float = 0.0
    placements: list[ColumnPlacement] = field(default_factory=list)


class BlockRenderer:
    def __init__(self, flow: PageFlow, measurer: TextMeasurer, profile: FormatProfile):
        self.flow = flow
        self.measurer = measurer
        self.profile = profile

    @property
    def document(self):
        return self.flow.document

    @property
    def left(self) -> float:
        return self.document.margins.left

    @property
    def right(self) -> float:
        return self.document.width - self.document.margins.right

    @property
    def content_width(self) -> float:
        return self.document.content_width

    def render(self, block: Block) -> float:
        """Draw one block at the cursor and return the height it consumed."""
        if isinstance(block, SectionHeader):
            return self.section_header(block)
        if isinstance(block, BulletParagraph):
            return self.bullet(block)
        if isinstance(block, PlainParagraph):
            return self.paragraph(block)
        if isinstance(block, EntryHeading):
            return self.entry_heading(block)
        if isinstance(block, TwoColumnSkillBlock):
            layout = self.skill_columns([block])
            return max(layout.left, layout.right)
        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    # Section header

    def section_header(self, block: SectionHeader) -> float:
        profile = self.profile
        size = profile.fonts.section
        self.flow.ensure_space(max(HEADER_CLEARANCE, profile.header_height))

        baseline = self.flow.y_pos + size * PT_TO_MM * ASCENT
        self.document.text(self.left, baseline, block.title.upper(), size, "B", ACCENT)
        bar_y = baseline + ACCENT_BAR_OFFSET
        self.document.line(self.left, bar_y, self.left + ACCENT_BAR_LENGTH, bar_y, ACCENT, 0.5)

        self.flow.advance(profile.header_height)
        return profile.header_height

    # Bullet paragraph

    def bullet_height(self, block: BulletParagraph) -> float:
        size = block.font_size or self.profile.fonts.bullet
        lines = self._wrap_marked(_marked(block.text), self.content_width - BULLET_INDENT, size)
        return self._bullet_height(len(lines), size)

    def _bullet_height(self, line_count: int, size: float) -> float:
        if not line_count:
            return 0.0
        return line_count * self.profile.line_height(size) + self.profile.bullet_gap + BULLET_PADDING

    def bullet(self, block: BulletParagraph) -> float:
        size = block.font_size or self.profile.fonts.bullet
        marked = _marked(block.text)
        lines = self._wrap_marked(marked, self.content_width - BULLET_INDENT, size)
        if not lines:
            return 0.0

        height = self._bullet_height(len(lines), size)
        self.flow.ensure_space(height)

        top = self.flow.y_pos
        first_baseline = top + size * PT_TO_MM * ASCENT
        self.document.marker(
            self.left + BULLET_INDENT / 2,
            first_baseline - size * PT_TO_MM * MARKER_RAISE,
            MARKER_RADIUS,
            block.color,
        )
        self._draw_lines(marked, lines, self.left + BULLET_INDENT, top, size, block.color)

        self.flow.advance(height)
        return height

    # Plain paragraph

    def paragraph(self, block: PlainParagraph) -> float:
        size = block.font_size or self.profile.fonts.body
        line_height = block.line_height or self.profile.line_height(size)
        lines = self._wrap(block.text, self.content_width - block.indent, size, block.style)
        if not lines:
            return 0.0

        height = len(lines) * line_height
        usable = self.flow.bottom_limit - self.document.margins.top
        if height <= usable:
            # Keep the paragraph together when it can fit on a page at all.
            self.flow.ensure_space(height)

        x = self.left + block.indent
        for line in lines:
            self.flow.ensure_space(line_height)
            baseline = self.flow.y_pos + size * PT_TO_MM * ASCENT
            self.document.text(x, baseline, line, size, block.style, block.color)
            self.flow.advance(line_height)
        return height

    # Entry heading

    def entry_heading(self, block: EntryHeading) -> float:
        fonts = self.profile.fonts
        date_width = self.measurer.width(block.dates, fonts.small) if block.dates else 0.0
        title_width = self.content_width - (date_width + DATE_GAP if block.dates else 0.0)
        title_lines = self._wrap(block.title, title_width, fonts.entry_title, "B")

        title_lh = self.profile.line_height(fonts.entry_title)
        subtitle_lh = self.profile.line_height(fonts.entry_subtitle)
        detail_lh = self.profile.line_height(fonts.small)
        height = (
            len(title_lines) * title_lh
            + (subtitle_lh if block.subtitle else 0.0)
            + (detail_lh if block.detail else 0.0)
            + BULLET_PADDING
        )
        self.flow.ensure_space(height + self._keep_with(block, height))

        y = self.flow.y_pos
        for i, line in enumerate(title_lines):
            baseline = y + fonts.entry_title * PT_TO_MM * ASCENT
            self.document.text(self.left, baseline, line, fonts.entry_title, "B", DARK_GRAY)
            if i == 0 and block.dates:
                self.document.text(self.right - date_width, baseline, block.dates, fonts.small, "", GRAY)
            y += title_lh
        if block.subtitle:
            baseline = y + fonts.entry_subtitle * PT_TO_MM * ASCENT
            self.document.text(self.left, baseline, block.subtitle, fonts.entry_subtitle, "I", GRAY)
            y += subtitle_lh
        if block.detail:
            baseline = y + fonts.small * PT_TO_MM * ASCENT
            self.document.text(self.left, baseline, block.detail, fonts.small, "", GRAY)

        self.flow.advance(height)
        return height

    def _keep_with(self, block: EntryHeading, height: float) -> float:
        line = self.profile.line_height(self.profile.fonts.bullet)
        follow = block.keep_with or line
        # A follower that cannot share a page with the heading keeps one line.
        if height + follow > self.flow.bottom_limit - self.document.margins.top:
            return line
        return follow

    # Two-column skill blocks

    @property
    def column_width(self) -> float:
        return (self.content_width - COLUMN_GUTTER) / 2

    def _skill_lines(self, block: TwoColumnSkillBlock) -> list[str]:
        size = self.profile.fonts.small
        if block.inline:
            return self._wrap(", ".join(block.items), self.column_width, size)
        lines: list[str] = []
        for item in block.items:
            lines.extend(self._wrap(item, self.column_width, size))
        return lines

    def skill_block_height(self, block: TwoColumnSkillBlock) -> float:
        fonts = self.profile.fonts
        lines = self._skill_lines(block)
        return (
            self.profile.line_height(fonts.body)
            + len(lines) * self.profile.line_height(fonts.small)
            + self.profile.bullet_gap
        )

    def skill_columns(self, blocks: Sequence[TwoColumnSkillBlock]) -> ColumnLayout:
        """Place each block in whichever column is currently shorter.

        On overflow a new page is started and both columns restart below
        its running header. The cursor ends below the taller column.
        """
        layout = ColumnLayout()
        if not blocks:
            return layout

        top = self.flow.y_pos
        columns = [top, top]
        for block in blocks:
            height = self.skill_block_height(block)
            column = 0 if columns[0] <= columns[1] else 1
            if columns[column] + height > self.flow.bottom_limit:
                self.flow.new_page()
                top = self.flow.y_pos
                columns = [top, top]
                column = 0

            self._draw_skill_block(block, column, columns[column])
            layout.placements.append(ColumnPlacement(column, self.flow.page_number, columns[column], height))
            columns[column] += height

        layout.left = columns[0] - top
        layout.right = columns[1] - top
        self.flow.y_pos = max(columns)
        return layout

    def _draw_skill_block(self, block: TwoColumnSkillBlock, column: int, top: float) -> None:
        fonts = self.profile.fonts
        x = self.left + column * (self.column_width + COLUMN_GUTTER)
        baseline = top + fonts.body * PT_TO_MM * ASCENT
        self.document.text(x, baseline, block.title, fonts.body, "B", DARK_GRAY)

        y = top + self.profile.line_height(fonts.body)
        small_lh = self.profile.line_height(fonts.small)
        for line in self._skill_lines(block):
            baseline = y + fonts.small * PT_TO_MM * ASCENT
            self.document.text(x, baseline, line, fonts.small, "", DARK_GRAY)
            y += small_lh

    # Helpers

    def _wrap(self, text: str, width: float, size: float, style: str = "") -> list[str]:
        return wrap_text(text, width, size, self.measurer, style)

    def _wrap_marked(self, marked: MarkedText, width: float, size: float) -> list[str]:
        """Wrap styled text, measuring each run at its own style."""

        def range_width(start: int, end: int) -> float:
            return sum(
                self.measurer.width(segment, size, _style_code(style))
                for segment, style in marked.runs(start, end)
            )

        return [marked.text[start:end] for start, end in wrap_ranges(marked.text, width, range_width)]

    def _draw_lines(
        self,
        marked: MarkedText,
        lines: Sequence[str],
        x: float,
        top: float,
        size: float,
        color: Color,
    ) -> None:
        line_height = self.profile.line_height(size)
        for i, runs in enumerate(marked.line_runs(lines)):
            baseline = top + i * line_height + size * PT_TO_MM * ASCENT
            cursor_x = x
            for segment, style in runs:
                code = _style_code(style)
                self.document.text(cursor_x, baseline, segment, size, code, color)
                cursor_x += self.measurer.width(segment, size, code)


def _marked(text: Union[str, MarkedText]) -> MarkedText:
    return text if isinstance(text, MarkedText) else MarkedText(text)


def _style_code(style: str | None) -> str:
    return _STYLE_CODES.get(style, "") if style else ""
