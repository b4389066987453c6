"""Backend-neutral page model: a document is a list of pages of draw operations.

Coordinates are millimetres from the top-left corner of an A4 portrait
page. Text operations carry their baseline y, matching fpdf2's ``text()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
DARK_GRAY: Color = (50, 50, 50)
GRAY: Color = (100, 100, 100)
LIGHT_GRAY: Color = (200, 200, 200)
ACCENT: Color = (0, 123, 255)


@dataclass(frozen=True)
class Margins:
    top: float = 20.0
    bottom: float = 20.0
    left: float = 20.0
    right: float = 20.0


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    size: float
    style: str = ""
    color: Color = BLACK
    link: str | None = None


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = BLACK
    width: float = 0.5


@dataclass(frozen=True)
class MarkerOp:
    """Filled circle centred on (x, y)."""

    x: float
    y: float
    radius: float
    color: Color = BLACK


DrawOp = Union[TextOp, LineOp, MarkerOp]


@dataclass
class Page:
    """One page: body operations plus the footer stamped at finalization."""

    number: int
    ops: list[DrawOp] = field(default_factory=list)
    footer: list[DrawOp] = field(default_factory=list)

    def add(self, op: DrawOp) -> None:
        self.ops.append(op)

    def stamp(self, op: DrawOp) -> None:
        self.footer.append(op)

    def texts(self) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp)]

    def markers(self) -> list[MarkerOp]:
        return [op for op in self.ops if isinstance(op, MarkerOp)]

    def text_content(self) -> str:
        return " ".join(op.text for op in self.texts())


@dataclass
class DocumentMetadata:
    title: str = ""
    subject: str = ""
    author: str = ""
    keywords: str = ""
    creator: str = "cv-renderer"


@dataclass
class Document:
    """Ordered pages plus geometry. Pages are only ever appended."""

    margins: Margins = field(default_factory=Margins)
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    pages: list[Page] = field(default_factory=list)
    current_page_index: int = -1
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    @property
    def content_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margins.bottom

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Page:
        if self.current_page_index < 0:
            raise IndexError("Document has no pages")
        return self.pages[self.current_page_index]

    def add_page(self) -> Page:
        page = Page(number=len(self.pages) + 1)
        self.pages.append(page)
        self.current_page_index = len(self.pages) - 1
        return page

    def text(
        self,
        x: float,
        y: float,
        text: str,
        size: float,
        style: str = "",
        color: Color = BLACK,
        link: str | None = None,
    ) -> None:
        self.current_page.add(TextOp(x, y, text, size, style, color, link))

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color = BLACK, width: float = 0.5) -> None:
        self.current_page.add(LineOp(x1, y1, x2, y2, color, width))

    def marker(self, x: float, y: float, radius: float, color: Color = BLACK) -> None:
        self.current_page.add(MarkerOp(x, y, radius, color))
