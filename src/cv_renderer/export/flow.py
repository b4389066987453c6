"""Vertical cursor over a Document, breaking pages when content would overflow."""

from __future__ import annotations

import logging
from collections.abc import Callable

from cv_renderer.export.document import Document

logger = logging.getLogger(__name__)


class PageFlow:
    """Tracks the write position on the current page.

    ``on_new_page`` runs after every page break (not for the first page)
    with the cursor at the top margin; it is where the running header is
    drawn and it may advance the cursor.
    """

    def __init__(
        self,
        document: Document,
        on_new_page: Callable[["PageFlow"], None] | None = None,
    ):
        self.document = document
        self.on_new_page = on_new_page
        if not document.pages:
            document.add_page()
        self.y_pos = document.margins.top

    @property
    def page_number(self) -> int:
        return self.document.current_page_index + 1

    @property
    def bottom_limit(self) -> float:
        return self.document.bottom_limit

    @property
    def remaining(self) -> float:
        return self.bottom_limit - self.y_pos

    def fits(self, height: float) -> bool:
        return self.y_pos + height <= self.bottom_limit

    def ensure_space(self, height: float) -> bool:
        """Start a new page unless height fits below the cursor.

        Returns True when a page break happened.
        """
        if self.fits(height):
            return False
        logger.debug(
            "Page break on page %d at y=%.1f (needed %.1f mm)",
            self.page_number,
            self.y_pos,
            height,
        )
        self.new_page()
        return True

    def new_page(self) -> None:
        self.document.add_page()
        self.y_pos = self.document.margins.top
        if self.on_new_page is not None:
            self.on_new_page(self)

    def advance(self, height: float) -> None:
        self.y_pos += height
