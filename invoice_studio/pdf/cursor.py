from __future__ import annotations

import logging
from typing import Callable, Optional, Set

from invoice_studio.pdf.commands import Command, Page, RenderedPageSet

logger = logging.getLogger(__name__)


class PageCursor:
    """Vertical write position over a growing list of pages.

    Owns the footer obligation: whenever a page is left (and once more at the
    end of the render) the footer stamp is drawn on it, at most once per page.
    """

    def __init__(
        self,
        page_width: float,
        page_height: float,
        margin: float,
        footer: Optional[Callable[["PageCursor"], None]] = None,
    ) -> None:
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.footer = footer
        self.output = RenderedPageSet(page_width, page_height, [Page(0)])
        self.page_index = 0
        self.y = margin
        self._stamped: Set[int] = set()

    @property
    def page(self) -> Page:
        return self.output.pages[self.page_index]

    @property
    def bottom(self) -> float:
        """Lowest y content may reach on a page."""
        return self.page_height - self.margin

    def emit(self, command: Command) -> None:
        self.page.commands.append(command)

    def advance(self, dy: float) -> float:
        self.y += dy
        return self.y

    def fits(self, required_height: float) -> bool:
        return self.y + required_height <= self.bottom

    def ensure_space(self, required_height: float, top_offset: float = 0.0) -> bool:
        """Break to a new page if `required_height` does not fit; True if a break happened."""
        if self.fits(required_height):
            return False
        self.new_page(top_offset)
        return True

    def new_page(self, top_offset: float = 0.0) -> None:
        self.stamp_footer()
        self.output.pages.append(Page(len(self.output.pages)))
        self.page_index += 1
        self.y = self.margin + top_offset
        logger.debug("Page break -> page %s", self.page_index + 1)

    def stamp_footer(self) -> None:
        if self.footer is None or self.page_index in self._stamped:
            return
        self._stamped.add(self.page_index)
        self.footer(self)

    def finish(self) -> RenderedPageSet:
        self.stamp_footer()
        return self.output
