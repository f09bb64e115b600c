"""Print job controller: one image per page, centered on the printable area."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterator, Sequence

from .errors import InvalidRangeError, PageRangeError, RenderFailureError
from .layout import DrawRect, PrintableArea, ScalingPolicy, compute_draw_rect, image_size
from .page_range import (
    PageRange,
    PaginationState,
    advance_page,
    has_next_page,
    resolve_page_range,
)

logger = logging.getLogger(__name__)

RenderPage = Callable[[Any, DrawRect], None]
GetPrintableArea = Callable[[], PrintableArea]


@dataclass(frozen=True, slots=True)
class PlacedPage:
    """An image and where to draw it on its page."""

    page_number: int
    image: Any
    rect: DrawRect


class PrintJobController:
    """
    Pagination driver over a fixed image sequence.

    The host either calls ``begin()`` and then ``render_next_page()`` once per
    page event until it returns False, iterates ``iter_pages()``, or hands
    both callbacks to ``run_job()``. Stopping early needs no cleanup.
    """

    def __init__(
        self,
        images: Sequence[Any],
        policy: ScalingPolicy = ScalingPolicy.AUTO_FIT,
    ):
        self._images = tuple(images)
        self.policy = policy
        self._state = PaginationState.reset(len(self._images))
        self._pending = False

    @property
    def image_count(self) -> int:
        return len(self._images)

    @property
    def state(self) -> PaginationState:
        """Snapshot of the pagination cursor."""
        return replace(self._state)

    @property
    def current_page(self) -> int:
        return self._state.current

    @current_page.setter
    def current_page(self, page: int) -> None:
        """
        Move the cursor used by CURRENT_PAGE jobs; abandons a pending job.

        The page is checked when the next job begins.
        """
        page = int(page)
        self._pending = False
        self._state = PaginationState(current=page, from_page=1, to_page=self.image_count)

    @property
    def has_pending_page(self) -> bool:
        return self._pending

    def begin(self, page_range: PageRange | None) -> PaginationState:
        """Start a new job; raises InvalidRangeError before anything renders."""
        try:
            state = resolve_page_range(page_range, self.image_count, self._state.current)
        except PageRangeError as exc:
            logger.warning("Rejected page range %s: %s", page_range, exc)
            raise InvalidRangeError(exc) from exc

        self._state = state
        self._pending = not state.is_empty
        logger.info(
            "Print job started: %s page(s), %s-%s of %s",
            state.page_count,
            state.from_page,
            state.to_page,
            self.image_count,
        )
        return replace(state)

    def render_next_page(self, area: PrintableArea, render_page: RenderPage) -> bool:
        """
        Place and render the current page.

        Returns True when more pages follow, False once the job is complete
        (or when no job is pending).
        """
        if not self._pending:
            return False
        page = self._place_current(area)
        try:
            render_page(page.image, page.rect)
        except Exception as exc:
            self._fail(page.page_number, exc)
            raise RenderFailureError(
                f"Failed to render page {page.page_number}: {exc}",
                page_number=page.page_number,
            ) from exc
        return self._finish_page()

    def iter_pages(
        self,
        page_range: PageRange | None,
        get_printable_area: GetPrintableArea,
    ) -> Iterator[PlacedPage]:
        """Begin a job and return a finite iterator over its placed pages."""
        self.begin(page_range)
        return self._iter_pending(self._state, get_printable_area)

    def run_job(
        self,
        page_range: PageRange | None,
        render_page: RenderPage,
        get_printable_area: GetPrintableArea,
    ) -> int:
        """Render the whole range; returns the number of pages rendered."""
        self.begin(page_range)
        rendered = 0
        while self._pending:
            area = self._fetch_area(get_printable_area)
            self.render_next_page(area, render_page)
            rendered += 1
        logger.info("Print job complete: %s page(s) rendered", rendered)
        return rendered

    def _iter_pending(
        self,
        state: PaginationState,
        get_printable_area: GetPrintableArea,
    ) -> Iterator[PlacedPage]:
        # A later begin() replaces the state object and ends this iterator.
        while self._pending and self._state is state:
            area = self._fetch_area(get_printable_area)
            yield self._place_current(area)
            if self._state is not state:
                return
            self._finish_page()

    def _fetch_area(self, get_printable_area: GetPrintableArea) -> PrintableArea:
        page_number = self._state.current
        try:
            return get_printable_area()
        except Exception as exc:
            self._fail(page_number, exc)
            raise RenderFailureError(
                f"Printable area unavailable for page {page_number}: {exc}",
                page_number=page_number,
            ) from exc

    def _place_current(self, area: PrintableArea) -> PlacedPage:
        page_number = self._state.current
        try:
            image = self._images[page_number - 1]
            width, height = image_size(image)
            rect = compute_draw_rect(width, height, area.width, area.height, self.policy)
        except Exception as exc:
            self._fail(page_number, exc)
            raise RenderFailureError(
                f"Cannot place page {page_number}: {exc}",
                page_number=page_number,
            ) from exc
        logger.debug("Page %s placed at %s", page_number, rect.as_tuple())
        return PlacedPage(page_number=page_number, image=image, rect=rect)

    def _finish_page(self) -> bool:
        state = self._state
        if has_next_page(state.current, state.to_page):
            state.current = advance_page(state.current)
            return True
        self._pending = False
        return False

    def _fail(self, page_number: int, exc: Exception) -> None:
        self._pending = False
        logger.warning("Print job stopped at page %s: %s", page_number, exc)
