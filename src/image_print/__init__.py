"""Centered image printing: page geometry, page ranges and job control.

The Qt host glue lives in ``image_print.qt_bridge`` and
``image_print.print_dialog`` and is imported on demand.
"""

from .controller import PlacedPage, PrintJobController
from .errors import (
    InvalidRangeError,
    JobError,
    PageRangeError,
    PrintJobSubmissionError,
    PrintingError,
    RenderFailureError,
)
from .job_options import ImagePrintOptions, PrintJobResult
from .layout import DrawRect, PrintableArea, ScalingPolicy, compute_draw_rect
from .page_range import PageRange, PageRangeKind, PaginationState, resolve_page_range

__all__ = [
    "PrintJobController",
    "PlacedPage",
    "ImagePrintOptions",
    "PrintJobResult",
    "DrawRect",
    "PrintableArea",
    "ScalingPolicy",
    "compute_draw_rect",
    "PageRange",
    "PageRangeKind",
    "PaginationState",
    "resolve_page_range",
    "PrintingError",
    "PageRangeError",
    "JobError",
    "InvalidRangeError",
    "RenderFailureError",
    "PrintJobSubmissionError",
]
