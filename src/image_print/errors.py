"""Printing subsystem exceptions."""

from __future__ import annotations

from typing import Optional


class PrintingError(RuntimeError):
    """Base error for printing subsystem."""


class PageRangeError(PrintingError):
    """Raised when a requested page range does not fit the image count."""

    def __init__(self, message: str, kind: str = "invalid_bounds"):
        super().__init__(message)
        self.kind = kind


class JobError(PrintingError):
    """Base error for a print job that could not run to completion."""


class InvalidRangeError(JobError):
    """Raised before any page is rendered when the page range is rejected."""

    def __init__(self, range_error: PageRangeError):
        super().__init__(f"Invalid page range: {range_error}")
        self.range_error = range_error


class RenderFailureError(JobError):
    """Raised when a page could not be placed or drawn; the job stops."""

    def __init__(self, message: str, page_number: Optional[int] = None):
        super().__init__(message)
        self.page_number = page_number


class PrintJobSubmissionError(PrintingError):
    """Raised when the host printer cannot accept the job."""
