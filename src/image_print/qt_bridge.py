"""Qt print bridge: send centered images into OS spooler via QPrinter."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from PIL import Image
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QMarginsF, QRectF
from PySide6.QtGui import QImage, QPageLayout, QPainter
from PySide6.QtPrintSupport import QPrinter
from PySide6.QtWidgets import QApplication

from .controller import PrintJobController
from .errors import PrintJobSubmissionError
from .job_options import ImagePrintOptions, PrintJobResult
from .layout import DrawRect, PrintableArea
from .page_range import PageRange, PageRangeKind, normalize_page_range_kind

logger = logging.getLogger(__name__)

_APP_INSTANCE = None


def ensure_qapplication() -> None:
    global _APP_INSTANCE
    app = QApplication.instance()
    if app is None:
        _APP_INSTANCE = QApplication([])
    else:
        _APP_INSTANCE = app


def to_qimage(image: Any) -> QImage:
    if isinstance(image, QImage):
        return image
    if isinstance(image, Image.Image):
        # .copy() detaches from the ImageQt buffer so the QImage outlives it.
        return ImageQt(image.convert("RGBA")).copy()
    raise TypeError(f"Unsupported image type: {type(image).__name__}")


def configure_printer(printer: QPrinter, options: ImagePrintOptions) -> None:
    """Apply output target, job settings, orientation and margins."""
    normalized = options.normalized()
    if normalized.output_pdf_path:
        printer.setOutputFormat(QPrinter.OutputFormat.PdfFormat)
        printer.setOutputFileName(normalized.output_pdf_path)
    elif normalized.printer_name:
        printer.setPrinterName(normalized.printer_name)

    printer.setDocName(normalized.job_name)
    printer.setResolution(normalized.dpi)
    printer.setCopyCount(normalized.copies)

    layout = printer.pageLayout()
    layout.setOrientation(
        QPageLayout.Orientation.Landscape
        if normalized.landscape
        else QPageLayout.Orientation.Portrait
    )
    printer.setPageLayout(layout)
    margin = normalized.margins_mm
    printer.setPageMargins(
        QMarginsF(margin, margin, margin, margin),
        QPageLayout.Unit.Millimeter,
    )


def page_range_from_printer(printer: QPrinter) -> PageRange:
    """Translate the range picked in a print dialog; selection prints all pages."""
    mode = printer.printRange()
    if mode == QPrinter.PrintRange.CurrentPage:
        return PageRange.current_page()
    if mode == QPrinter.PrintRange.PageRange:
        return PageRange.some_pages(printer.fromPage(), printer.toPage())
    return PageRange.all_pages()


def printable_area(printer: QPrinter, image_dpi: int) -> PrintableArea:
    """Printable area expressed in image pixels at ``image_dpi``."""
    rect = printer.pageRect(QPrinter.Unit.Point)
    factor = float(image_dpi) / 72.0
    return PrintableArea(rect.width() * factor, rect.height() * factor)


def render_images(
    printer: QPrinter,
    controller: PrintJobController,
    page_range: PageRange | None,
    options: ImagePrintOptions,
) -> PrintJobResult:
    """
    Run a print job on an already configured printer.

    The painter is opened lazily on the first page, so a rejected range or
    an empty job leaves the printer untouched.
    """
    normalized = options.normalized()
    device_scale = printer.resolution() / float(normalized.image_dpi)
    painter = QPainter()

    def _draw(image: Any, rect: DrawRect) -> None:
        if painter.isActive():
            if not printer.newPage():
                raise PrintJobSubmissionError("Printer refused a new page.")
        elif not painter.begin(printer):
            raise PrintJobSubmissionError(
                f"Cannot start printer context: {normalized.printer_name or 'PDF output'}"
            )
        target = QRectF(
            rect.x * device_scale,
            rect.y * device_scale,
            rect.width * device_scale,
            rect.height * device_scale,
        )
        painter.drawImage(target, to_qimage(image))

    try:
        pages = controller.run_job(
            page_range,
            _draw,
            lambda: printable_area(printer, normalized.image_dpi),
        )
    finally:
        if painter.isActive():
            painter.end()

    route = "qt->pdf" if normalized.output_pdf_path else "qt->spooler"
    if normalized.output_pdf_path:
        msg = f"Printed {pages} page(s) to {normalized.output_pdf_path}"
    else:
        msg = f"Submitted {pages} page(s) to printer."
    logger.info("%s (%s)", msg, route)
    return PrintJobResult(success=True, route=route, message=msg, pages=pages)


def print_images(
    images: Sequence[Any],
    page_range: PageRange | None = None,
    options: ImagePrintOptions | None = None,
    current_page: int = 1,
) -> PrintJobResult:
    """Print images one per page without showing a dialog."""
    normalized = (options or ImagePrintOptions()).normalized()
    ensure_qapplication()

    printer = QPrinter(QPrinter.PrinterMode.HighResolution)
    configure_printer(printer, normalized)
    controller = PrintJobController(images, normalized.scaling_policy)
    kind = normalize_page_range_kind(page_range.kind if page_range else None)
    if kind is PageRangeKind.CURRENT_PAGE:
        controller.current_page = current_page
    return render_images(printer, controller, page_range, normalized)
