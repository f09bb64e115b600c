"""Print dialog front-end: pick a range, then print one image per page."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from PySide6.QtPrintSupport import QAbstractPrintDialog, QPrintDialog, QPrinter
from PySide6.QtWidgets import QDialog, QMessageBox, QWidget

from .controller import PrintJobController
from .errors import InvalidRangeError
from .job_options import ImagePrintOptions, PrintJobResult
from .qt_bridge import (
    ensure_qapplication,
    configure_printer,
    page_range_from_printer,
    render_images,
)

logger = logging.getLogger(__name__)


class CenterImagePrinter:
    """
    Print images one per page, landscape, centered.

    Copies are handled by the dialog and the spooler.
    """

    def __init__(
        self,
        images: Sequence[Any],
        options: Optional[ImagePrintOptions] = None,
        parent: Optional[QWidget] = None,
    ):
        ensure_qapplication()
        self.options = (options or ImagePrintOptions()).normalized()
        self.parent = parent
        self.controller = PrintJobController(images, self.options.scaling_policy)
        self.printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        configure_printer(self.printer, self.options)

    def set_current_page(self, page: int) -> None:
        self.controller.current_page = page

    def _build_dialog(self) -> QPrintDialog:
        dialog = QPrintDialog(self.printer, self.parent)
        dialog.setWindowTitle("Print")
        dialog.setOption(QAbstractPrintDialog.PrintDialogOption.PrintCurrentPage, True)
        dialog.setOption(QAbstractPrintDialog.PrintDialogOption.PrintPageRange, True)
        if self.controller.image_count:
            dialog.setMinMax(1, self.controller.image_count)
        return dialog

    def print(self) -> Optional[PrintJobResult]:
        """Show the print dialog; returns None when cancelled or the range is rejected."""
        dialog = self._build_dialog()
        if dialog.exec() != QDialog.DialogCode.Accepted:
            logger.debug("Print dialog cancelled")
            return None

        page_range = page_range_from_printer(self.printer)
        try:
            return render_images(self.printer, self.controller, page_range, self.options)
        except InvalidRangeError:
            QMessageBox.warning(
                self.parent,
                "Print",
                "The page range is invalid, please set it again.",
            )
            return None
