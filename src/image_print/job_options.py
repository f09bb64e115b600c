"""Print job options and results shared by the Qt host glue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .layout import ScalingPolicy, normalize_scaling_policy


def _clamp_margin(value: float | int | None) -> float:
    try:
        margin = float(value or 0.0)
    except (TypeError, ValueError):
        margin = 0.0
    return max(0.0, margin)


@dataclass(slots=True)
class ImagePrintOptions:
    """User-selected print options."""

    printer_name: Optional[str] = None
    output_pdf_path: Optional[str] = None  # virtual printer target
    job_name: str = "image_print_job"
    copies: int = 1  # duplication is left to the spooler
    dpi: int = 300
    image_dpi: int = 96  # image pixels per inch when mapped onto paper
    landscape: bool = True
    margins_mm: float = 0.0
    scaling: str = "fit"  # fit | actual

    @property
    def scaling_policy(self) -> ScalingPolicy:
        return normalize_scaling_policy(self.scaling)

    def normalized(self) -> "ImagePrintOptions":
        """Return a normalized copy used by the printer bridge."""
        return ImagePrintOptions(
            printer_name=(self.printer_name or "").strip() or None,
            output_pdf_path=(self.output_pdf_path or "").strip() or None,
            job_name=(self.job_name or "image_print_job").strip(),
            copies=max(1, int(self.copies)),
            dpi=max(72, int(self.dpi)),
            image_dpi=max(1, int(self.image_dpi)),
            landscape=bool(self.landscape),
            margins_mm=_clamp_margin(self.margins_mm),
            scaling=normalize_scaling_policy(self.scaling).value,
        )


@dataclass(slots=True)
class PrintJobResult:
    """Submission result for a print job."""

    success: bool
    route: str
    message: str
    pages: int = 0
