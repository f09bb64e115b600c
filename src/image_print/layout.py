"""Page geometry: where an image lands inside the printable area."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple


class ScalingPolicy(Enum):
    AUTO_FIT = "fit"
    NO_SCALE = "actual"


_SCALE_MODE_ALIASES = {
    "fit": ScalingPolicy.AUTO_FIT,
    "auto": ScalingPolicy.AUTO_FIT,
    "auto_fit": ScalingPolicy.AUTO_FIT,
    "actual": ScalingPolicy.NO_SCALE,
    "none": ScalingPolicy.NO_SCALE,
    "no_scale": ScalingPolicy.NO_SCALE,
}


@dataclass(frozen=True, slots=True)
class PrintableArea:
    """Margin-adjusted printable bounds of the current page."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class DrawRect:
    """Draw rectangle relative to the printable area's top-left corner."""

    x: float
    y: float
    width: float
    height: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


def normalize_scaling_policy(value: ScalingPolicy | str | None) -> ScalingPolicy:
    if isinstance(value, ScalingPolicy):
        return value
    mode = (value or "").strip().lower()
    return _SCALE_MODE_ALIASES.get(mode, ScalingPolicy.AUTO_FIT)


def image_size(image: Any) -> Tuple[float, float]:
    """
    Read (width, height) from an image handle.

    Pillow exposes plain attributes, QImage exposes zero-argument methods;
    both are accepted.
    """
    width = image.width
    height = image.height
    if callable(width):
        width = width()
    if callable(height):
        height = height()
    return float(width), float(height)


def compute_scale(
    image_width: float,
    image_height: float,
    area_width: float,
    area_height: float,
    policy: ScalingPolicy = ScalingPolicy.AUTO_FIT,
) -> float:
    """
    Return the scale factor for an image inside the area.

    AUTO_FIT starts at 1.0. A width overflow sets the width ratio; a height
    overflow keeps the larger of the current scale and the height ratio.
    With only the height overflowing the scale therefore stays 1.0, and
    either dimension may still overflow. A non-positive area dimension
    leaves the scale at 1.0.
    """
    if policy is not ScalingPolicy.AUTO_FIT:
        return 1.0
    if area_width <= 0 or area_height <= 0:
        return 1.0

    scale = 1.0
    if area_width - image_width < 0:
        scale = area_width / image_width
    if area_height - image_height < 0:
        scale = max(scale, area_height / image_height)
    return scale


def compute_draw_rect(
    image_width: float,
    image_height: float,
    area_width: float,
    area_height: float,
    policy: ScalingPolicy = ScalingPolicy.AUTO_FIT,
) -> DrawRect:
    """Return the centered draw rect (x, y, width, height) for one page."""
    iw = float(image_width)
    ih = float(image_height)
    if not (iw > 0 and ih > 0):
        raise ValueError(f"Image dimensions must be positive, got {iw}x{ih}.")
    aw = max(0.0, float(area_width))
    ah = max(0.0, float(area_height))

    scale = compute_scale(iw, ih, aw, ah, policy)
    width = iw * scale
    height = ih * scale
    x = max(0.0, (aw - width) / 2.0)
    y = max(0.0, (ah - height) / 2.0)
    return DrawRect(x, y, width, height)
