"""Difference metrics between two screenshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from PIL import Image, ImageChops

HIGHLIGHT_COLOR = (255, 0, 255, 255)
BACKGROUND_COLOR = (255, 255, 255, 255)


@dataclass
class PixelDifference:
    difference: float  # percentage, 0-100
    mask: Optional[Image.Image] = None  # "L" image, 255 where pixels differ
    size: tuple[int, int] = (0, 0)


class DifferenceMetric(Protocol):
    def measure(self, base: Image.Image, new: Image.Image) -> PixelDifference: ...


def _changed_mask(base: Image.Image, new: Image.Image) -> Image.Image:
    """Per-pixel mask of positions where any RGBA component differs."""
    delta = ImageChops.difference(base.convert("RGBA"), new.convert("RGBA"))
    bands = delta.split()
    combined = bands[0]
    for band in bands[1:]:
        combined = ImageChops.lighter(combined, band)
    return combined.point(lambda v: 255 if v else 0)


class PixelExactMetric:
    """Share of pixel positions whose color is not exactly equal.

    Images of different size count as completely different.
    """

    def measure(self, base: Image.Image, new: Image.Image) -> PixelDifference:
        if base.size != new.size:
            size = (max(base.width, new.width), max(base.height, new.height))
            return PixelDifference(
                difference=100.0,
                mask=Image.new("L", size, 255),
                size=size,
            )

        total = base.width * base.height
        if total == 0:
            return PixelDifference(difference=0.0, size=base.size)

        mask = _changed_mask(base, new)
        changed = mask.histogram()[255]
        return PixelDifference(
            difference=changed * 100.0 / total,
            mask=mask,
            size=base.size,
        )


def render_difference(result: PixelDifference) -> Image.Image:
    """Paint differing pixels in the highlight color on a white canvas."""
    canvas = Image.new("RGBA", result.size, BACKGROUND_COLOR)
    if result.mask is not None:
        canvas.paste(HIGHLIGHT_COLOR, (0, 0), result.mask)
    return canvas
