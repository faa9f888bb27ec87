"""
FramePrint — Physical ↔ pixel unit conversion.

All page geometry is expressed in millimetres; frames are entered in
inches and rasterised at a given DPI.
"""

from __future__ import annotations

import math

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


def inches_to_mm(value: float) -> float:
    return value * MM_PER_INCH


def pixels_to_mm(pixels: int, dpi: int) -> float:
    """Printed length of `pixels` at `dpi`."""
    return pixels / dpi * MM_PER_INCH


def physical_to_pixels(inches: float, dpi: int) -> int:
    """Whole pixels covering `inches` at `dpi` (truncated, never rounded up)."""
    return int(math.floor(inches * dpi))


def mm_to_points(mm: float) -> float:
    """PDF user-space points for a length in millimetres."""
    return mm / MM_PER_INCH * POINTS_PER_INCH
