"""
FramePrint — Page placement planner.

Turns fitted pixel dimensions into millimetre rectangles on the page.
Origin is the page's top-left corner; the frame starts at (margin, margin).
"""

from __future__ import annotations

from dataclasses import dataclass

from frameprint.layout.fitter import FitMode
from frameprint.layout.units import pixels_to_mm

DEFAULT_MARGIN_MM = 5.0


@dataclass(frozen=True)
class PlacedImage:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BorderRect:
    """Outline of the nominal frame. Drawn, never filled."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PagePlacement:
    image: PlacedImage
    border: BorderRect


def plan_placement(
    fitted_width: int,
    fitted_height: int,
    mode: FitMode,
    frame_width_mm: float,
    frame_height_mm: float,
    dpi: int,
    margin_mm: float = DEFAULT_MARGIN_MM,
) -> PagePlacement:
    """
    Place a fitted image inside the frame.

    STRETCH and CROP fill the frame exactly. FIT prints the image at its
    real size for `dpi` and centers it in the frame, so it may be smaller
    than the frame on one axis.
    """
    if mode is FitMode.FIT:
        printed_w = pixels_to_mm(fitted_width, dpi)
        printed_h = pixels_to_mm(fitted_height, dpi)
        image = PlacedImage(
            x=margin_mm + (frame_width_mm - printed_w) / 2,
            y=margin_mm + (frame_height_mm - printed_h) / 2,
            width=printed_w,
            height=printed_h,
        )
    else:
        image = PlacedImage(margin_mm, margin_mm, frame_width_mm, frame_height_mm)

    border = BorderRect(margin_mm, margin_mm, frame_width_mm, frame_height_mm)
    return PagePlacement(image=image, border=border)
