"""
FramePrint — Validated request options.

Raw form values are parsed and defaulted once, at the request boundary,
by PrintOptions.from_form. Everything downstream receives positive,
typed values and never re-checks them.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

from frameprint.layout.fitter import FitMode
from frameprint.layout.placement import DEFAULT_MARGIN_MM
from frameprint.layout.units import inches_to_mm, physical_to_pixels

DEFAULT_FRAME_WIDTH_IN = 8.0
DEFAULT_FRAME_HEIGHT_IN = 10.0
DEFAULT_DPI = 300


class PhysicalSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width_in: float = Field(gt=0)
    height_in: float = Field(gt=0)

    @property
    def width_mm(self) -> float:
        return inches_to_mm(self.width_in)

    @property
    def height_mm(self) -> float:
        return inches_to_mm(self.height_in)


def _positive_float(raw: str | None, default: float) -> float:
    try:
        value = float(raw) if raw is not None else default
    except ValueError:
        return default
    return value if math.isfinite(value) and value > 0 else default


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def _checkbox(raw: str | None) -> bool:
    return raw == "on"


class PrintOptions(BaseModel):
    """Per-request settings shared by every image in the batch."""

    model_config = ConfigDict(frozen=True)

    frame: PhysicalSize = Field(
        default_factory=lambda: PhysicalSize(
            width_in=DEFAULT_FRAME_WIDTH_IN, height_in=DEFAULT_FRAME_HEIGHT_IN
        )
    )
    dpi: int = Field(default=DEFAULT_DPI, gt=0)
    rotate: bool = False
    fit_mode: FitMode = FitMode.STRETCH
    margin_mm: float = Field(default=DEFAULT_MARGIN_MM, ge=0)

    @property
    def target_pixels(self) -> tuple[int, int]:
        """The frame rasterised at `dpi`."""
        return (
            physical_to_pixels(self.frame.width_in, self.dpi),
            physical_to_pixels(self.frame.height_in, self.dpi),
        )

    @classmethod
    def from_form(
        cls,
        frame_width: str | None = None,
        frame_height: str | None = None,
        dpi: str | None = None,
        rotate: str | None = None,
        keep_aspect: str | None = None,
        crop: str | None = None,
        *,
        default_width_in: float = DEFAULT_FRAME_WIDTH_IN,
        default_height_in: float = DEFAULT_FRAME_HEIGHT_IN,
        default_dpi: int = DEFAULT_DPI,
        margin_mm: float = DEFAULT_MARGIN_MM,
    ) -> "PrintOptions":
        """
        Build options from the upload form.

        Missing, unparsable and non-positive numbers fall back to the
        defaults; checkboxes are on only when their value is "on".
        """
        return cls(
            frame=PhysicalSize(
                width_in=_positive_float(frame_width, default_width_in),
                height_in=_positive_float(frame_height, default_height_in),
            ),
            dpi=_positive_int(dpi, default_dpi),
            rotate=_checkbox(rotate),
            fit_mode=FitMode.from_flags(crop=_checkbox(crop), keep_aspect=_checkbox(keep_aspect)),
            margin_mm=margin_mm,
        )
