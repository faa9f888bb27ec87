"""
FramePrint — Frame fitting.

Computes how a source raster is resized (and possibly trimmed) to land in
a target pixel box, then applies that plan with Pillow.

Modes:
  STRETCH  anisotropic resize to exactly the box
  FIT      uniform scale so the whole source fits inside the box
  CROP     uniform scale so the box is covered, then center-trim

Planning uses integer cross-multiplication so that equal aspect ratios
compare equal and truncation is exact.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from PIL import Image

from frameprint.errors import InvalidDimensionsError


class FitMode(str, enum.Enum):
    CROP = "crop"
    FIT = "fit"
    STRETCH = "stretch"

    @classmethod
    def from_flags(cls, crop: bool, keep_aspect: bool) -> "FitMode":
        """Map the upload form's two checkboxes onto a mode; crop wins over keepAspect."""
        if crop:
            return cls.CROP
        if keep_aspect:
            return cls.FIT
        return cls.STRETCH


@dataclass(frozen=True)
class FitPlan:
    mode: FitMode
    scaled_width: int
    scaled_height: int
    crop_box: tuple[int, int, int, int] | None  # (left, top, right, bottom) in scaled pixels
    output_width: int
    output_height: int


def _check(kind: str, width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(kind, width, height)


def plan_fit(
    src_width: int,
    src_height: int,
    target_width: int,
    target_height: int,
    mode: FitMode,
) -> FitPlan:
    """Compute the resize/crop transform for one image. Pure; raises InvalidDimensionsError."""
    _check("source", src_width, src_height)
    _check("target", target_width, target_height)

    # Source is relatively wider than the box when sw/sh > tw/th.
    wider = src_width * target_height > target_width * src_height

    if mode is FitMode.STRETCH:
        return FitPlan(mode, target_width, target_height, None, target_width, target_height)

    if mode is FitMode.FIT:
        if wider:
            w = target_width
            h = max(1, target_width * src_height // src_width)
        else:
            h = target_height
            w = max(1, target_height * src_width // src_height)
        return FitPlan(mode, w, h, None, w, h)

    # CROP: cover the box, free axis rounded half-up and never short of the box.
    if wider:
        h = target_height
        w = max(target_width, (2 * target_height * src_width + src_height) // (2 * src_height))
    else:
        w = target_width
        h = max(target_height, (2 * target_width * src_height + src_width) // (2 * src_width))
    left = (w - target_width) // 2
    top = (h - target_height) // 2
    box = (left, top, left + target_width, top + target_height)
    return FitPlan(mode, w, h, box, target_width, target_height)


def rotate_clockwise(image: Image.Image) -> Image.Image:
    """Rotate raw pixels 90° clockwise; width and height swap."""
    return image.transpose(Image.Transpose.ROTATE_270)


def fit_image(
    image: Image.Image,
    target_width: int,
    target_height: int,
    mode: FitMode,
) -> tuple[Image.Image, FitPlan]:
    """Resize (Lanczos) and, for CROP, center-trim `image` into the target box."""
    plan = plan_fit(image.width, image.height, target_width, target_height, mode)

    if (plan.scaled_width, plan.scaled_height) == image.size:
        fitted = image.copy()
    else:
        fitted = image.resize(
            (plan.scaled_width, plan.scaled_height),
            Image.Resampling.LANCZOS,
        )

    if plan.crop_box is not None:
        fitted = fitted.crop(plan.crop_box)

    return fitted, plan
