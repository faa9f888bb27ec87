"""
FramePrint — Image codec adapter.

Decodes uploads with Pillow and re-encodes fitted rasters as PNG for the
PDF writer. Pillow errors are translated into the error catalog.
"""

from __future__ import annotations

import io

from PIL import Image, UnidentifiedImageError

from frameprint.errors import DecodeError, EncodeError

# Modes Lanczos resampling handles directly; everything else is converted.
_RESAMPLABLE_MODES = {"RGB", "RGBA", "L", "LA"}


def decode_image(data: bytes, filename: str = "image") -> Image.Image:
    """Decode raw upload bytes into a fully loaded raster."""
    if not data:
        raise DecodeError(filename, "empty upload")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(filename, str(exc)) from exc

    if img.mode == "I" or img.mode.startswith("I;16"):
        # 16-bit samples: keep the high byte, otherwise convert() clips to white.
        try:
            img = img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
        except (OSError, ValueError) as exc:
            raise DecodeError(filename, f"unsupported mode {img.mode}: {exc}") from exc

    if img.mode not in _RESAMPLABLE_MODES:
        # Palette images keep their transparency through RGBA.
        target = "RGBA" if img.mode in ("P", "PA") else "RGB"
        try:
            img = img.convert(target)
        except (OSError, ValueError) as exc:
            raise DecodeError(filename, f"unsupported mode {img.mode}: {exc}") from exc
    return img


def encode_png(image: Image.Image, filename: str = "image") -> bytes:
    """Lossless PNG bytes for `image`."""
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(filename, str(exc)) from exc
    return buf.getvalue()
