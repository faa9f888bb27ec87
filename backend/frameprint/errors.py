"""
FramePrint — Structured error catalog.

Every error has a code, human message, and suggested fix.
Per-image errors (dimensions, decode, encode) cause that image to be
skipped; only FinalizeError fails the whole request.
"""

from __future__ import annotations

from typing import Any


class FramePrintError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class InvalidDimensionsError(FramePrintError):
    def __init__(self, kind: str, width: int, height: int):
        super().__init__(
            code="INVALID_DIMENSIONS",
            message=f"Degenerate {kind} size: {width}x{height} px",
            suggestion="Check the frame size and DPI; both must give at least one pixel per side.",
            detail={"kind": kind, "width": width, "height": height},
        )


class DecodeError(FramePrintError):
    def __init__(self, filename: str, reason: str = ""):
        super().__init__(
            code="DECODE_FAILED",
            message=f"Could not decode image: {filename}",
            suggestion="Upload a PNG, JPEG, GIF, BMP, TIFF or WebP file.",
            detail=reason[:500] if reason else None,
        )


class EncodeError(FramePrintError):
    def __init__(self, filename: str, reason: str = ""):
        super().__init__(
            code="ENCODE_FAILED",
            message=f"Could not re-encode fitted image: {filename}",
            suggestion="Try a smaller frame or a lower DPI.",
            detail=reason[:500] if reason else None,
        )


class FinalizeError(FramePrintError):
    def __init__(self, reason: str = ""):
        super().__init__(
            code="FINALIZE_FAILED",
            message="Could not write the output PDF",
            suggestion="Retry the request; if it keeps failing, reduce the number of images.",
            detail=reason[:500] if reason else None,
        )


class UploadTooLargeError(FramePrintError):
    def __init__(self, filename: str, size_mb: float, limit_mb: float):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"File exceeds {limit_mb:g}MB limit: {filename} ({size_mb:.1f}MB)",
            suggestion="Compress or resize the file before uploading.",
        )
