"""
FramePrint — Assembly report contracts.

Every /generate call returns an AssemblyReport next to the PDF:
how many images became pages, which were skipped and why, and
how long each stage took.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class ImageState(str, enum.Enum):
    RECEIVED = "RECEIVED"
    DECODED = "DECODED"
    ROTATED = "ROTATED"
    FITTED = "FITTED"
    PLACED = "PLACED"
    ENCODED = "ENCODED"
    PAGE_APPENDED = "PAGE_APPENDED"
    SKIPPED = "SKIPPED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class SkippedImage(BaseModel):
    index: int
    filename: str
    error_code: str
    message: str
    state_reached: ImageState = ImageState.RECEIVED


class ArtifactMetadata(BaseModel):
    filename: str = "output.pdf"
    size_bytes: int = 0
    pages: int = 0
    content_hash: str = ""  # SHA-256 of final PDF


class AssemblyReport(BaseModel):
    """Outcome of one assembly run."""

    job_id: str
    images_received: int
    pages: int = 0
    fit_mode: str = ""
    dpi: int = 0
    target_pixels: tuple[int, int] = (0, 0)
    skipped: list[SkippedImage] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    artifact: ArtifactMetadata = Field(default_factory=ArtifactMetadata)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
