"""FramePrint data models — typed contracts for options and reports."""

from frameprint.models.options import PhysicalSize, PrintOptions
from frameprint.models.job import (
    ImageState,
    StepTiming,
    SkippedImage,
    ArtifactMetadata,
    AssemblyReport,
)

__all__ = [
    "PhysicalSize",
    "PrintOptions",
    "ImageState",
    "StepTiming",
    "SkippedImage",
    "ArtifactMetadata",
    "AssemblyReport",
]
