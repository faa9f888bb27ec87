"""
FramePrint — Document assembler.

Runs every upload through a small per-image state machine:

  RECEIVED → DECODED → (ROTATED) → FITTED → PLACED → ENCODED → PAGE_APPENDED
  RECEIVED → … → SKIPPED   (decode / dimension / encode failure)

Stage one turns each upload into an immutable PageRecord or a skip.
Stage two reduces the ordered records into a single PDF writer and
finalizes it. A bad upload never aborts the batch; only a finalize
failure fails the request.
"""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Union

from frameprint.errors import FinalizeError, FramePrintError
from frameprint.layout.fitter import fit_image, rotate_clockwise
from frameprint.layout.placement import PagePlacement, plan_placement
from frameprint.models.job import (
    ArtifactMetadata,
    AssemblyReport,
    ImageState,
    SkippedImage,
    StepTiming,
)
from frameprint.models.options import PrintOptions
from frameprint.pdf.codec import decode_image, encode_png
from frameprint.pdf.writer import PDFDocumentWriter
from frameprint.utils.logging import logger, new_request_id, step_timer


@dataclass(frozen=True)
class Upload:
    filename: str
    data: bytes


@dataclass(frozen=True)
class PageRecord:
    index: int
    filename: str
    png_bytes: bytes
    fitted_size: tuple[int, int]
    placement: PagePlacement


@dataclass(frozen=True)
class ImageOutcome:
    """Processed(page) when `page` is set, otherwise Skipped(error)."""

    index: int
    filename: str
    state: ImageState
    page: PageRecord | None = None
    error: FramePrintError | None = None
    reached: ImageState = ImageState.RECEIVED

    @property
    def processed(self) -> bool:
        return self.page is not None


@dataclass
class AssemblyResult:
    pdf_bytes: bytes
    report: AssemblyReport
    outcomes: list[ImageOutcome] = field(default_factory=list)


UploadLike = Union[Upload, tuple[str, bytes], bytes]


def _as_upload(index: int, item: UploadLike) -> Upload:
    if isinstance(item, Upload):
        return item
    if isinstance(item, (bytes, bytearray)):
        return Upload(filename=f"image-{index + 1}", data=bytes(item))
    filename, data = item
    return Upload(filename=filename or f"image-{index + 1}", data=data)


class DocumentAssembler:
    """
    Builds one PDF from a batch of uploads.

    One instance per request: it owns no state shared with other
    requests, and each assemble() call creates a fresh writer.
    """

    def __init__(
        self,
        options: PrintOptions,
        writer_factory: Callable[[], PDFDocumentWriter] | None = None,
        page_size: str = "A4",
        border_width_mm: float = 0.5,
        request_id: str | None = None,
    ):
        self.options = options
        self.request_id = request_id or new_request_id()
        self._writer_factory = writer_factory or (
            lambda: PDFDocumentWriter(page_size=page_size, border_width_mm=border_width_mm)
        )
        self.timings: list[StepTiming] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("[%s]   %s %s — %dms %s", self.request_id, symbol, name, ms, detail)

    def process_image(self, index: int, upload: Upload) -> ImageOutcome:
        """Take one upload as far as an encoded page record, or report why it was skipped."""
        opts = self.options
        state = ImageState.RECEIVED
        try:
            image = decode_image(upload.data, upload.filename)
            state = ImageState.DECODED

            if opts.rotate:
                image = rotate_clockwise(image)
                state = ImageState.ROTATED

            target_w, target_h = opts.target_pixels
            fitted, plan = fit_image(image, target_w, target_h, opts.fit_mode)
            state = ImageState.FITTED

            placement = plan_placement(
                plan.output_width,
                plan.output_height,
                opts.fit_mode,
                opts.frame.width_mm,
                opts.frame.height_mm,
                opts.dpi,
                margin_mm=opts.margin_mm,
            )
            state = ImageState.PLACED

            png = encode_png(fitted, upload.filename)
            state = ImageState.ENCODED
        except FramePrintError as exc:
            logger.warning(
                "[%s]   Skipping #%d %s at %s: %s (%s)",
                self.request_id, index + 1, upload.filename, state.value, exc.code, exc.message,
            )
            return ImageOutcome(
                index, upload.filename, ImageState.SKIPPED, error=exc, reached=state,
            )

        record = PageRecord(
            index=index,
            filename=upload.filename,
            png_bytes=png,
            fitted_size=(plan.output_width, plan.output_height),
            placement=placement,
        )
        logger.info(
            "[%s]   #%d %s: %dx%d px → %dx%d px, placed at (%.2f, %.2f) mm",
            self.request_id, index + 1, upload.filename, image.width, image.height,
            plan.output_width, plan.output_height, placement.image.x, placement.image.y,
        )
        return ImageOutcome(index, upload.filename, state, page=record, reached=state)

    def assemble(self, uploads: Iterable[UploadLike]) -> AssemblyResult:
        """Process every upload in order and return the finalized PDF plus a report."""
        items = [_as_upload(i, u) for i, u in enumerate(uploads)]
        self.timings = []
        opts = self.options
        logger.info(
            "[%s] Assembling %d image(s): frame %.2fx%.2f in @ %d dpi, mode=%s rotate=%s",
            self.request_id, len(items), opts.frame.width_in, opts.frame.height_in,
            opts.dpi, opts.fit_mode.value, opts.rotate,
        )

        t = time.perf_counter()
        with step_timer("Process images", self.request_id):
            outcomes = [self.process_image(i, upload) for i, upload in enumerate(items)]
        pages = [o.page for o in outcomes if o.page is not None]
        self._record_step(
            "process_images", t, detail=f"{len(pages)}/{len(items)} processed",
        )

        t = time.perf_counter()
        writer = self._writer_factory()
        try:
            with step_timer("Write PDF", self.request_id):
                for record in pages:
                    writer.add_page(record.png_bytes, record.placement)
                pdf_bytes = writer.finalize()
        except FinalizeError as exc:
            writer.close()
            self._record_step("finalize", t, "failed", exc.code)
            raise
        except Exception as exc:
            writer.close()
            logger.exception("[%s] PDF writer failed", self.request_id)
            error = FinalizeError(str(exc))
            self._record_step("finalize", t, "failed", error.code)
            raise error from exc
        self._record_step("finalize", t, detail=f"{len(pdf_bytes)} bytes")

        outcomes = [
            ImageOutcome(
                o.index, o.filename, ImageState.PAGE_APPENDED,
                page=o.page, reached=ImageState.PAGE_APPENDED,
            )
            if o.processed else o
            for o in outcomes
        ]

        skipped = [
            SkippedImage(
                index=o.index,
                filename=o.filename,
                error_code=o.error.code if o.error else "UNKNOWN",
                message=o.error.message if o.error else "",
                state_reached=o.reached,
            )
            for o in outcomes if not o.processed
        ]
        if skipped:
            logger.warning(
                "[%s] %d of %d image(s) skipped", self.request_id, len(skipped), len(items),
            )

        report = AssemblyReport(
            job_id=self.request_id,
            images_received=len(items),
            pages=len(pages),
            fit_mode=opts.fit_mode.value,
            dpi=opts.dpi,
            target_pixels=opts.target_pixels,
            skipped=skipped,
            timings=self.timings,
            artifact=ArtifactMetadata(
                size_bytes=len(pdf_bytes),
                pages=len(pages),
                content_hash=hashlib.sha256(pdf_bytes).hexdigest(),
            ),
        )
        return AssemblyResult(pdf_bytes=pdf_bytes, report=report, outcomes=outcomes)


def assemble_document(
    uploads: Iterable[UploadLike],
    options: PrintOptions,
    **kwargs,
) -> AssemblyResult:
    """Convenience wrapper: one-shot assembly with a fresh DocumentAssembler."""
    return DocumentAssembler(options, **kwargs).assemble(uploads)
