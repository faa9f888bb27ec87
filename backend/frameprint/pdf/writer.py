"""
FramePrint — PDF document writer.

Wraps pymupdf (fitz). Pages are a fixed portrait size; all incoming
geometry is in millimetres from the page's top-left corner and is
converted to PDF points here.
"""

from __future__ import annotations

import fitz

from frameprint.errors import FinalizeError
from frameprint.layout.placement import PagePlacement
from frameprint.layout.units import mm_to_points
from frameprint.utils.logging import logger

# Portrait page sizes in millimetres.
PAGE_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "LETTER": (215.9, 279.4),
}


def _rect(x: float, y: float, width: float, height: float) -> fitz.Rect:
    return fitz.Rect(
        mm_to_points(x),
        mm_to_points(y),
        mm_to_points(x + width),
        mm_to_points(y + height),
    )


class PDFDocumentWriter:
    """Append-only page writer. One instance per request."""

    def __init__(self, page_size: str = "A4", border_width_mm: float = 0.5):
        try:
            self.page_width_mm, self.page_height_mm = PAGE_SIZES_MM[page_size.upper()]
        except KeyError:
            raise ValueError(f"Unknown page size: {page_size}") from None
        self.border_width_mm = border_width_mm
        self._doc = fitz.open()
        self._finalized = False
        self._pages = 0

    @property
    def page_count(self) -> int:
        return self._pages

    @property
    def closed(self) -> bool:
        return self._doc.is_closed

    def close(self) -> None:
        """Release the underlying document; safe to call more than once."""
        self._finalized = True
        if not self._doc.is_closed:
            self._doc.close()

    def add_page(self, png_bytes: bytes, placement: PagePlacement) -> None:
        """Add one page holding the image and its frame outline."""
        if self._finalized:
            raise RuntimeError("Writer already finalized")

        img = placement.image
        border = placement.border
        try:
            page = self._doc.new_page(
                width=mm_to_points(self.page_width_mm),
                height=mm_to_points(self.page_height_mm),
            )
            page.insert_image(
                _rect(img.x, img.y, img.width, img.height),
                stream=png_bytes,
                keep_proportion=False,
            )
            page.draw_rect(
                _rect(border.x, border.y, border.width, border.height),
                color=(0, 0, 0),
                fill=None,
                width=mm_to_points(self.border_width_mm),
            )
        except Exception as exc:
            logger.exception("Embedding page %d failed", self._pages + 1)
            self.close()
            raise FinalizeError(str(exc)) from exc
        self._pages += 1

    def finalize(self) -> bytes:
        """Serialize the document. A writer with no pages yields one blank page."""
        if self._finalized:
            raise RuntimeError("Writer already finalized")
        self._finalized = True
        try:
            if self._pages == 0:
                self._doc.new_page(
                    width=mm_to_points(self.page_width_mm),
                    height=mm_to_points(self.page_height_mm),
                )
            pdf_bytes = self._doc.tobytes(garbage=3, deflate=True)
        except Exception as exc:
            logger.exception("PDF serialization failed")
            raise FinalizeError(str(exc)) from exc
        finally:
            self._doc.close()
        return pdf_bytes
