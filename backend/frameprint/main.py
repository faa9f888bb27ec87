"""
FramePrint — FastAPI Backend

Endpoints:
  GET  /             — Upload page with live frame preview
  GET  /static/*     — Page assets (CSS, JS)
  POST /generate     — Image(s) + frame settings → print-ready PDF
  GET  /health       — Health check
"""

import asyncio
import base64
import time
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles

from frameprint.core.config import settings
from frameprint.errors import FramePrintError, UploadTooLargeError
from frameprint.models.options import PrintOptions
from frameprint.pipeline.assembler import DocumentAssembler, Upload
from frameprint.utils.logging import logger, new_request_id

VERSION = "1.0.0"

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title="FramePrint API",
    description=(
        "Fit uploaded images into a fixed physical frame and return "
        "a print-ready PDF with one framed image per page."
    ),
    version=VERSION,
)


@app.on_event("startup")
async def _startup_banner():
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║              FramePrint  ·  API Server           ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  GET  /           → Upload page                  ║")
    logger.info("║  POST /generate   → Framed images → PDF          ║")
    logger.info("║  GET  /health     → Health check                 ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  Defaults  : %-36s║", f"{settings.defaults.width_in:g}x{settings.defaults.height_in:g} in @ {settings.defaults.dpi} dpi")
    logger.info("║  Page      : %-36s║", f"{settings.page.size}, margin {settings.page.margin_mm:g} mm")
    logger.info("║  Upload cap: %-36s║", f"{settings.max_upload_mb:g} MB per file")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "frameprint-api", "version": VERSION}


@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.post(
    "/generate",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Generated PDF"},
        413: {"description": "An upload exceeds the size limit"},
        500: {"description": "PDF could not be written"},
    },
)
async def generate_pdf(
    images: list[UploadFile] | None = File(default=None, description="Images to frame, one page each"),
    frameWidth: str | None = Form(default=None, description="Frame width in inches"),
    frameHeight: str | None = Form(default=None, description="Frame height in inches"),
    dpi: str | None = Form(default=None, description="Print resolution in dots per inch"),
    rotate: str | None = Form(default=None, description='"on" to rotate each image 90° clockwise'),
    keepAspect: str | None = Form(default=None, description='"on" to fit without distortion'),
    crop: str | None = Form(default=None, description='"on" to fill the frame and trim overflow'),
):
    """
    Fit every uploaded image into the frame and return one PDF.

    Images that cannot be decoded or fitted are skipped; the
    X-Skipped header and the X-FramePrint-Job report say which.

    Data handling: No data is stored. Uploads are processed in memory
    and discarded after the PDF is returned.
    """
    request_id = new_request_id()
    start = time.perf_counter()
    files = images or []

    options = PrintOptions.from_form(
        frame_width=frameWidth,
        frame_height=frameHeight,
        dpi=dpi,
        rotate=rotate,
        keep_aspect=keepAspect,
        crop=crop,
        default_width_in=settings.defaults.width_in,
        default_height_in=settings.defaults.height_in,
        default_dpi=settings.defaults.dpi,
        margin_mm=settings.page.margin_mm,
    )
    logger.info(
        "[%s] POST /generate — %d files | frame=%gx%g in dpi=%d mode=%s rotate=%s",
        request_id, len(files), options.frame.width_in, options.frame.height_in,
        options.dpi, options.fit_mode.value, options.rotate,
    )

    limit_bytes = settings.max_upload_mb * 1024 * 1024
    uploads: list[Upload] = []
    for f in files:
        content = await f.read()
        if len(content) > limit_bytes:
            exc = UploadTooLargeError(
                f.filename or "upload", len(content) / (1024 * 1024), settings.max_upload_mb,
            )
            logger.warning("[%s] %s", request_id, exc.message)
            raise HTTPException(status_code=413, detail=exc.to_dict())
        uploads.append(Upload(filename=f.filename or "", data=content))

    assembler = DocumentAssembler(
        options,
        page_size=settings.page.size,
        border_width_mm=settings.page.border_width_mm,
        request_id=request_id,
    )
    try:
        result = await asyncio.to_thread(assembler.assemble, uploads)
    except FramePrintError as exc:
        logger.error("[%s] FramePrint error: %s", request_id, exc.code)
        raise HTTPException(status_code=500, detail=exc.to_dict())

    elapsed_ms = (time.perf_counter() - start) * 1000
    report = result.report
    logger.info(
        "[%s] Complete — %d page(s), %d skipped, %d bytes in %.0f ms",
        request_id, report.pages, report.skipped_count, len(result.pdf_bytes), elapsed_ms,
    )

    job_b64 = base64.b64encode(report.model_dump_json().encode()).decode("ascii")

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={report.artifact.filename}",
            "X-Pipeline-Duration-Ms": f"{elapsed_ms:.0f}",
            "X-Request-Id": request_id,
            "X-Pages": str(report.pages),
            "X-Skipped": str(report.skipped_count),
            "X-FramePrint-Job": job_b64,
        },
    )


app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
