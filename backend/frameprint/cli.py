"""
FramePrint — Launcher.

Serves the API with uvicorn and, unless told otherwise, opens the
upload page in the default browser once the server is starting.
"""

from __future__ import annotations

import argparse
import threading
import webbrowser

import uvicorn

from frameprint.core.config import settings
from frameprint.utils.logging import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frameprint",
        description="Fit images into a physical frame and print them to PDF.",
    )
    parser.add_argument("--port", type=int, default=settings.port, help="Port to serve on")
    parser.add_argument("--addr", default=settings.host, help="Address to bind to")
    parser.add_argument(
        "--no-browser",
        action="store_true",
        default=not settings.open_browser,
        help="Do not open the browser automatically",
    )
    return parser


def open_browser(url: str) -> bool:
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as exc:
        logger.warning("Failed to open browser: %s", exc)
        opened = False
    if not opened:
        logger.info("Please open your browser and navigate to: %s", url)
    return opened


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    url = f"http://{args.addr}:{args.port}"

    if not args.no_browser:
        # Give uvicorn a moment to bind before the browser requests the page.
        threading.Timer(1.0, open_browser, args=(url,)).start()

    logger.info("Starting server at %s", url)
    uvicorn.run(
        "frameprint.main:app",
        host=args.addr,
        port=args.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
