"""
FramePrint — Logger setup, request ids and timed pipeline steps.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Generator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("frameprint")


def new_request_id() -> str:
    """Short hex id used to tag every log line of one request."""
    return uuid.uuid4().hex[:12]


@contextmanager
def step_timer(step_name: str, request_id: str = "") -> Generator[None, None, None]:
    """Log the start and duration of a pipeline step, optionally tagged with a request id."""
    prefix = f"[{request_id}] " if request_id else ""
    logger.info("%s▶ %s — started", prefix, step_name)
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s✔ %s — completed in %.0f ms", prefix, step_name, elapsed_ms)
