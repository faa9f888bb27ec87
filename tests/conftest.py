"""Shared test configuration and fixtures for the FramePrint test suite."""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def _encode(image: Image.Image, fmt: str) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture
def make_image_bytes():
    """Factory: solid-colour image of the given size, encoded in `fmt`."""
    def _make(width: int, height: int, fmt: str = "PNG", color=(200, 30, 30)) -> bytes:
        mode = "RGB" if fmt.upper() in ("JPEG", "BMP") else "RGBA"
        fill = color if mode == "RGB" else (*color, 255)
        return _encode(Image.new(mode, (width, height), fill), fmt)
    return _make


@pytest.fixture
def landscape_png(make_image_bytes):
    return make_image_bytes(1000, 800)


@pytest.fixture
def portrait_png(make_image_bytes):
    return make_image_bytes(800, 1000)


@pytest.fixture
def corrupt_bytes():
    return b"\x89PNG\r\n\x1a\nthis is not really a png"
