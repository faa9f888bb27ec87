"""Unit tests for the Pillow codec adapter."""

import io

import pytest
from PIL import Image

from frameprint.errors import DecodeError, EncodeError
from frameprint.pdf.codec import decode_image, encode_png


class TestDecode:
    @pytest.mark.parametrize("fmt", ["PNG", "JPEG", "GIF", "BMP"])
    def test_common_formats(self, make_image_bytes, fmt):
        img = decode_image(make_image_bytes(40, 30, fmt=fmt))
        assert img.size == (40, 30)
        assert img.mode in ("RGB", "RGBA", "L", "LA")

    def test_palette_becomes_rgba(self):
        buf = io.BytesIO()
        Image.new("P", (5, 5)).save(buf, format="PNG")
        assert decode_image(buf.getvalue()).mode == "RGBA"

    def test_cmyk_becomes_rgb(self):
        buf = io.BytesIO()
        Image.new("CMYK", (5, 5)).save(buf, format="JPEG")
        assert decode_image(buf.getvalue()).mode == "RGB"

    @pytest.mark.parametrize("value,expected", [(0, 0), (32768, 128), (65535, 255)])
    def test_16bit_grayscale_rescaled(self, value, expected):
        buf = io.BytesIO()
        Image.new("I;16", (4, 4), value).save(buf, format="PNG")
        img = decode_image(buf.getvalue())
        assert img.mode == "L"
        assert abs(img.getpixel((2, 2)) - expected) <= 1

    def test_16bit_mid_gray_survives_fit(self):
        from frameprint.layout.fitter import FitMode, fit_image

        buf = io.BytesIO()
        Image.new("I;16", (8, 8), 32768).save(buf, format="PNG")
        fitted, _ = fit_image(decode_image(buf.getvalue()), 16, 16, FitMode.STRETCH)
        assert abs(fitted.getpixel((8, 8)) - 128) <= 1

    def test_corrupt(self, corrupt_bytes):
        with pytest.raises(DecodeError) as exc_info:
            decode_image(corrupt_bytes, "broken.png")
        assert "broken.png" in exc_info.value.message

    def test_empty(self):
        with pytest.raises(DecodeError):
            decode_image(b"")

    def test_not_an_image(self):
        with pytest.raises(DecodeError):
            decode_image(b"hello world")


class TestEncode:
    def test_png_signature(self):
        data = encode_png(Image.new("RGB", (3, 3)))
        assert data.startswith(b"\x89PNG\r\n\x1a\n")

    def test_lossless(self):
        img = Image.new("RGB", (2, 2), (1, 2, 3))
        img.putpixel((1, 1), (250, 128, 7))
        back = Image.open(io.BytesIO(encode_png(img)))
        assert back.getpixel((1, 1)) == (250, 128, 7)

    def test_unencodable_mode(self):
        # PNG has no CMYK mode.
        with pytest.raises(EncodeError):
            encode_png(Image.new("CMYK", (2, 2)), "cmyk.tif")
