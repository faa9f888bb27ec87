"""Unit tests for request options and report models."""

import pytest
from pydantic import ValidationError

from frameprint.layout.fitter import FitMode
from frameprint.models.job import ArtifactMetadata, AssemblyReport, ImageState, SkippedImage
from frameprint.models.options import PhysicalSize, PrintOptions


class TestPhysicalSize:
    def test_mm(self):
        s = PhysicalSize(width_in=8.0, height_in=10.0)
        assert s.width_mm == pytest.approx(203.2)
        assert s.height_mm == pytest.approx(254.0)

    @pytest.mark.parametrize("w,h", [(0, 10), (8, -1)])
    def test_non_positive_rejected(self, w, h):
        with pytest.raises(ValidationError):
            PhysicalSize(width_in=w, height_in=h)

    def test_frozen(self):
        s = PhysicalSize(width_in=1, height_in=2)
        with pytest.raises(ValidationError):
            s.width_in = 3


class TestPrintOptionsDefaults:
    def test_defaults(self):
        o = PrintOptions()
        assert (o.frame.width_in, o.frame.height_in) == (8.0, 10.0)
        assert o.dpi == 300
        assert o.rotate is False
        assert o.fit_mode is FitMode.STRETCH
        assert o.margin_mm == 5.0
        assert o.target_pixels == (2400, 3000)

    def test_dpi_must_be_positive(self):
        with pytest.raises(ValidationError):
            PrintOptions(dpi=0)


class TestFromForm:
    def test_all_missing(self):
        o = PrintOptions.from_form()
        assert o == PrintOptions()

    def test_parsed_values(self):
        o = PrintOptions.from_form("5", "7.5", "150", "on", "on", None)
        assert (o.frame.width_in, o.frame.height_in) == (5.0, 7.5)
        assert o.dpi == 150
        assert o.rotate is True
        assert o.fit_mode is FitMode.FIT
        assert o.target_pixels == (750, 1125)

    @pytest.mark.parametrize("raw", ["", "abc", "-2", "0", "nan", "inf"])
    def test_bad_width_falls_back(self, raw):
        assert PrintOptions.from_form(frame_width=raw).frame.width_in == 8.0

    @pytest.mark.parametrize("raw", ["", "x", "-300", "0", "72.5"])
    def test_bad_dpi_falls_back(self, raw):
        assert PrintOptions.from_form(dpi=raw).dpi == 300

    def test_custom_defaults(self):
        o = PrintOptions.from_form(
            frame_width="junk", default_width_in=4.0, default_dpi=600, margin_mm=0,
        )
        assert o.frame.width_in == 4.0
        assert o.dpi == 600
        assert o.margin_mm == 0

    def test_checkbox_only_on(self):
        o = PrintOptions.from_form(rotate="true", keep_aspect="yes", crop="off")
        assert o.rotate is False
        assert o.fit_mode is FitMode.STRETCH

    def test_crop_precedence(self):
        o = PrintOptions.from_form(keep_aspect="on", crop="on")
        assert o.fit_mode is FitMode.CROP


class TestAssemblyReport:
    def test_minimal(self):
        r = AssemblyReport(job_id="abc123", images_received=0)
        assert r.pages == 0
        assert r.skipped == []
        assert r.skipped_count == 0
        assert r.artifact.filename == "output.pdf"

    def test_serializes(self):
        r = AssemblyReport(
            job_id="xyz",
            images_received=2,
            pages=1,
            skipped=[SkippedImage(index=1, filename="bad.png", error_code="DECODE_FAILED", message="nope")],
            artifact=ArtifactMetadata(size_bytes=10, pages=1, content_hash="h"),
        )
        data = r.model_dump(mode="json")
        assert data["skipped"][0]["state_reached"] == "RECEIVED"
        assert r.skipped_count == 1

    def test_image_states(self):
        assert ImageState.PAGE_APPENDED == "PAGE_APPENDED"
        assert ImageState.SKIPPED == "SKIPPED"
