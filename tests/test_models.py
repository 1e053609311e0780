"""
Tests for request parsing and normalization.
"""

import json

import pydantic
import pytest

from stagedit import (
    ApplyRequest,
    ChromaKeySettings,
    EditRequest,
    ExportRequest,
    OutputFormat,
    ResizeMode,
)


class TestEditRequest:

    def test_defaults(self):
        request = EditRequest(source_path="a.png")
        assert request.crop is None
        assert request.rotation == 0
        assert request.pixelate_block_size == 8
        assert request.mode == ResizeMode.EXACT
        assert not request.chroma_key_enabled

    @pytest.mark.parametrize("mode,expected", [
        ("scale_then_crop", ResizeMode.SCALE_THEN_CROP),
        ("SCALE_THEN_CROP", ResizeMode.SCALE_THEN_CROP),
        ("exact", ResizeMode.EXACT),
        ("fit", ResizeMode.EXACT),
        (None, ResizeMode.EXACT),
    ])
    def test_unknown_mode_is_exact(self, mode, expected):
        assert EditRequest(source_path="a.png", mode=mode).mode == expected

    def test_frozen(self):
        request = EditRequest(source_path="a.png")
        with pytest.raises(pydantic.ValidationError):
            request.rotation = 90

    def test_unknown_fields_ignored(self):
        request = EditRequest.model_validate({"source_path": "a.png", "zoom": 3})
        assert not hasattr(request, "zoom")

    def test_source_path_required(self):
        with pytest.raises(pydantic.ValidationError):
            EditRequest()

    def test_stroke_points_from_json(self):
        request = EditRequest.model_validate_json(
            '{"source_path": "a.png", "pixelate_strokes": '
            '[{"points": [[0.1, 0.2], [0.3, 0.4]], "radius": 0.05}]}'
        )
        assert request.pixelate_strokes[0].points == ((0.1, 0.2), (0.3, 0.4))
        assert request.pixelate_strokes[0].radius == 0.05


class TestChromaKeySettings:

    def test_clamping(self):
        settings = ChromaKeySettings(enabled=True, color=(-10, 128, 300), tolerance=1.7)
        assert settings.color == (0, 128, 255)
        assert settings.tolerance == 1.0

    def test_enabled_flag(self):
        request = EditRequest(source_path="a.png", bg_removal={"enabled": True})
        assert request.chroma_key_enabled
        assert request.bg_removal.color == (0, 255, 0)


class TestExportRequest:

    @pytest.mark.parametrize("value,expected", [
        ("png", OutputFormat.PNG),
        ("jpeg", OutputFormat.JPEG),
        ("jpg", OutputFormat.JPEG),
        ("JPG", OutputFormat.JPEG),
        ("webp", OutputFormat.PNG),
    ])
    def test_output_format(self, value, expected):
        request = ExportRequest(source_path="a.png", output_path="b", output_format=value)
        assert request.output_format == expected

    @pytest.mark.parametrize("quality,expected", [(-5, 0), (90, 90), (250, 100)])
    def test_quality_clamped(self, quality, expected):
        request = ExportRequest(source_path="a.png", output_path="b", jpeg_quality=quality)
        assert request.jpeg_quality == expected

    def test_default_quality(self):
        assert ExportRequest(source_path="a.png", output_path="b").jpeg_quality == 90


class TestApplyRequest:

    def test_resize_aliases(self):
        request = ApplyRequest.model_validate(
            {"source_path": "a.png", "resize_width": 320, "resize_height": 200}
        )
        assert (request.target_width, request.target_height) == (320, 200)

    def test_target_names_accepted(self):
        request = ApplyRequest.model_validate(
            {"source_path": "a.png", "target_width": 10, "target_height": 20}
        )
        assert (request.target_width, request.target_height) == (10, 20)

    def test_skips_unchanged_resize(self):
        assert ApplyRequest.skip_unchanged_resize
        assert not ExportRequest.skip_unchanged_resize

    @pytest.mark.parametrize("mode", ["scale_then_crop", ResizeMode.SCALE_THEN_CROP, "exact"])
    def test_mode_is_always_exact(self, mode):
        request = ApplyRequest(source_path="a.png", mode=mode)
        assert request.mode == ResizeMode.EXACT

    def test_export_keeps_mode(self):
        request = ExportRequest(source_path="a.png", output_path="b", mode="scale_then_crop")
        assert request.mode == ResizeMode.SCALE_THEN_CROP


class TestNonFiniteNumbers:
    """Infinity and NaN are rejected, 1e309 in JSON parses as infinity."""

    @pytest.mark.parametrize("payload", [
        '{"source_path": "a.png", "crop": {"width": 1e309}}',
        '{"source_path": "a.png", "crop": {"x": 1e400}}',
        '{"source_path": "a.png", "pixelate_strokes": [{"points": [[1e309, 0.5]]}]}',
        '{"source_path": "a.png", "pixelate_strokes": [{"points": [], "radius": 1e309}]}',
        '{"source_path": "a.png", "brightness": 1e309}',
        '{"source_path": "a.png", "contrast": -1e309}',
        '{"source_path": "a.png", "bg_removal": {"enabled": true, "tolerance": 1e309}}',
    ])
    def test_rejected(self, payload):
        with pytest.raises(pydantic.ValidationError):
            EditRequest.model_validate(json.loads(payload))

    def test_nan_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ExportRequest(source_path="a.png", output_path="b", brightness=float("nan"))

    def test_apply_rejects_infinity(self):
        with pytest.raises(pydantic.ValidationError):
            ApplyRequest(source_path="a.png", crop={"height": float("inf")})
