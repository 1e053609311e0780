"""
Tests for image decoding, encoding and atomic writes.
"""

import base64
import io
import os

import PIL.Image
import PIL.ImageFile
import numpy as np
import pytest

from stagedit import DecodeError, EncodeError, OutputFormat, PixelBuffer
from stagedit import codec


@pytest.fixture
def noise_buffer(noise_pixels) -> PixelBuffer:
    return PixelBuffer(noise_pixels.copy())


class TestDecode:
    """Reading source images."""

    def test_decode_png_file(self, source_png, noise_pixels):
        buffer = codec.decode_file(source_png)
        assert buffer.size == (40, 30)
        assert np.array_equal(buffer.pixels, noise_pixels)

    def test_gray_png_is_expanded(self, tmp_path):
        path = tmp_path / "gray.png"
        PIL.Image.new("L", (5, 3), 77).save(path)
        buffer = codec.decode_file(path)
        assert buffer.size == (5, 3)
        assert buffer.get_pixel(4, 2) == (77, 77, 77, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeError, match="Failed to open image"):
            codec.decode_file(tmp_path / "missing.png")

    def test_garbage_data(self, tmp_path):
        path = tmp_path / "garbage.png"
        path.write_bytes(b"this is not an image at all")
        with pytest.raises(DecodeError, match="unsupported format"):
            codec.decode_file(path)

    def test_truncated_png(self, source_png):
        with open(source_png, "rb") as f:
            data = f.read()
        with pytest.raises(DecodeError):
            codec.decode_bytes(data[: len(data) // 2])

    def test_decode_error_is_stagedit_error(self):
        from stagedit import StagEditError

        with pytest.raises(StagEditError):
            codec.decode_bytes(b"\x00" * 32)


class TestEncode:
    """Writing results."""

    def test_png_is_lossless(self, noise_buffer):
        data = codec.encode(noise_buffer, OutputFormat.PNG)
        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        assert codec.decode_bytes(data) == noise_buffer

    def test_jpeg_drops_alpha(self, noise_buffer):
        data = codec.encode(noise_buffer, OutputFormat.JPEG, quality=80)
        assert data[:3] == b"\xff\xd8\xff"
        with PIL.Image.open(io.BytesIO(data)) as handle:
            assert handle.mode == "RGB"
        decoded = codec.decode_bytes(data)
        assert decoded.size == (40, 30)
        assert np.all(decoded.pixels[:, :, 3] == 255)

    def test_jpeg_quality_changes_size(self, noise_buffer):
        low = codec.encode(noise_buffer, OutputFormat.JPEG, quality=5)
        high = codec.encode(noise_buffer, OutputFormat.JPEG, quality=95)
        assert len(low) < len(high)

    def test_format_given_as_string(self, noise_buffer):
        assert codec.encode(noise_buffer, "png")[:4] == b"\x89PNG"

    def test_save(self, tmp_path, noise_buffer):
        target = codec.save(noise_buffer, tmp_path / "out.png")
        assert target.exists()
        assert codec.decode_file(target) == noise_buffer


class TestWriteAtomic:
    """Targets are fully replaced or left untouched."""

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "out.bin"
        target.write_bytes(b"old")
        codec.write_atomic(b"new content", target)
        assert target.read_bytes() == b"new content"
        assert os.listdir(tmp_path) == ["out.bin"]

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "out.bin"
        codec.write_atomic(b"x", target)
        assert target.read_bytes() == b"x"

    def test_parent_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")
        with pytest.raises(EncodeError):
            codec.write_atomic(b"x", blocker / "out.bin")

    def test_target_is_directory_leaves_no_temp_file(self, tmp_path):
        target = tmp_path / "out.png"
        target.mkdir()
        with pytest.raises(EncodeError):
            codec.write_atomic(b"x", target)
        assert os.listdir(tmp_path) == ["out.png"]
        assert os.listdir(target) == []


class TestDataUrl:

    def test_data_url_round_trip(self, noise_buffer):
        url = codec.to_data_url(noise_buffer)
        prefix = "data:image/png;base64,"
        assert url.startswith(prefix)
        data = base64.b64decode(url[len(prefix):])
        assert codec.decode_bytes(data) == noise_buffer


class TestDecodeFailures:
    """Errors raised by Pillow plugins are reported as DecodeError."""

    @pytest.mark.parametrize("error", [EOFError("no more frames"), SyntaxError("bad header")])
    def test_plugin_errors(self, monkeypatch, source_png, error):
        def failing_load(self):
            raise error

        monkeypatch.setattr(PIL.ImageFile.ImageFile, "load", failing_load)
        with open(source_png, "rb") as f:
            data = f.read()
        with pytest.raises(DecodeError, match="Failed to open image"):
            codec.decode_bytes(data)
