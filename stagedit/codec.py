"""
Decoding of source images and encoding of pipeline results.

These are the only operations of a request which touch the file system and
therefore the only ones which can fail. Failures are reported as
:class:`~stagedit.exceptions.DecodeError` or
:class:`~stagedit.exceptions.EncodeError`.
"""

from __future__ import annotations

import base64
import io
import logging
import os
import tempfile
from pathlib import Path

import PIL.Image
import filetype

from .buffer import PixelBuffer
from .exceptions import DecodeError, EncodeError
from .models import OutputFormat

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = {
    "image/png",
    "image/jpeg",
    "image/bmp",
    "image/gif",
    "image/webp",
    "image/tiff",
}
"MIME types accepted as source images"


def decode_bytes(data: bytes) -> PixelBuffer:
    """
    Decodes compressed image data into an RGBA buffer

    :param data: The file's content
    :return: The decoded buffer
    :raises DecodeError: If the data is no supported, intact image
    """
    kind = filetype.guess(data)
    if kind is None or kind.mime not in SUPPORTED_MIME_TYPES:
        mime = kind.mime if kind is not None else "unknown"
        raise DecodeError(f"Failed to open image: unsupported format ({mime})")
    try:
        with PIL.Image.open(io.BytesIO(data)) as handle:
            handle.load()
            return PixelBuffer.from_pil(handle)
    except (
        PIL.UnidentifiedImageError,
        PIL.Image.DecompressionBombError,
        OSError,
        EOFError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"Failed to open image: {e}") from e


def decode_file(path: str | os.PathLike) -> PixelBuffer:
    """
    Loads and decodes an image file

    :param path: The source file
    :return: The decoded buffer
    :raises DecodeError: If the file is missing, unreadable or damaged
    """
    try:
        with open(path, "rb") as source_file:
            data = source_file.read()
    except OSError as e:
        raise DecodeError(f"Failed to open image: {e}") from e
    return decode_bytes(data)


def encode(
    buffer: PixelBuffer,
    output_format: OutputFormat = OutputFormat.PNG,
    quality: int = 90,
) -> bytes:
    """
    Compresses the buffer

    PNG stores all four channels losslessly. JPEG drops the alpha channel
    (without compositing onto a background) and uses the given quality.

    :param buffer: The pixel data
    :param output_format: The target format
    :param quality: JPEG quality between 0 and 100
    :return: The encoded file content
    :raises EncodeError: If the encoder fails
    """
    output_format = OutputFormat(output_format)
    handle = buffer.to_pil()
    output_stream = io.BytesIO()
    try:
        if output_format == OutputFormat.JPEG:
            handle.convert("RGB").save(
                output_stream, format="jpeg", quality=min(max(int(quality), 0), 100)
            )
        else:
            handle.save(output_stream, format="png")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode image: {e}") from e
    return output_stream.getvalue()


def write_atomic(data: bytes, target: str | os.PathLike) -> Path:
    """
    Writes data to ``target`` via a temporary sibling file

    The target is either fully replaced or left untouched.

    :param data: The file content
    :param target: The destination path
    :return: The destination as Path
    :raises EncodeError: If the destination is not writable
    """
    target = Path(target)
    temp_name = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as temp_file:
            temp_name = temp_file.name
            temp_file.write(data)
        os.replace(temp_name, target)
        temp_name = None
    except OSError as e:
        raise EncodeError(str(e)) from e
    finally:
        if temp_name is not None and os.path.exists(temp_name):
            os.remove(temp_name)
    return target


def save(
    buffer: PixelBuffer,
    target: str | os.PathLike,
    output_format: OutputFormat = OutputFormat.PNG,
    quality: int = 90,
) -> Path:
    """
    Encodes the buffer and writes it to disk

    :param buffer: The pixel data
    :param target: The destination path
    :param output_format: The target format
    :param quality: JPEG quality between 0 and 100
    :return: The destination as Path
    :raises EncodeError: On encoder or file system errors
    """
    data = encode(buffer, output_format, quality)
    path = write_atomic(data, target)
    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return path


def png_data_url(data: bytes) -> str:
    """
    Wraps already encoded PNG data into a data URL

    :param data: PNG file content
    :return: Data URL string 'data:image/png;base64,...'
    """
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def to_data_url(buffer: PixelBuffer) -> str:
    """
    Encodes the buffer as PNG data URL for inline display

    :param buffer: The pixel data
    :return: Data URL string 'data:image/png;base64,...'
    """
    return png_data_url(encode(buffer, OutputFormat.PNG))


__all__ = [
    "SUPPORTED_MIME_TYPES",
    "decode_bytes",
    "decode_file",
    "encode",
    "write_atomic",
    "save",
    "png_data_url",
    "to_data_url",
]
