"""Entry points used by the editor host.

Each call is a single synchronous request: decode, run the pipeline,
encode. The service holds no state between requests apart from its
settings, so independent requests may run in parallel. Writing to the same
output path concurrently is the caller's responsibility.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import codec
from .buffer import PixelBuffer
from .config import Settings, settings as default_settings
from .models import ApplyRequest, ExportRequest, ImageInfo, OutputFormat
from .pipeline import run_pipeline
from .recent_files import RecentFiles

logger = logging.getLogger(__name__)


class EditorService:
    """Host facing operations: open, export, apply and recent files."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.recent_files = RecentFiles(
            self.settings.recent_files_path, max_entries=self.settings.MAX_RECENT_FILES
        )

    def open_image(self, path: str) -> ImageInfo:
        """Decode ``path`` and return its size and a PNG preview.

        Raises:
            DecodeError: If the image can not be read
        """
        buffer = codec.decode_file(path)
        return self._image_info(buffer)

    def export(self, request: ExportRequest) -> str:
        """Run the full pipeline and write the result to ``request.output_path``.

        Args:
            request: The export request

        Returns:
            The output path

        Raises:
            DecodeError: If the source can not be read
            EncodeError: If the result can not be encoded or written
        """
        source = codec.decode_file(request.source_path)
        result = run_pipeline(source, request)
        codec.save(result, request.output_path, request.output_format, request.jpeg_quality)
        logger.info(
            f"Exported {request.source_path} to {request.output_path} "
            f"({result.width}x{result.height} {request.output_format.value})"
        )
        return request.output_path

    def apply_preview(self, request: ApplyRequest) -> ImageInfo:
        """Run the pipeline, store the result in the applied slot and return it.

        The applied slot is a single PNG file which every call overwrites.

        Raises:
            DecodeError: If the source can not be read
            EncodeError: If the result can not be stored
        """
        source = codec.decode_file(request.source_path)
        result = run_pipeline(source, request)
        data = codec.encode(result, OutputFormat.PNG)
        codec.write_atomic(data, self.get_applied_path())
        logger.info(f"Applied edits to {request.source_path} ({result.width}x{result.height})")
        return ImageInfo(
            width=result.width, height=result.height, data_url=codec.png_data_url(data)
        )

    def get_applied_path(self) -> Path:
        """Location of the applied slot (it may not exist yet)."""
        return self.settings.applied_path

    def get_recent_files(self) -> list[str]:
        return self.recent_files.get()

    def set_recent_files(self, files: list[str]) -> None:
        self.recent_files.set(files)

    def add_recent_file(self, path: str) -> list[str]:
        return self.recent_files.add(path)

    @staticmethod
    def _image_info(buffer: PixelBuffer) -> ImageInfo:
        return ImageInfo(
            width=buffer.width, height=buffer.height, data_url=codec.to_data_url(buffer)
        )


__all__ = ["EditorService"]
