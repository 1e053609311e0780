"""Request and response models of the edit pipeline.

Requests are immutable, request-scoped value objects mirroring the JSON
payloads sent by the editor frontend. Out-of-range values are clamped or
mapped to a sensible default rather than rejected. Only non-finite numbers
(infinity, NaN) fail validation.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ResizeMode(str, Enum):
    """How the output is fitted to the target size."""

    EXACT = "exact"  # anisotropic stretch
    SCALE_THEN_CROP = "scale_then_crop"  # cover-fit + center crop


class OutputFormat(str, Enum):
    """Encoding of exported images."""

    PNG = "png"
    JPEG = "jpeg"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore', allow_inf_nan=False)


class CropRect(_FrozenModel):
    """Normalized crop rectangle, relative to the image size at crop time."""

    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0


class PixelateStroke(_FrozenModel):
    """A freeform pixelation stroke.

    ``points`` are normalized (x, y) samples, ``radius`` is a fraction of
    the longer image side.
    """

    points: tuple[tuple[float, float], ...] = ()
    radius: float = 0.02


class ChromaKeySettings(_FrozenModel):
    """Background removal settings."""

    enabled: bool = False
    color: tuple[int, int, int] = (0, 255, 0)
    tolerance: float = 0.2

    @field_validator('color', mode='after')
    @classmethod
    def _clamp_color(cls, value: tuple[int, int, int]) -> tuple[int, int, int]:
        return tuple(min(max(int(c), 0), 255) for c in value)

    @field_validator('tolerance', mode='after')
    @classmethod
    def _clamp_tolerance(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


class EditRequest(_FrozenModel):
    """Edit parameters shared by export and apply requests."""

    # Only resize if the target differs from the current size
    skip_unchanged_resize: ClassVar[bool] = False

    source_path: str
    crop: CropRect | None = None
    rotation: int = 0
    flip_h: bool = False
    flip_v: bool = False
    grayscale: bool = False
    brightness: float = 0.0
    contrast: float = 0.0
    pixelate_strokes: tuple[PixelateStroke, ...] = ()
    pixelate_block_size: int = 8
    bg_removal: ChromaKeySettings | None = None
    target_width: int = 0
    target_height: int = 0
    mode: ResizeMode = ResizeMode.EXACT

    @field_validator('mode', mode='before')
    @classmethod
    def _unknown_mode_is_exact(cls, value: Any) -> Any:
        if isinstance(value, ResizeMode):
            return value
        if isinstance(value, str) and value.lower() == ResizeMode.SCALE_THEN_CROP.value:
            return ResizeMode.SCALE_THEN_CROP
        return ResizeMode.EXACT

    @property
    def chroma_key_enabled(self) -> bool:
        """True if background removal is requested."""
        return self.bg_removal is not None and self.bg_removal.enabled


class ExportRequest(EditRequest):
    """Full edit written to a user chosen file."""

    output_path: str
    output_format: OutputFormat = OutputFormat.PNG
    jpeg_quality: int = 90

    @field_validator('output_format', mode='before')
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        if isinstance(value, OutputFormat):
            return value
        if isinstance(value, str) and value.lower() in ('jpeg', 'jpg'):
            return OutputFormat.JPEG
        return OutputFormat.PNG

    @field_validator('jpeg_quality', mode='after')
    @classmethod
    def _clamp_quality(cls, value: int) -> int:
        return min(max(value, 0), 100)


class ApplyRequest(EditRequest):
    """Edit applied to the preview slot, resized via resize_width/height.

    The preview is always resized exactly, a requested ``mode`` is ignored.
    """

    skip_unchanged_resize: ClassVar[bool] = True

    target_width: int = Field(
        default=0, validation_alias=AliasChoices('resize_width', 'target_width')
    )
    target_height: int = Field(
        default=0, validation_alias=AliasChoices('resize_height', 'target_height')
    )

    @field_validator('mode', mode='after')
    @classmethod
    def _exact_only(cls, value: ResizeMode) -> ResizeMode:
        return ResizeMode.EXACT


class ImageInfo(BaseModel):
    """Size and inline PNG preview of an image."""

    width: int
    height: int
    data_url: str


__all__ = [
    'ResizeMode',
    'OutputFormat',
    'CropRect',
    'PixelateStroke',
    'ChromaKeySettings',
    'EditRequest',
    'ExportRequest',
    'ApplyRequest',
    'ImageInfo',
]
