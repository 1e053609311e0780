"""
stagedit - Deterministic image edit pipeline: rotate, flip, tone, pixelate,
chroma key, crop and resize
"""

__version__ = "0.1.0"

from .buffer import PixelBuffer
from .exceptions import StagEditError, DecodeError, EncodeError
from .models import (
    ResizeMode,
    OutputFormat,
    CropRect,
    PixelateStroke,
    ChromaKeySettings,
    EditRequest,
    ExportRequest,
    ApplyRequest,
    ImageInfo,
)
from .pipeline import PipelineStage, PIPELINE_STAGES, active_stages, run_pipeline
from .service import EditorService

__all__ = [
    # Pixel data
    "PixelBuffer",
    # Errors
    "StagEditError",
    "DecodeError",
    "EncodeError",
    # Requests
    "ResizeMode",
    "OutputFormat",
    "CropRect",
    "PixelateStroke",
    "ChromaKeySettings",
    "EditRequest",
    "ExportRequest",
    "ApplyRequest",
    "ImageInfo",
    # Pipeline
    "PipelineStage",
    "PIPELINE_STAGES",
    "active_stages",
    "run_pipeline",
    # Host entry points
    "EditorService",
]
