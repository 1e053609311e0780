# stagedit - Pipeline
"""
The edit pipeline: a fixed, ordered list of named stages.

The order is part of the contract. Rotation and flips define the coordinate
space in which the normalized stroke and crop coordinates are interpreted,
so reordering stages changes the result:

1. rotate
2. flip (horizontal, then vertical)
3. grayscale
4. brightness_contrast
5. pixelate
6. chroma_key
7. crop
8. resize

Each stage only runs if the request carries a non-default value for it.
The source buffer is never modified, the pipeline works on a private copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .buffer import PixelBuffer
from .filters import (
    brightness_contrast,
    chroma_key,
    crop,
    flip_horizontal,
    flip_vertical,
    grayscale,
    normalize_rotation,
    pixelate_strokes,
    resize_exact,
    rotate,
    scale_then_crop,
)
from .models import EditRequest, ResizeMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineStage:
    """A named pipeline step.

    ``is_active`` decides from the request and the current buffer whether
    the step runs, ``apply`` maps the pixel array to its result (which may
    be the same, modified array).
    """

    name: str
    is_active: Callable[[EditRequest, np.ndarray], bool]
    apply: Callable[[EditRequest, np.ndarray], np.ndarray]


def _flip(request: EditRequest, pixels: np.ndarray) -> np.ndarray:
    if request.flip_h:
        pixels = flip_horizontal(pixels)
    if request.flip_v:
        pixels = flip_vertical(pixels)
    return pixels


def _resize_active(request: EditRequest, pixels: np.ndarray) -> bool:
    if request.target_width <= 0 or request.target_height <= 0:
        return False
    if request.skip_unchanged_resize:
        height, width = pixels.shape[:2]
        return (request.target_width, request.target_height) != (width, height)
    return True


def _resize(request: EditRequest, pixels: np.ndarray) -> np.ndarray:
    if request.mode == ResizeMode.SCALE_THEN_CROP:
        return scale_then_crop(pixels, request.target_width, request.target_height)
    return resize_exact(pixels, request.target_width, request.target_height)


PIPELINE_STAGES: tuple[PipelineStage, ...] = (
    PipelineStage(
        'rotate',
        lambda r, _: normalize_rotation(r.rotation) != 0,
        lambda r, px: rotate(px, r.rotation),
    ),
    PipelineStage(
        'flip',
        lambda r, _: r.flip_h or r.flip_v,
        _flip,
    ),
    PipelineStage(
        'grayscale',
        lambda r, _: r.grayscale,
        lambda r, px: grayscale(px),
    ),
    PipelineStage(
        'brightness_contrast',
        lambda r, _: r.brightness != 0.0 or r.contrast != 0.0,
        lambda r, px: brightness_contrast(px, r.brightness, r.contrast),
    ),
    PipelineStage(
        'pixelate',
        lambda r, _: len(r.pixelate_strokes) > 0,
        lambda r, px: pixelate_strokes(px, r.pixelate_strokes, r.pixelate_block_size),
    ),
    PipelineStage(
        'chroma_key',
        lambda r, _: r.chroma_key_enabled,
        lambda r, px: chroma_key(px, r.bg_removal.color, r.bg_removal.tolerance),
    ),
    PipelineStage(
        'crop',
        lambda r, _: r.crop is not None,
        lambda r, px: crop(px, r.crop.x, r.crop.y, r.crop.width, r.crop.height),
    ),
    PipelineStage(
        'resize',
        _resize_active,
        _resize,
    ),
)
"All stages in execution order"


def active_stages(request: EditRequest, source: PixelBuffer) -> list[str]:
    """
    Returns the names of the stages which run for a request, in order

    Resizing depends on the size reached before it, so the geometric
    stages are evaluated on a shape-only stand-in.

    :param request: The edit request
    :param source: The source image
    :return: The stage names
    """
    names = []
    pixels = np.zeros_like(source.pixels)
    for stage in PIPELINE_STAGES:
        if stage.is_active(request, pixels):
            names.append(stage.name)
            if stage.name in ('rotate', 'crop', 'resize'):
                pixels = stage.apply(request, pixels)
    return names


def run_pipeline(source: PixelBuffer, request: EditRequest) -> PixelBuffer:
    """
    Applies all active stages of ``request`` to a copy of ``source``

    :param source: The decoded source image, left untouched
    :param request: The edit request
    :return: The resulting buffer
    """
    pixels = source.pixels.copy()
    for stage in PIPELINE_STAGES:
        if not stage.is_active(request, pixels):
            continue
        pixels = stage.apply(request, pixels)
        logger.debug(f"Stage {stage.name}: {pixels.shape[1]}x{pixels.shape[0]}")
    return PixelBuffer(pixels)


__all__ = ['PipelineStage', 'PIPELINE_STAGES', 'active_stages', 'run_pipeline']
