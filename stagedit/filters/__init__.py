# stagedit Filters
"""
Pixel-level transform steps of the edit pipeline.

Every function operates on RGBA uint8 numpy arrays of shape (H, W, 4):

- geometric: rotation, flips, crop, resize (return new arrays)
- tone: grayscale, brightness/contrast (in place)
- pixelate: block averaging along strokes (in place)
- chroma_key: alpha suppression near a key color (in place)
"""

from .chroma_key import chroma_key
from .geometric import (
    compute_crop_box,
    crop,
    flip_horizontal,
    flip_vertical,
    normalize_rotation,
    resize_exact,
    rotate,
    scale_then_crop,
)
from .pixelate import MIN_BLOCK_SIZE, pixelate_points, pixelate_region, pixelate_strokes
from .tone import brightness_contrast, grayscale

__all__ = [
    # Geometric
    'normalize_rotation',
    'rotate',
    'flip_horizontal',
    'flip_vertical',
    'compute_crop_box',
    'crop',
    'resize_exact',
    'scale_then_crop',
    # Tone
    'grayscale',
    'brightness_contrast',
    # Pixelation
    'MIN_BLOCK_SIZE',
    'pixelate_region',
    'pixelate_points',
    'pixelate_strokes',
    # Chroma key
    'chroma_key',
]
