"""Local pixelation along freeform strokes.

A stroke is a list of normalized sample points plus a normalized radius
(fraction of the longer image side). Around each sample point the square
[cx - r, cx + r) x [cy - r, cy + r), clamped to the image, is partitioned
into blocks of ``block_size`` starting at the square's top-left corner.
Every block is replaced by the truncated integer mean of its RGBA values.

The affected area is the clamped square, not a circle. Points are applied
strictly in order on the already modified buffer, so overlapping points
re-average previously pixelated data.
"""
from typing import Iterable, Sequence

import numpy as np

from .utils import round_half_away, saturate, validate_rgba

MIN_BLOCK_SIZE = 4
"Smallest block size, smaller requests are raised to this value"


def pixelate_region(
    image: np.ndarray,
    cx: int,
    cy: int,
    radius: int,
    block_size: int,
) -> np.ndarray:
    """Block-average the square around (cx, cy) in place.

    Args:
        image: RGBA uint8 array (H, W, 4)
        cx: Center x in pixels (may lie outside the image)
        cy: Center y in pixels (may lie outside the image)
        radius: Half side length of the square in pixels
        block_size: Block side length, at least :data:`MIN_BLOCK_SIZE`

    Returns:
        The same array
    """
    validate_rgba(image)
    height, width = image.shape[:2]
    block_size = max(MIN_BLOCK_SIZE, int(block_size))
    x1, y1 = max(cx - radius, 0), max(cy - radius, 0)
    x2, y2 = min(cx + radius, width), min(cy + radius, height)
    for by in range(y1, y2, block_size):
        by2 = min(by + block_size, y2)
        for bx in range(x1, x2, block_size):
            bx2 = min(bx + block_size, x2)
            block = image[by:by2, bx:bx2]
            count = block.shape[0] * block.shape[1]
            mean = block.reshape(-1, 4).sum(axis=0, dtype=np.uint64) // count
            block[:, :] = mean.astype(np.uint8)
    return image


def pixelate_points(
    image: np.ndarray,
    points: Iterable[Sequence[float]],
    radius: float,
    block_size: int,
) -> np.ndarray:
    """Pixelate around each normalized point of a single stroke.

    Args:
        image: RGBA uint8 array (H, W, 4)
        points: Normalized (x, y) sample points, 0.0 - 1.0
        radius: Normalized radius, fraction of max(width, height)
        block_size: Block side length in pixels

    Returns:
        The same array
    """
    height, width = image.shape[:2]
    pixel_radius = round_half_away(radius * max(width, height))
    for nx, ny in points:
        cx, cy = int(saturate(nx * width)), int(saturate(ny * height))
        pixelate_region(image, cx, cy, pixel_radius, block_size)
    return image


def pixelate_strokes(image: np.ndarray, strokes, block_size: int) -> np.ndarray:
    """Apply all strokes in order.

    Args:
        image: RGBA uint8 array (H, W, 4)
        strokes: Objects with ``points`` and ``radius`` attributes
        block_size: Block side length in pixels

    Returns:
        The same array
    """
    for stroke in strokes:
        pixelate_points(image, stroke.points, stroke.radius, block_size)
    return image


__all__ = ['MIN_BLOCK_SIZE', 'pixelate_region', 'pixelate_points', 'pixelate_strokes']
