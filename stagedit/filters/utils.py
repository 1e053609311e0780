"""Shared helpers for the pixel filters."""
import math

import numpy as np


PIXEL_LIMIT = 2 ** 31 - 1
"Largest magnitude a pixel coordinate or distance saturates to"


def saturate(value: float) -> float:
    """Clamp ``value`` to +/- :data:`PIXEL_LIMIT`, NaN becomes 0.

    Args:
        value: Any float, including infinities

    Returns:
        A finite float safe to convert to int
    """
    if math.isnan(value):
        return 0.0
    return min(max(value, -PIXEL_LIMIT), PIXEL_LIMIT)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` rounds halves to even which would shift
    crop boxes and radii by a pixel for exact .5 inputs. Non-finite values
    saturate via :func:`saturate`.

    Args:
        value: The value to round

    Returns:
        The rounded integer
    """
    value = saturate(value)
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def validate_rgba(image: np.ndarray) -> None:
    """Ensure ``image`` is an RGBA uint8 array (H, W, 4).

    Raises:
        ValueError: If shape or dtype do not match
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected RGBA image (H, W, 4), got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected uint8 dtype, got {image.dtype}")


__all__ = ['PIXEL_LIMIT', 'saturate', 'round_half_away', 'validate_rgba']
