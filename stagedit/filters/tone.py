"""Tone transforms: grayscale and brightness/contrast.

Both are pure per-pixel maps without neighborhood dependency. They operate
on the color channels only, alpha is never touched. The passed array is
modified in place and returned for convenience.

## Grayscale

Uses ITU-R BT.709 luminosity coefficients in integer arithmetic:
Y = (2126*R + 7152*G + 722*B) / 10000 (truncated)

## Brightness / Contrast

    factor = contrast + 1.0
    bias = round(brightness * 255)
    out = clamp((in - 128) * factor + 128 + bias, 0, 255)

Contrast scales around the 128 midpoint first, the brightness bias is added
afterwards. contrast=-1 flattens everything to mid-gray, brightness=0 and
contrast=0 is the identity.

Usage:
    from stagedit.filters.tone import grayscale, brightness_contrast

    grayscale(rgba_image)
    brightness_contrast(rgba_image, brightness=0.1, contrast=0.25)
"""
import numpy as np

from .utils import round_half_away, validate_rgba

LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.uint32)
"BT.709 luma weights scaled by 10000"


def grayscale(image: np.ndarray) -> np.ndarray:
    """Desaturate RGBA image in place (R=G=B=luma, alpha preserved).

    Args:
        image: RGBA uint8 array (H, W, 4)

    Returns:
        The same array, now gray
    """
    validate_rgba(image)
    luma = (image[:, :, 0:3].astype(np.uint32) @ LUMA_WEIGHTS) // 10000
    image[:, :, 0:3] = luma.astype(np.uint8)[:, :, np.newaxis]
    return image


def brightness_contrast(
    image: np.ndarray,
    brightness: float = 0.0,
    contrast: float = 0.0,
) -> np.ndarray:
    """Adjust brightness and contrast of RGBA image in place.

    Args:
        image: RGBA uint8 array (H, W, 4)
        brightness: -1.0 (black) to 1.0 (white), 0.0 = no change
        contrast: -1.0 (flat gray) to 1.0 (double spread), 0.0 = no change

    Returns:
        The same array, adjusted
    """
    validate_rgba(image)
    factor = contrast + 1.0
    bias = round_half_away(brightness * 255)
    color = image[:, :, 0:3].astype(np.float64)
    color = (color - 128.0) * factor + 128.0 + bias
    image[:, :, 0:3] = np.clip(color, 0.0, 255.0).astype(np.uint8)
    return image


__all__ = ['LUMA_WEIGHTS', 'grayscale', 'brightness_contrast']
