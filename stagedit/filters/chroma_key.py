"""Chroma key background removal.

For every pixel the L1 (Manhattan) distance to the key color is computed:

    dist = |R - kR| + |G - kG| + |B - kB|
    tol = round(tolerance * 255)

- dist <= tol: alpha = 0
- tol < dist <= 2 * tol: alpha = alpha * (dist - tol) / tol (soft edge)
- otherwise alpha is kept

The soft edge only ever attenuates alpha. Color channels are never changed.
A tolerance of 0 keys exact matches only and has no soft band.
"""
import numpy as np

from .utils import round_half_away, validate_rgba


def chroma_key(
    image: np.ndarray,
    color: tuple[int, int, int],
    tolerance: float,
) -> np.ndarray:
    """Make pixels close to ``color`` transparent, in place.

    Args:
        image: RGBA uint8 array (H, W, 4)
        color: Key color (r, g, b), 0-255 each
        tolerance: 0.0 (exact match) to 1.0

    Returns:
        The same array with adjusted alpha channel
    """
    validate_rgba(image)
    tolerance = min(max(float(tolerance), 0.0), 1.0)
    tol = round_half_away(tolerance * 255)
    key = np.asarray(color, dtype=np.int32)
    dist = np.abs(image[:, :, 0:3].astype(np.int32) - key).sum(axis=2)
    alpha = image[:, :, 3]
    if tol == 0:
        alpha[dist == 0] = 0
        return image
    band = (dist > tol) & (dist <= 2 * tol)
    # integer math keeps alpha * (dist - tol) / tol exact before truncation
    softened = alpha[band].astype(np.int32) * (dist[band] - tol) // tol
    alpha[band] = np.clip(softened, 0, 255).astype(np.uint8)
    alpha[dist <= tol] = 0
    return image


__all__ = ['chroma_key']
