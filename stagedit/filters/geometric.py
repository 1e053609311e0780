"""Geometric transforms: quadrant rotation, mirroring, crop and resize.

All functions take an RGBA uint8 array (H, W, 4) and return a new array,
the input is never modified.

## Rotation Direction

All rotations are clockwise (CW):
- 90° CW: (W, H) -> (H, W), dimensions swapped
- 180°: dimensions unchanged
- 270° CW (90° CCW): dimensions swapped

Any integer angle is first reduced modulo 360. Values which do not land on
a quadrant (0, 90, 180, 270) leave the image untouched.

## Crop

Crop rectangles are normalized (0.0 - 1.0) relative to the size of the
image at the time the crop is applied. Out-of-range rectangles are clamped
to the largest valid region, cropping never fails.

Usage:
    from stagedit.filters.geometric import rotate, scale_then_crop

    rotated = rotate(image, -90)  # same as rotate(image, 270)
    thumb = scale_then_crop(image, 256, 256)  # cover-fit + center crop
"""
import numpy as np
import PIL.Image

from .utils import round_half_away, validate_rgba

RESAMPLE_FILTER = PIL.Image.Resampling.LANCZOS
"Resampling filter used for all resize operations"


# ============================================================================
# Rotation and mirroring
# ============================================================================

def normalize_rotation(degrees: int) -> int:
    """Map a rotation angle onto 0, 90, 180 or 270.

    Negative and overflowing quadrant angles are reduced modulo 360, e.g.
    -90 -> 270 and 450 -> 90. Angles which are no multiple of 90 map to 0.

    Args:
        degrees: Clockwise rotation angle in degrees

    Returns:
        The normalized angle
    """
    degrees = int(degrees) % 360
    return degrees if degrees in (90, 180, 270) else 0


def rotate(image: np.ndarray, degrees: int) -> np.ndarray:
    """Rotate image clockwise by a multiple of 90 degrees.

    Args:
        image: RGBA uint8 array (H, W, 4)
        degrees: Rotation angle, normalized via :func:`normalize_rotation`

    Returns:
        Rotated uint8 array. For 90/270, dimensions are swapped.
    """
    validate_rgba(image)
    quarter_turns = normalize_rotation(degrees) // 90
    # np.rot90 turns counter-clockwise for positive k
    return np.ascontiguousarray(np.rot90(image, k=-quarter_turns))


def flip_horizontal(image: np.ndarray) -> np.ndarray:
    """Flip image horizontally (mirror left-right).

    Args:
        image: RGBA uint8 array (H, W, 4)

    Returns:
        Flipped uint8 array (H, W, 4) - same dimensions
    """
    validate_rgba(image)
    return np.ascontiguousarray(image[:, ::-1])


def flip_vertical(image: np.ndarray) -> np.ndarray:
    """Flip image vertically (mirror top-bottom).

    Args:
        image: RGBA uint8 array (H, W, 4)

    Returns:
        Flipped uint8 array (H, W, 4) - same dimensions
    """
    validate_rgba(image)
    return np.ascontiguousarray(image[::-1, :])


# ============================================================================
# Crop
# ============================================================================

def compute_crop_box(
    x: float,
    y: float,
    width: float,
    height: float,
    image_width: int,
    image_height: int,
) -> tuple[int, int, int, int]:
    """Convert a normalized rectangle to a clamped pixel rectangle.

    Args:
        x: Left edge, 0.0 - 1.0
        y: Top edge, 0.0 - 1.0
        width: Width, 0.0 - 1.0
        height: Height, 0.0 - 1.0
        image_width: Current image width in pixels
        image_height: Current image height in pixels

    Returns:
        Tuple (x, y, width, height) in pixels. Width and height are at
        least 1 and the rectangle lies fully within the image.
    """
    cx = max(0, round_half_away(x * image_width))
    cy = max(0, round_half_away(y * image_height))
    cw = max(1, round_half_away(width * image_width))
    ch = max(1, round_half_away(height * image_height))
    cx = min(cx, image_width - 1)
    cy = min(cy, image_height - 1)
    cw = min(cw, image_width - cx)
    ch = min(ch, image_height - cy)
    return cx, cy, cw, ch


def crop(image: np.ndarray, x: float, y: float, width: float, height: float) -> np.ndarray:
    """Crop image to a normalized rectangle.

    Args:
        image: RGBA uint8 array (H, W, 4)
        x: Left edge, 0.0 - 1.0
        y: Top edge, 0.0 - 1.0
        width: Width, 0.0 - 1.0
        height: Height, 0.0 - 1.0

    Returns:
        Cropped uint8 array, at least 1x1 pixels
    """
    validate_rgba(image)
    ih, iw = image.shape[:2]
    cx, cy, cw, ch = compute_crop_box(x, y, width, height, iw, ih)
    return image[cy:cy + ch, cx:cx + cw].copy()


# ============================================================================
# Resize
# ============================================================================

def resize_exact(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resample image to exactly the given size (aspect ratio not kept).

    Color and alpha are resampled independently without premultiplying,
    fully transparent pixels keep their color.

    Args:
        image: RGBA uint8 array (H, W, 4)
        width: Target width in pixels (>= 1)
        height: Target height in pixels (>= 1)

    Returns:
        Resized uint8 array (height, width, 4)
    """
    validate_rgba(image)
    width, height = max(1, int(width)), max(1, int(height))
    if image.shape[1] == width and image.shape[0] == height:
        return image.copy()
    color = PIL.Image.fromarray(np.ascontiguousarray(image[:, :, 0:3]))
    alpha = PIL.Image.fromarray(np.ascontiguousarray(image[:, :, 3]))
    result = np.empty((height, width, 4), dtype=np.uint8)
    result[:, :, 0:3] = np.asarray(color.resize((width, height), resample=RESAMPLE_FILTER))
    result[:, :, 3] = np.asarray(alpha.resize((width, height), resample=RESAMPLE_FILTER))
    return result


def scale_then_crop(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Scale uniformly to cover the target size, then center-crop to it.

    The scale factor is the larger of both axis ratios so no letterbox
    bars are ever added.

    Args:
        image: RGBA uint8 array (H, W, 4)
        width: Target width in pixels (>= 1)
        height: Target height in pixels (>= 1)

    Returns:
        uint8 array of (height, width, 4)
    """
    validate_rgba(image)
    ih, iw = image.shape[:2]
    scale = max(width / iw, height / ih)
    sw = max(1, round_half_away(iw * scale))
    sh = max(1, round_half_away(ih * scale))
    scaled = resize_exact(image, sw, sh)
    ox = max(0, sw - width) // 2
    oy = max(0, sh - height) // 2
    return scaled[oy:oy + min(height, sh), ox:ox + min(width, sw)].copy()


__all__ = [
    'RESAMPLE_FILTER',
    'normalize_rotation', 'rotate', 'flip_horizontal', 'flip_vertical',
    'compute_crop_box', 'crop',
    'resize_exact', 'scale_then_crop',
]
