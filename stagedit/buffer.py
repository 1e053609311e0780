"""
Implements the class :class:`.PixelBuffer`, the in-memory RGBA raster every
pipeline stage reads from and writes to.
"""

from __future__ import annotations

import PIL.Image
import numpy as np


class PixelBuffer:
    """
    An owned, mutable grid of RGBA samples.

    The samples are stored as C-contiguous numpy array of shape
    (height, width, 4) and dtype uint8, i.e. row-major with one
    (R, G, B, A) tuple per pixel. Tone, pixelation and chroma key stages
    modify :attr:`pixels` in place, geometric stages replace the buffer.
    """

    def __init__(self, pixels: np.ndarray, copy: bool = False):
        """
        :param pixels: The pixel data. Gray (H, W) or (H, W, 1) and RGB
            (H, W, 3) arrays are expanded to RGBA with an opaque alpha
            channel. RGBA arrays are referenced directly unless ``copy``
            is set.
        :param copy: Defines if an RGBA source shall be copied

        Raises a ValueError if the data is no uint8 image or has no area.
        """
        if not isinstance(pixels, np.ndarray) or pixels.dtype != np.uint8:
            raise ValueError("Pixel data has to be provided as uint8 numpy array")
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3 or pixels.shape[2] not in (1, 3, 4):
            raise ValueError(f"Unsupported pixel data shape {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Pixel buffers need a width and height of at least 1")
        channels = pixels.shape[2]
        if channels == 4:
            pixels = pixels.copy() if copy else np.ascontiguousarray(pixels)
        else:
            rgba = np.empty(pixels.shape[:2] + (4,), dtype=np.uint8)
            rgba[:, :, 0:3] = pixels if channels == 3 else pixels[:, :, 0:1]
            rgba[:, :, 3] = 255
            pixels = rgba
        self.pixels: np.ndarray = pixels
        "The RGBA sample array (height, width, 4)"

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> PixelBuffer:
        """
        Creates a buffer owning a copy of the given array

        :param pixels: Gray, RGB or RGBA uint8 data
        :return: The new buffer
        """
        return cls(pixels, copy=True)

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> PixelBuffer:
        """
        Creates a buffer from a PIL image of any mode

        :param image: The PIL image
        :return: The buffer in RGBA
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def new(cls, width: int, height: int, color=(0, 0, 0, 255)) -> PixelBuffer:
        """
        Creates a buffer filled with a single color

        :param width: The width in pixels
        :param height: The height in pixels
        :param color: The RGBA fill color
        :return: The new buffer
        """
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @property
    def width(self) -> int:
        """The width in pixels"""
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        """The height in pixels"""
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """
        Returns the buffer's size in pixels

        :return: The size as tuple (width, height)
        """
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """
        Returns a single pixel

        :param x: The x coordinate, 0 <= x < width
        :param y: The y coordinate, 0 <= y < height
        :return: The RGBA tuple
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height}")
        return tuple(int(v) for v in self.pixels[y, x])

    def copy(self) -> PixelBuffer:
        """
        Creates an independent copy of this buffer

        :return: The copy
        """
        return PixelBuffer(self.pixels, copy=True)

    def to_pil(self) -> PIL.Image.Image:
        """
        Converts the buffer to an RGBA PIL image (copying the data)

        :return: The PIL image
        """
        return PIL.Image.fromarray(self.pixels)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    def __str__(self):
        return f"PixelBuffer ({self.width}x{self.height} RGBA)"

    __repr__ = __str__


__all__ = ["PixelBuffer"]
