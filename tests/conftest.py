"""
Pytest fixtures for stagedit tests
"""

import numpy as np
import PIL.Image
import pytest

from stagedit import PixelBuffer
from stagedit.config import Settings


@pytest.fixture
def test_image() -> PixelBuffer:
    """Create a 4x3 test image with unique colors at each position.

    Layout (row, col):
        (0,0)=Red     (0,1)=Green   (0,2)=Blue    (0,3)=White
        (1,0)=Yellow  (1,1)=Cyan    (1,2)=Magenta (1,3)=Gray
        (2,0)=Orange  (2,1)=Purple  (2,2)=Pink    (2,3)=Black
    """
    pixels = np.array([
        [[255, 0, 0], [0, 255, 0], [0, 0, 255], [255, 255, 255]],     # Row 0
        [[255, 255, 0], [0, 255, 255], [255, 0, 255], [128, 128, 128]],  # Row 1
        [[255, 128, 0], [128, 0, 255], [255, 192, 203], [0, 0, 0]],    # Row 2
    ], dtype=np.uint8)
    return PixelBuffer(pixels)


@pytest.fixture
def noise_pixels() -> np.ndarray:
    """Reproducible random RGBA image, 40x30."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(30, 40, 4), dtype=np.uint8)


@pytest.fixture
def source_png(tmp_path, noise_pixels) -> str:
    """The noise image stored as PNG file."""
    path = tmp_path / "source.png"
    PIL.Image.fromarray(noise_pixels).save(path, format="png")
    return str(path)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with a private data directory."""
    return Settings(DATA_DIR=tmp_path / "data")
