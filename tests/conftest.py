import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from marker_reader.raster import RasterImage


WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREEN = (0, 255, 0)


def make_disc_image(width=40, height=40, center=(20, 20), radius=6):
    """White plot background with one solid black marker."""
    img = RasterImage.filled(width, height, WHITE)
    cx, cy = center
    ys, xs = np.mgrid[0:height, 0:width]
    inside = ((xs - cx) ** 2 + (ys - cy) ** 2 <= radius ** 2).reshape(-1)
    img.red[inside] = 0
    img.green[inside] = 0
    img.blue[inside] = 0
    return img


@pytest.fixture
def disc_image():
    return make_disc_image()


@pytest.fixture
def random_image():
    rng = np.random.default_rng(1234)
    return RasterImage.from_rgb_array(rng.integers(0, 256, size=(12, 9, 3), dtype=np.uint8))
