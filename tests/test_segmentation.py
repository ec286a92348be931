import numpy as np
import pytest

from marker_reader.raster import RasterImage
from marker_reader.segmentation import luminance, segment

from conftest import BLACK, WHITE


def test_white_becomes_black():
    img = RasterImage.filled(5, 5, WHITE)
    segment(img, 150)
    assert img == RasterImage.filled(5, 5, BLACK)


def test_black_becomes_white():
    img = RasterImage.filled(5, 5, BLACK)
    segment(img, 150)
    assert img == RasterImage.filled(5, 5, WHITE)


@pytest.mark.parametrize(
    "rgb, expected",
    [((255, 0, 0), 54), ((0, 255, 0), 182), ((0, 0, 255), 18), ((0, 0, 0), 0)],
)
def test_luminance_is_truncated(rgb, expected):
    img = RasterImage.filled(1, 1, rgb)
    assert luminance(img).tolist() == [expected]


def test_cutoff_is_strict():
    # 0.7152 * 210 = 150.19 -> 150
    img = RasterImage.filled(1, 1, (0, 210, 0))
    segment(img, 150)
    assert img.pixel(0, 0) == WHITE

    img = RasterImage.filled(1, 1, (0, 210, 0))
    segment(img, 149)
    assert img.pixel(0, 0) == BLACK


def test_output_is_binary_and_gray(random_image):
    segment(random_image)
    assert set(np.unique(random_image.red).tolist()) <= {0, 255}
    assert np.array_equal(random_image.red, random_image.green)
    assert np.array_equal(random_image.red, random_image.blue)


def test_resegmenting_swaps_binary_levels(random_image):
    once = random_image.clone()
    segment(once)
    twice = once.clone()
    segment(twice)
    assert np.array_equal(twice.red, 255 - once.red)

    thrice = twice.clone()
    segment(thrice)
    assert thrice == once
