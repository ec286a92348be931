import numpy as np
import pytest

from marker_reader.raster import RasterImage


def test_blank_is_zeroed_with_flat_channels():
    img = RasterImage.blank(4, 3)
    assert img.size == 12
    for channel in (img.red, img.green, img.blue):
        assert channel.dtype == np.uint8
        assert channel.shape == (12,)
        assert not channel.any()


def test_pixel_index_is_row_major():
    img = RasterImage.blank(4, 3)
    img.set_pixel(1, 2, (10, 20, 30))
    assert img.index(1, 2) == 9
    assert (img.red[9], img.green[9], img.blue[9]) == (10, 20, 30)
    assert img.pixel(1, 2) == (10, 20, 30)


def test_index_outside_raster_raises():
    img = RasterImage.blank(4, 3)
    with pytest.raises(IndexError):
        img.index(4, 0)


def test_channel_length_mismatch_rejected():
    with pytest.raises(ValueError):
        RasterImage(
            width=2,
            height=2,
            red=np.zeros(4, dtype=np.uint8),
            green=np.zeros(3, dtype=np.uint8),
            blue=np.zeros(4, dtype=np.uint8),
        )


def test_zero_dimension_rejected():
    with pytest.raises(ValueError):
        RasterImage.blank(0, 5)


def test_clone_does_not_share_buffers(random_image):
    copy = random_image.clone()
    assert copy == random_image
    for name in ("red", "green", "blue"):
        assert not np.shares_memory(getattr(copy, name), getattr(random_image, name))
    copy.red[0] = copy.red[0] ^ 0xFF
    assert copy != random_image


def test_rgb_array_conversion(random_image):
    arr = random_image.to_rgb_array()
    assert arr.shape == (12, 9, 3)
    assert arr[2, 5].tolist() == list(random_image.pixel(5, 2))
    assert RasterImage.from_rgb_array(arr) == random_image


def test_interior_skips_first_and_last_rows():
    img = RasterImage.blank(5, 4)
    assert img.interior == slice(5, 15)
    assert RasterImage.blank(5, 2).interior == slice(5, 5)
