import numpy as np

from marker_reader.edge_detection import detect_edges, gradient_sign
from marker_reader.raster import RasterImage
from marker_reader.segmentation import segment

from conftest import BLACK, GREEN, WHITE

BLUE = (0, 0, 255)


def test_flat_image_has_no_edges():
    img = RasterImage.filled(5, 5, BLACK)
    detect_edges(img, 150)
    interior = img.interior
    assert not img.red[interior].any()
    assert not img.green[interior].any()
    assert not img.blue[interior].any()
    # first and last rows keep the segmented (white) value
    assert (img.red[:5] == 255).all() and (img.red[20:] == 255).all()


def test_gradient_sign_colours():
    img = RasterImage.filled(4, 4, WHITE)
    img.set_pixel(1, 1, BLACK)
    detect_edges(img)

    # left of the dark pixel: rising into it -> negative gradient
    assert img.pixel(0, 1) == GREEN
    # the dark pixel itself: right and below tie, vertical wins
    assert img.pixel(1, 1) == BLUE
    for x, y in [(2, 1), (3, 1), (0, 2), (1, 2), (2, 2), (3, 2)]:
        assert img.pixel(x, y) == BLACK
    # row 0 is never recoloured, only segmented
    assert img.pixel(1, 0) == BLACK


def test_last_column_wraps_into_next_row():
    img = RasterImage.filled(4, 4, WHITE)
    img.set_pixel(0, 2, BLACK)
    detect_edges(img)

    assert img.pixel(3, 1) == GREEN
    assert img.pixel(0, 1) == GREEN
    assert img.pixel(0, 2) == BLUE


def test_first_and_last_rows_untouched(random_image):
    segmented = random_image.clone()
    segment(segmented)
    detect_edges(random_image)
    w, s = random_image.width, random_image.size
    for name in ("red", "green", "blue"):
        edge_channel = getattr(random_image, name)
        seg_channel = getattr(segmented, name)
        assert np.array_equal(edge_channel[:w], seg_channel[:w])
        assert np.array_equal(edge_channel[s - w:], seg_channel[s - w:])


def test_interior_uses_only_three_colours(random_image):
    detect_edges(random_image)
    rgb = random_image.to_rgb_array()[1:-1].reshape(-1, 3)
    colours = {tuple(p) for p in rgb.tolist()}
    assert colours <= {BLACK, GREEN, BLUE}


def test_gradient_sign_empty_for_short_images():
    img = RasterImage.filled(6, 2, WHITE)
    assert gradient_sign(img).size == 0
    detect_edges(img)
    assert img == RasterImage.filled(6, 2, BLACK)
