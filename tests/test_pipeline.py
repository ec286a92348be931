import numpy as np
import pytest

from marker_reader.config import DetectionParameters, PlotBounds
from marker_reader.exceptions import InvalidArgumentError
from marker_reader.pipeline import find_markers, read_markers_from_path
from marker_reader.ppm_codec import write_ppm
from marker_reader.raster import RasterImage

from conftest import WHITE, make_disc_image


def strongest_center(result):
    return max(
        result.centers,
        key=lambda c: result.votes.pixel(c.pixel_x, c.pixel_y)[0],
    )


def test_marker_found_near_its_center(disc_image):
    result = find_markers(disc_image, DetectionParameters(radius=6))
    assert result.centers
    best = strongest_center(result)
    assert abs(best.pixel_x - 20) <= 3
    assert abs(best.pixel_y - 20) <= 3


def test_two_markers_are_both_found():
    img = make_disc_image(width=60, height=40, center=(15, 20), radius=5)
    other = make_disc_image(width=60, height=40, center=(45, 20), radius=5)
    img.red &= other.red
    img.green &= other.green
    img.blue &= other.blue

    result = find_markers(img, DetectionParameters(radius=5))
    xs = [c.pixel_x for c in result.centers]
    assert any(abs(x - 15) <= 3 for x in xs)
    assert any(abs(x - 45) <= 3 for x in xs)


def test_input_image_is_not_modified(disc_image):
    before = disc_image.clone()
    find_markers(disc_image)
    assert disc_image == before


def test_runs_are_deterministic(disc_image):
    first = find_markers(disc_image)
    second = find_markers(disc_image)
    assert first.votes == second.votes
    assert first.centers == second.centers


def test_vote_raster_stays_in_byte_range(disc_image):
    result = find_markers(disc_image)
    assert result.votes.red.dtype == np.uint8
    assert (result.width, result.height) == (40, 40)


def test_plain_background_gives_no_markers():
    img = RasterImage.filled(40, 40, WHITE)
    assert find_markers(img).centers == []


def test_plot_space_mapping_of_results(disc_image):
    result = find_markers(disc_image, DetectionParameters(radius=6))
    points = result.to_plot_space(PlotBounds(0, 40, 0, 40))
    assert len(points) == len(result.centers)
    for (x, y), c in zip(points, result.centers):
        assert x == pytest.approx(c.pixel_x)
        assert y == pytest.approx(40 - c.pixel_y)


def test_read_from_path(tmp_path, disc_image):
    path = write_ppm(disc_image, tmp_path / "disc.ppm")
    result, points = read_markers_from_path(path, DetectionParameters(radius=6))
    assert result.centers == find_markers(disc_image, DetectionParameters(radius=6)).centers
    assert len(points) == len(result.centers)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"radius": 0},
        {"radius": float("nan")},
        {"luminance_cutoff": 256},
        {"luminance_cutoff": 10.5},
        {"peak_ratio": -0.1},
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidArgumentError):
        DetectionParameters(**kwargs)
