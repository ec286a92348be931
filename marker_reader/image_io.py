from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple

import cv2
import numpy as np

from .exceptions import MalformedInputError
from .peaks import MarkerCenter
from .ppm_codec import read_ppm, write_ppm
from .raster import RasterImage


logger = logging.getLogger(__name__)

PPM_SUFFIXES = {".ppm", ".pnm"}

MARKER_COLOR_BGR = (0, 0, 255)
CENTER_COLOR_BGR = (0, 255, 0)


def load_image(image_path: str | Path) -> RasterImage:
    """Load a raster from disk.

    Plain PPM files go through the text codec; any other format is read
    with OpenCV and converted from BGR to RGB.
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")
    if image_path.suffix.lower() in PPM_SUFFIXES:
        return read_ppm(image_path)

    img = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if img is None:
        raise MalformedInputError(f"Could not load image at {image_path}")
    logger.debug("[image] loaded %s (%dx%d)", image_path, img.shape[1], img.shape[0])
    return RasterImage.from_rgb_array(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))


def to_bgr(img: RasterImage) -> np.ndarray:
    return cv2.cvtColor(img.to_rgb_array(), cv2.COLOR_RGB2BGR)


def save_image(img: RasterImage, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in PPM_SUFFIXES:
        return write_ppm(img, output_path)
    if not cv2.imwrite(str(output_path), to_bgr(img)):
        raise ValueError(f"OpenCV could not write image to {output_path}")
    return output_path


def annotate_markers(
    img: RasterImage,
    centers: Iterable[MarkerCenter],
    radius: float,
    color: Tuple[int, int, int] = MARKER_COLOR_BGR,
) -> np.ndarray:
    """BGR copy of ``img`` with every detected marker outlined."""
    canvas = to_bgr(img).copy()
    r = max(int(round(radius)), 1)
    for c in centers:
        # draw the outer circle
        cv2.circle(canvas, (c.pixel_x, c.pixel_y), r, color, 1)
        # draw the center of the circle
        cv2.circle(canvas, (c.pixel_x, c.pixel_y), 1, CENTER_COLOR_BGR, -1)
    return canvas


def save_annotated(
    img: RasterImage,
    centers: Iterable[MarkerCenter],
    radius: float,
    output_path: str | Path,
) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    canvas = annotate_markers(img, centers, radius)
    if not cv2.imwrite(str(output_path), canvas):
        raise ValueError(f"OpenCV could not write image to {output_path}")
    logger.info("[image] annotated markers saved: %s", output_path)
    return output_path
