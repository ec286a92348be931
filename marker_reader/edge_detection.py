from __future__ import annotations

import logging

import numpy as np

from .config import DEFAULT_LUMINANCE_CUTOFF
from .raster import RasterImage
from .segmentation import segment


logger = logging.getLogger(__name__)


def gradient_sign(img: RasterImage) -> np.ndarray:
    """Signed dominant gradient of the red channel over the interior rows.

    Compares each pixel with its right neighbour and the pixel below and
    keeps the larger magnitude, the vertical one on ties. The right
    neighbour of the last column is the first pixel of the next row.
    """
    w, s = img.width, img.size
    if img.height < 3:
        return np.zeros(0, dtype=np.int16)
    red = img.red.astype(np.int16)
    here = red[w:s - w]
    g1 = here - red[w + 1:s - w + 1]
    g2 = here - red[2 * w:s]
    return np.where(np.abs(g1) > np.abs(g2), g1, g2)


def detect_edges(img: RasterImage, cutoff: int = DEFAULT_LUMINANCE_CUTOFF) -> None:
    """Segment ``img`` and recolour interior pixels by gradient sign, in place.

    Positive gradients become blue, negative ones green, flat pixels black.
    The first and last rows keep their segmented values.
    """
    segment(img, cutoff)
    g = gradient_sign(img)
    if g.size == 0:
        return

    interior = img.interior
    positive = g > 0
    negative = g < 0
    img.red[interior] = 0
    img.green[interior] = np.where(negative, 255, 0)
    img.blue[interior] = np.where(positive, 255, 0)
    logger.debug(
        "[edges] %d rising, %d falling edge pixels", int(positive.sum()), int(negative.sum())
    )
