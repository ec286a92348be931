from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from .config import DEFAULT_PEAK_RATIO
from .raster import RasterImage


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerCenter:
    pixel_x: int
    pixel_y: int


def local_maxima_mask(vote_img: RasterImage, peak_ratio: float = DEFAULT_PEAK_RATIO) -> np.ndarray:
    """Boolean mask over the interior rows of pixels that qualify as peaks.

    A pixel qualifies when its vote exceeds ``peak_ratio`` times the
    largest interior vote and is >= its four direct neighbours.
    """
    w, s = vote_img.width, vote_img.size
    if vote_img.height < 3:
        return np.zeros(0, dtype=bool)

    votes = vote_img.red.astype(np.int64)
    here = votes[w:s - w]
    max_vote = int(here.max())
    return (
        (here > max_vote * peak_ratio)
        & (here >= votes[w - 1:s - w - 1])
        & (here >= votes[w + 1:s - w + 1])
        & (here >= votes[0:s - 2 * w])
        & (here >= votes[2 * w:s])
    )


def extract_peaks(vote_img: RasterImage, peak_ratio: float = DEFAULT_PEAK_RATIO) -> List[MarkerCenter]:
    mask = local_maxima_mask(vote_img, peak_ratio)
    w = vote_img.width
    centers = [MarkerCenter(int(i) % w, int(i) // w) for i in np.flatnonzero(mask) + w]
    logger.debug("[peaks] %d marker centers above ratio %.2f", len(centers), peak_ratio)
    return centers


def render_peak_mask(vote_img: RasterImage, peak_ratio: float = DEFAULT_PEAK_RATIO) -> RasterImage:
    """White-on-black raster of the pixels ``extract_peaks`` would report."""
    out = RasterImage.blank(vote_img.width, vote_img.height)
    mask = local_maxima_mask(vote_img, peak_ratio)
    if mask.size:
        level = np.where(mask, 255, 0).astype(np.uint8)
        out.red[out.interior] = level
        out.green[out.interior] = level
        out.blue[out.interior] = level
    return out
