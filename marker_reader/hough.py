"""Fixed-radius Hough circle voting."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from .config import DEFAULT_RADIUS
from .raster import RasterImage


logger = logging.getLogger(__name__)

DEG_TO_RAD = 0.0174532925
ANGLE_STEPS = 360


def circle_offsets(radius: float) -> Tuple[np.ndarray, np.ndarray]:
    """Integer (x, y) offsets of a circle sampled once per degree.

    Offsets are truncated toward zero, so small circles have gaps and
    repeated points.
    """
    angles = np.arange(ANGLE_STEPS, dtype=np.float64) * DEG_TO_RAD
    xs = np.trunc(radius * np.cos(angles)).astype(np.int64)
    ys = np.trunc(radius * np.sin(angles)).astype(np.int64)
    return xs, ys


def edge_indices(edge_img: RasterImage) -> np.ndarray:
    interior = np.arange(edge_img.width, max(edge_img.size - edge_img.width, edge_img.width))
    is_edge = (edge_img.blue[interior] == 255) | (edge_img.green[interior] == 255)
    return interior[is_edge]


def accumulate(edge_img: RasterImage, radius: float = DEFAULT_RADIUS) -> RasterImage:
    """Vote a circle of ``radius`` around every edge pixel into a fresh raster.

    Each of the 360 angle steps adds one vote to its target pixel, on all
    three channels, saturating at 255. Column and row offsets are
    bounds-checked separately against the flat buffer.
    """
    w, s = edge_img.width, edge_img.size
    sources = edge_indices(edge_img)
    votes = np.zeros(s, dtype=np.int64)

    for dx, dy in zip(*circle_offsets(radius)):
        col = sources + dx
        row = sources + dy * w
        target = sources + dx + dy * w
        ok = (col >= 0) & (col < s) & (row >= 0) & (row < s) & (target >= 0) & (target < s)
        if ok.any():
            votes += np.bincount(target[ok], minlength=s)

    counts = np.minimum(votes, 255).astype(np.uint8)
    logger.debug(
        "[hough] %d edge pixels voted, radius %.2f, max vote %d",
        sources.size, radius, int(counts.max()),
    )
    return RasterImage(
        width=edge_img.width,
        height=edge_img.height,
        red=counts,
        green=counts.copy(),
        blue=counts.copy(),
    )
