from __future__ import annotations

import numpy as np

from .config import DEFAULT_LUMINANCE_CUTOFF
from .raster import RasterImage


LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def luminance(img: RasterImage) -> np.ndarray:
    wr, wg, wb = LUMA_WEIGHTS
    weighted = (
        wr * img.red.astype(np.float64)
        + wg * img.green.astype(np.float64)
        + wb * img.blue.astype(np.float64)
    )
    # truncate to an unsigned byte, wrapping like a C cast would
    return (np.trunc(weighted).astype(np.int64) % 256).astype(np.uint8)


def segment(img: RasterImage, cutoff: int = DEFAULT_LUMINANCE_CUTOFF) -> None:
    """Threshold ``img`` in place: bright pixels go black, everything else white."""
    level = np.where(luminance(img) > cutoff, 0, 255).astype(np.uint8)
    img.red[:] = level
    img.green[:] = level
    img.blue[:] = level
