from __future__ import annotations

import math
from dataclasses import dataclass

from .exceptions import InvalidArgumentError


DEFAULT_RADIUS = 8.0
DEFAULT_LUMINANCE_CUTOFF = 150
DEFAULT_PEAK_RATIO = 0.8


@dataclass(frozen=True)
class DetectionParameters:
    radius: float = DEFAULT_RADIUS              # expected marker radius in pixels
    luminance_cutoff: int = DEFAULT_LUMINANCE_CUTOFF
    peak_ratio: float = DEFAULT_PEAK_RATIO      # fraction of the max vote a peak must exceed

    def __post_init__(self):
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise InvalidArgumentError(f"radius must be a positive number, got {self.radius}")
        if int(self.luminance_cutoff) != self.luminance_cutoff or not 0 <= self.luminance_cutoff <= 255:
            raise InvalidArgumentError(
                f"luminance cutoff must be an integer in [0, 255], got {self.luminance_cutoff}"
            )
        if not math.isfinite(self.peak_ratio) or self.peak_ratio < 0:
            raise InvalidArgumentError(f"peak ratio must be >= 0, got {self.peak_ratio}")


@dataclass(frozen=True)
class PlotBounds:
    x_low: float = 0.0
    x_high: float = 1.0
    y_low: float = 0.0
    y_high: float = 1.0
