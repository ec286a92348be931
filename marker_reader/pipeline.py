from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DetectionParameters, PlotBounds
from .edge_detection import detect_edges
from .hough import accumulate
from .image_io import load_image
from .peaks import MarkerCenter, extract_peaks
from .plot_space import map_centers
from .raster import RasterImage


logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    votes: RasterImage
    centers: List[MarkerCenter] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.votes.width

    @property
    def height(self) -> int:
        return self.votes.height

    def to_plot_space(self, bounds: PlotBounds = PlotBounds()) -> List[Tuple[float, float]]:
        return map_centers(self.centers, self.width, self.height, bounds)


def find_markers(
    image: RasterImage,
    params: Optional[DetectionParameters] = None,
) -> DetectionResult:
    """Run segmentation, edge detection, circle voting and peak extraction.

    ``image`` is left untouched; the stages work on a clone.
    """
    params = params or DetectionParameters()
    edges = image.clone()
    detect_edges(edges, params.luminance_cutoff)
    votes = accumulate(edges, params.radius)
    centers = extract_peaks(votes, params.peak_ratio)
    logger.info(
        "[pipeline] %dx%d raster, radius %.2f: %d marker centers",
        image.width, image.height, params.radius, len(centers),
    )
    return DetectionResult(votes=votes, centers=centers)


def read_markers_from_path(
    image_path: str | Path,
    params: Optional[DetectionParameters] = None,
    bounds: PlotBounds = PlotBounds(),
) -> Tuple[DetectionResult, List[Tuple[float, float]]]:
    image = load_image(image_path)
    result = find_markers(image, params)
    return result, result.to_plot_space(bounds)
