from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from .config import PlotBounds
from .peaks import MarkerCenter


logger = logging.getLogger(__name__)

POINT_COLUMNS = ["x", "y"]


def map_to_plot_space(
    center: MarkerCenter,
    width: int,
    height: int,
    x_low: float = 0.0,
    x_high: float = 1.0,
    y_low: float = 0.0,
    y_high: float = 1.0,
) -> Tuple[float, float]:
    # raster row 0 is the top of the plot, plot y grows upward
    x = center.pixel_x / width * (x_high - x_low) + x_low
    y = (height - center.pixel_y) / height * (y_high - y_low) + y_low
    return x, y


def map_centers(
    centers: Iterable[MarkerCenter],
    width: int,
    height: int,
    bounds: PlotBounds = PlotBounds(),
) -> List[Tuple[float, float]]:
    return [
        map_to_plot_space(
            c, width, height, bounds.x_low, bounds.x_high, bounds.y_low, bounds.y_high
        )
        for c in centers
    ]


def points_to_frame(points: Sequence[Tuple[float, float]]) -> pd.DataFrame:
    return pd.DataFrame(list(points), columns=POINT_COLUMNS, dtype=float)


def write_points_csv(points: Sequence[Tuple[float, float]], output_csv: str | Path) -> pd.DataFrame:
    df = points_to_frame(points)
    output_csv = Path(output_csv)
    output_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_csv, index=False)
    logger.info("[export] points: %d", len(df))
    logger.info("[export] saved: %s", output_csv)
    return df


def read_points_csv(path: str | Path) -> List[Tuple[float, float]]:
    df = pd.read_csv(path)
    return [(float(x), float(y)) for x, y in df[POINT_COLUMNS].itertuples(index=False)]
