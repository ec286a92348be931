from .config import (
    DEFAULT_LUMINANCE_CUTOFF,
    DEFAULT_PEAK_RATIO,
    DEFAULT_RADIUS,
    DetectionParameters,
    PlotBounds,
)
from .edge_detection import detect_edges
from .exceptions import InvalidArgumentError, MalformedInputError, MarkerReaderError
from .hough import accumulate, circle_offsets
from .image_io import annotate_markers, load_image, save_annotated, save_image
from .peaks import MarkerCenter, extract_peaks, render_peak_mask
from .pipeline import DetectionResult, find_markers, read_markers_from_path
from .plot_space import (
    map_centers,
    map_to_plot_space,
    points_to_frame,
    read_points_csv,
    write_points_csv,
)
from .ppm_codec import decode_image, encode_image, read_ppm, write_ppm
from .raster import RasterImage
from .segmentation import luminance, segment

__all__ = [
    "DEFAULT_LUMINANCE_CUTOFF",
    "DEFAULT_PEAK_RATIO",
    "DEFAULT_RADIUS",
    "DetectionParameters",
    "PlotBounds",
    "detect_edges",
    "InvalidArgumentError",
    "MalformedInputError",
    "MarkerReaderError",
    "accumulate",
    "circle_offsets",
    "annotate_markers",
    "load_image",
    "save_annotated",
    "save_image",
    "MarkerCenter",
    "extract_peaks",
    "render_peak_mask",
    "DetectionResult",
    "find_markers",
    "read_markers_from_path",
    "map_centers",
    "map_to_plot_space",
    "points_to_frame",
    "write_points_csv",
    "read_points_csv",
    "decode_image",
    "encode_image",
    "read_ppm",
    "write_ppm",
    "RasterImage",
    "luminance",
    "segment",
]
