"""Utility functions for spraywall."""

from spraywall.utils.geometry import (
    distance,
    point_in_circle,
    point_in_ellipse,
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    bounding_box,
    scale_to_backing,
)
from spraywall.utils.image import (
    resize_image,
    encode_png,
    to_data_url,
    decode_image_size,
)
from spraywall.utils.profiling import (
    PerformanceProfiler,
    timed,
    profile_block,
    profiler,
)

__all__ = [
    # Geometry
    "distance",
    "point_in_circle",
    "point_in_ellipse",
    "point_in_polygon",
    "polygon_area",
    "polygon_centroid",
    "bounding_box",
    "scale_to_backing",
    # Image
    "resize_image",
    "encode_png",
    "to_data_url",
    "decode_image_size",
    # Profiling
    "PerformanceProfiler",
    "timed",
    "profile_block",
    "profiler",
]
