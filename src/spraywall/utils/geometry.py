"""Geometry utility functions.

Pure math, no dependencies. Used by hit testing and label placement.
"""

import math
from typing import Sequence, Tuple


def distance(p1: Tuple[float, float], p2: Tuple[float, float]) -> float:
    """Calculate Euclidean distance between two points."""
    return math.sqrt((p2[0] - p1[0])**2 + (p2[1] - p1[1])**2)


def point_in_circle(point: Tuple[float, float],
                    center: Tuple[float, float],
                    radius: float) -> bool:
    """Check if a point lies on or inside a circle."""
    return distance(point, center) <= radius


def point_in_ellipse(point: Tuple[float, float],
                     center: Tuple[float, float],
                     width: float,
                     height: float) -> bool:
    """
    Check if a point lies on or inside an axis-aligned ellipse.

    Args:
        point: (x, y) point to test
        center: (cx, cy) ellipse center
        width: Full width of the ellipse
        height: Full height of the ellipse

    Returns:
        True if ((x-cx)/(w/2))^2 + ((y-cy)/(h/2))^2 <= 1
    """
    if width <= 0 or height <= 0:
        return False
    dx = (point[0] - center[0]) / (width / 2)
    dy = (point[1] - center[1]) / (height / 2)
    return dx * dx + dy * dy <= 1


def point_in_polygon(point: Tuple[float, float],
                     polygon: Sequence[Tuple[float, float]]) -> bool:
    """
    Check if a point is inside a polygon using ray casting.

    Args:
        point: (x, y) point to test
        polygon: List of (x, y) vertices

    Returns:
        True if point is inside polygon
    """
    x, y = point
    n = len(polygon)
    inside = False

    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i

    return inside


def polygon_area(polygon: Sequence[Tuple[float, float]]) -> float:
    """Calculate the area of a polygon using the shoelace formula."""
    n = len(polygon)
    if n < 3:
        return 0.0

    area = 0.0
    j = n - 1
    for i in range(n):
        area += (polygon[j][0] + polygon[i][0]) * (polygon[j][1] - polygon[i][1])
        j = i

    return abs(area / 2.0)


def polygon_centroid(polygon: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Calculate the centroid of a polygon.

    Falls back to the vertex average for degenerate polygons.
    """
    n = len(polygon)
    if n == 0:
        return (0.0, 0.0)
    if n == 1:
        return (float(polygon[0][0]), float(polygon[0][1]))

    area = polygon_area(polygon)
    if area == 0:
        cx = sum(p[0] for p in polygon) / n
        cy = sum(p[1] for p in polygon) / n
        return (cx, cy)

    # Signed area keeps the centroid right for either winding order
    signed = 0.0
    cx = 0.0
    cy = 0.0
    j = n - 1
    for i in range(n):
        cross = polygon[j][0] * polygon[i][1] - polygon[i][0] * polygon[j][1]
        signed += cross
        cx += (polygon[j][0] + polygon[i][0]) * cross
        cy += (polygon[j][1] + polygon[i][1]) * cross
        j = i

    signed /= 2.0
    return (cx / (6.0 * signed), cy / (6.0 * signed))


def bounding_box(points: Sequence[Tuple[float, float]]) -> Tuple[float, float, float, float]:
    """
    Get bounding box of a set of points.

    Returns:
        (x_min, y_min, x_max, y_max)
    """
    if not points:
        return (0, 0, 0, 0)

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]

    return (min(xs), min(ys), max(xs), max(ys))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(value, high))


def scale_to_backing(client: Tuple[float, float],
                     rect: Tuple[float, float, float, float],
                     backing_size: Tuple[int, int]) -> Tuple[float, float]:
    """
    Convert client (display) coordinates into backing-buffer pixels.

    Args:
        client: (x, y) in display coordinates
        rect: (left, top, width, height) of the displayed surface
        backing_size: (width, height) of the pixel buffer

    Returns:
        (x, y) clamped to [0, width] x [0, height]
    """
    left, top, rect_w, rect_h = rect
    backing_w, backing_h = backing_size
    scale_x = backing_w / rect_w if rect_w else 1.0
    scale_y = backing_h / rect_h if rect_h else 1.0
    x = clamp((client[0] - left) * scale_x, 0, backing_w)
    y = clamp((client[1] - top) * scale_y, 0, backing_h)
    return (x, y)
