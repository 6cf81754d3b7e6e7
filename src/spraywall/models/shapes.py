"""Hold outline shapes: circle, ellipse and polygon.

A shape is one of three frozen dataclasses. Code that needs to treat them
differently dispatches on the concrete class and raises ``TypeError`` for
anything else, so adding a fourth kind fails loudly everywhere it is unhandled.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from spraywall.utils.geometry import (
    point_in_circle,
    point_in_ellipse,
    point_in_polygon,
    polygon_centroid,
    bounding_box,
)


@dataclass(frozen=True)
class Circle:
    """Circle outline, used as the default placeholder for a hold."""
    center_x: float
    center_y: float
    radius: float

    kind = "circle"

    def contains(self, x: float, y: float) -> bool:
        return point_in_circle((x, y), (self.center_x, self.center_y), self.radius)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def label_width(self) -> float:
        return self.radius * 2


@dataclass(frozen=True)
class Ellipse:
    """
    Axis-aligned ellipse traced from a flood-filled region.

    ``radius`` is max(width, height) / 2 and is kept for uniform sizing.
    """
    center_x: float
    center_y: float
    width: float
    height: float
    radius: float = 0.0

    kind = "ellipse"

    def __post_init__(self):
        if not self.radius:
            object.__setattr__(self, "radius", max(self.width, self.height) / 2)

    def contains(self, x: float, y: float) -> bool:
        return point_in_ellipse((x, y), (self.center_x, self.center_y),
                                self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def label_width(self) -> float:
        return self.width


@dataclass(frozen=True)
class Polygon:
    """Closed polygon outline over an ordered point sequence."""
    points: Tuple[Tuple[float, float], ...]

    kind = "polygon"

    def __post_init__(self):
        points = tuple((float(p[0]), float(p[1])) for p in self.points)
        if not points:
            raise ValueError("Polygon needs at least one point")
        object.__setattr__(self, "points", points)

    def contains(self, x: float, y: float) -> bool:
        return point_in_polygon((x, y), self.points)

    @property
    def center(self) -> Tuple[float, float]:
        return polygon_centroid(self.points)

    @property
    def label_width(self) -> float:
        x1, _, x2, _ = bounding_box(self.points)
        return x2 - x1


Shape = Union[Circle, Ellipse, Polygon]

SHAPE_TYPES = (Circle, Ellipse, Polygon)


def shape_to_dict(shape: Shape) -> dict:
    """Serialize a shape to a tagged dictionary."""
    if isinstance(shape, Circle):
        return {
            "type": "circle",
            "center_x": shape.center_x,
            "center_y": shape.center_y,
            "radius": shape.radius,
        }
    if isinstance(shape, Ellipse):
        return {
            "type": "ellipse",
            "center_x": shape.center_x,
            "center_y": shape.center_y,
            "width": shape.width,
            "height": shape.height,
            "radius": shape.radius,
        }
    if isinstance(shape, Polygon):
        return {"type": "polygon", "points": [list(p) for p in shape.points]}
    raise TypeError(f"Unknown shape type: {type(shape).__name__}")


def shape_from_dict(data: dict) -> Shape:
    """Deserialize a shape from a tagged dictionary."""
    kind = data.get("type")
    if kind == "circle":
        return Circle(data["center_x"], data["center_y"], data["radius"])
    if kind == "ellipse":
        return Ellipse(data["center_x"], data["center_y"],
                       data["width"], data["height"], data.get("radius", 0.0))
    if kind == "polygon":
        return Polygon(tuple(tuple(p) for p in data.get("points", [])))
    raise ValueError(f"Unknown shape type: {kind!r}")
