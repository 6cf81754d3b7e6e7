"""Data models for the spray-wall editor."""

from spraywall.models.shapes import (
    Circle,
    Ellipse,
    Polygon,
    Shape,
    SHAPE_TYPES,
    shape_to_dict,
    shape_from_dict,
)
from spraywall.models.annotation import Annotation, HoldColor
from spraywall.models.problem import Problem, ProblemType, normalize_tags

__all__ = [
    "Circle",
    "Ellipse",
    "Polygon",
    "Shape",
    "SHAPE_TYPES",
    "shape_to_dict",
    "shape_from_dict",
    "Annotation",
    "HoldColor",
    "Problem",
    "ProblemType",
    "normalize_tags",
]
