"""Annotation model - one marked hold on the wall photo."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

from spraywall.models.shapes import Shape, shape_to_dict, shape_from_dict


class HoldColor(Enum):
    """
    Outline palette.

    In bouldering mode the color records the attempt result of a hold.
    """
    RED = "#FF0000"
    GREEN = "#00FF00"
    BLUE = "#0000FF"

    @property
    def rgb(self) -> Tuple[int, int, int]:
        value = self.value.lstrip("#")
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @classmethod
    def for_tap_count(cls, count: int) -> "HoldColor":
        """Single tap -> red, double -> green, triple or more -> blue."""
        if count >= 3:
            return cls.BLUE
        if count == 2:
            return cls.GREEN
        return cls.RED


@dataclass(frozen=True)
class Annotation:
    """
    A single marked hold.

    Attributes:
        shape: Outline geometry (circle, ellipse or polygon)
        color: Outline color from the fixed palette
        sequence_numbers: Sorted, distinct positive numbers (endurance mode)
        pixel_count: Pixels of the region the shape was traced from,
                     0 for a placeholder circle
    """
    shape: Shape
    color: HoldColor = HoldColor.RED
    sequence_numbers: Tuple[int, ...] = field(default_factory=tuple)
    pixel_count: int = 0

    @property
    def label(self) -> str:
        """Sequence numbers joined for display, e.g. ``"1, 3"``."""
        return ", ".join(str(n) for n in self.sequence_numbers)

    def contains(self, x: float, y: float) -> bool:
        return self.shape.contains(x, y)

    def with_color(self, color: HoldColor) -> "Annotation":
        return replace(self, color=color)

    def with_number(self, number: int) -> "Annotation":
        """Return a copy with ``number`` added, keeping the numbers sorted."""
        if number < 1:
            raise ValueError(f"Sequence numbers are positive, got {number}")
        numbers = tuple(sorted(set(self.sequence_numbers) | {number}))
        return replace(self, sequence_numbers=numbers)

    def without_last_number(self) -> "Annotation":
        return replace(self, sequence_numbers=self.sequence_numbers[:-1])

    def to_dict(self) -> dict:
        return {
            "shape": shape_to_dict(self.shape),
            "color": self.color.value,
            "sequence_numbers": list(self.sequence_numbers),
            "pixel_count": self.pixel_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Annotation":
        return cls(
            shape=shape_from_dict(data["shape"]),
            color=HoldColor(data.get("color", HoldColor.RED.value)),
            sequence_numbers=tuple(data.get("sequence_numbers", [])),
            pixel_count=data.get("pixel_count", 0),
        )
