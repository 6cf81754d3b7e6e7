"""I/O modules: image source and problem store."""

from spraywall.io.image_source import ImageHandle, ImageSource
from spraywall.io.store import ProblemStore, JsonProblemStore

__all__ = [
    "ImageHandle",
    "ImageSource",
    "ProblemStore",
    "JsonProblemStore",
]
