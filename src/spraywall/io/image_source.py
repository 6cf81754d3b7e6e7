"""Image source - user-selected wall photos."""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageOps

from spraywall.utils.profiling import profile_block

logger = logging.getLogger("spraywall.image_source")


class ImageHandle:
    """
    A loaded photo whose pixels can be released.

    Release is idempotent and never raises; a released handle reports
    ``pixels`` as None.
    """

    def __init__(self, pixels: np.ndarray, source: str = ""):
        self._pixels: Optional[np.ndarray] = pixels
        self.source = source

    @property
    def pixels(self) -> Optional[np.ndarray]:
        return self._pixels

    @property
    def released(self) -> bool:
        return self._pixels is None

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the natural image, (0, 0) once released."""
        if self._pixels is None:
            return (0, 0)
        h, w = self._pixels.shape[:2]
        return (w, h)

    def release(self):
        """Drop the pixel data."""
        if self._pixels is not None:
            logger.debug(f"Released {self.source}")
        self._pixels = None

    def __enter__(self) -> "ImageHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class ImageSource:
    """Opens local image files as RGB numpy buffers."""

    def open(self, path: Union[str, Path]) -> ImageHandle:
        """
        Load an image file.

        EXIF orientation is applied so phone photos are upright.

        Raises:
            OSError: If the file is missing or not a readable image
        """
        with profile_block("image_load"):
            with Image.open(path) as img:
                img = ImageOps.exif_transpose(img)
                pixels = np.array(img.convert("RGB"))
        logger.info(f"Loaded {path} ({pixels.shape[1]}x{pixels.shape[0]})")
        return ImageHandle(pixels, source=str(path))

    def from_array(self, pixels: np.ndarray, source: str = "<memory>") -> ImageHandle:
        """Wrap an in-memory RGB buffer."""
        return ImageHandle(np.ascontiguousarray(pixels), source=source)
