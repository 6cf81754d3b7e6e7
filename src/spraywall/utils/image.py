"""Image processing utility functions."""

import base64
import io
from typing import Tuple, Union

import cv2
import numpy as np
from PIL import Image

PNG_DATA_URL_PREFIX = "data:image/png;base64,"


def resize_image(image: np.ndarray,
                 width: int,
                 height: int) -> np.ndarray:
    """
    Resize an image to an exact pixel size.

    Args:
        image: Input image (RGB)
        width: Target width
        height: Target height

    Returns:
        Resized image (the input itself when the size already matches)
    """
    h, w = image.shape[:2]
    if (w, h) == (width, height) or width <= 0 or height <= 0:
        return image

    interpolation = cv2.INTER_AREA if width < w else cv2.INTER_LINEAR
    return cv2.resize(image, (width, height), interpolation=interpolation)


def ensure_rgb(image: np.ndarray) -> np.ndarray:
    """Return an H x W x 3 uint8 view of a grayscale, RGB or RGBA buffer."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image


def encode_png(image: np.ndarray) -> bytes:
    """Encode an RGB buffer as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(ensure_rgb(image)).save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(image: np.ndarray) -> str:
    """Encode an RGB buffer as a ``data:image/png;base64`` URL."""
    return PNG_DATA_URL_PREFIX + base64.b64encode(encode_png(image)).decode("ascii")


def decode_data_url(data_url: str) -> bytes:
    """Extract raw image bytes from a base64 data URL."""
    _, _, payload = data_url.partition(",")
    return base64.b64decode(payload)


def decode_image_size(data: Union[bytes, str]) -> Tuple[int, int]:
    """
    Read the pixel size of encoded image data.

    Args:
        data: PNG/JPEG bytes or a base64 data URL

    Returns:
        (width, height)
    """
    if isinstance(data, str):
        data = decode_data_url(data)
    with Image.open(io.BytesIO(data)) as img:
        return img.size
