"""Region segmentation - auto-trace a hold from a tap point."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from spraywall.config import EditorSettings
from spraywall.models import Circle, Ellipse
from spraywall.utils.profiling import timed

logger = logging.getLogger("spraywall.segmentation")


@dataclass
class SegmentedRegion:
    """
    Connected region grown from a seed pixel.

    Attributes:
        seed: (x, y) seed pixel
        xs: Column index of every region pixel, in fill order
        ys: Row index of every region pixel, in fill order
        truncated: True when growth stopped at the pixel cap
    """
    seed: Tuple[int, int]
    xs: np.ndarray
    ys: np.ndarray
    truncated: bool = False

    @property
    def pixel_count(self) -> int:
        return int(len(self.xs))

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Bounding box (x1, y1, x2, y2), inclusive."""
        return (int(self.xs.min()), int(self.ys.min()),
                int(self.xs.max()), int(self.ys.max()))


class RegionSegmenter:
    """
    Flood-fill color region detection.

    A pixel joins the region when its Euclidean RGB distance to the seed
    color is within ``threshold``. Growth is 4-connected, stack based, and
    stops at ``max_pixels`` so a tap on a near-uniform wall stays fast.
    """

    def __init__(self,
                 threshold: float = 40.0,
                 max_pixels: int = 50_000,
                 min_pixels: int = 10,
                 padding: int = 10,
                 max_area_ratio: float = 0.1,
                 default_radius: float = 30.0):
        """
        Initialize the segmenter.

        Args:
            threshold: Maximum RGB distance to the seed color
            max_pixels: Hard cap on region size
            min_pixels: Regions smaller than this are noise
            padding: Added to the bounding box extents of a traced hold
            max_area_ratio: Largest padded bounding box, as a fraction of
                            the canvas area, still accepted as a hold
            default_radius: Radius of the fallback circle
        """
        self.threshold = threshold
        self.max_pixels = max_pixels
        self.min_pixels = min_pixels
        self.padding = padding
        self.max_area_ratio = max_area_ratio
        self.default_radius = default_radius

    @classmethod
    def from_settings(cls, settings: EditorSettings) -> "RegionSegmenter":
        return cls(
            threshold=settings.color_threshold,
            max_pixels=settings.max_region_pixels,
            min_pixels=settings.min_region_pixels,
            padding=settings.region_padding,
            max_area_ratio=settings.max_region_area_ratio,
            default_radius=settings.default_circle_radius,
        )

    def similarity_mask(self, image: np.ndarray,
                        target: Tuple[int, int, int]) -> np.ndarray:
        """Boolean mask of pixels within ``threshold`` of ``target``."""
        rgb = image[:, :, :3].astype(np.int32)
        diff = rgb - np.asarray(target, dtype=np.int32)
        dist_sq = np.einsum("ijk,ijk->ij", diff, diff)
        return dist_sq <= self.threshold * self.threshold

    @timed("flood_fill")
    def flood_fill(self, image: np.ndarray,
                   seed: Tuple[float, float]) -> Optional[SegmentedRegion]:
        """
        Grow a region from a seed point.

        Args:
            image: Source buffer (H x W x 3 RGB or H x W x 4 RGBA)
            seed: (x, y) seed point, fractional values are floored

        Returns:
            The region, or None when the seed is outside the image or the
            region has fewer than ``min_pixels`` pixels
        """
        h, w = image.shape[:2]
        sx, sy = int(np.floor(seed[0])), int(np.floor(seed[1]))

        if not (0 <= sx < w and 0 <= sy < h):
            return None

        target = tuple(int(c) for c in image[sy, sx, :3])
        similar = self.similarity_mask(image, target)
        visited = np.zeros((h, w), dtype=bool)

        xs = []
        ys = []
        stack = [(sx, sy)]
        while stack and len(xs) < self.max_pixels:
            x, y = stack.pop()
            if visited[y, x] or not similar[y, x]:
                continue

            visited[y, x] = True
            xs.append(x)
            ys.append(y)

            if x + 1 < w:
                stack.append((x + 1, y))
            if x - 1 >= 0:
                stack.append((x - 1, y))
            if y + 1 < h:
                stack.append((x, y + 1))
            if y - 1 >= 0:
                stack.append((x, y - 1))

        if len(xs) < self.min_pixels:
            logger.debug(f"Region at {seed} too small ({len(xs)} px)")
            return None

        # Truncated only if similar pixels were still waiting when the cap hit
        truncated = any(not visited[y, x] and similar[y, x] for x, y in stack)
        return SegmentedRegion(
            seed=(sx, sy),
            xs=np.asarray(xs, dtype=np.int32),
            ys=np.asarray(ys, dtype=np.int32),
            truncated=truncated,
        )

    def region_to_ellipse(self, region: SegmentedRegion) -> Ellipse:
        """Ellipse centered on the region bounding box, padded."""
        x1, y1, x2, y2 = region.bounds
        width = x2 - x1 + self.padding
        height = y2 - y1 + self.padding
        return Ellipse(
            center_x=(x1 + x2) / 2,
            center_y=(y1 + y2) / 2,
            width=width,
            height=height,
            radius=max(width, height) / 2,
        )

    def detect_hold(self, image: np.ndarray,
                    seed: Tuple[float, float]) -> Optional[Tuple[Ellipse, SegmentedRegion]]:
        """
        Trace a hold outline at ``seed``.

        Returns:
            (ellipse, region), or None when the region is degenerate: too
            small, out of bounds, or so large it is probably the background
        """
        region = self.flood_fill(image, seed)
        if region is None:
            return None

        ellipse = self.region_to_ellipse(region)
        h, w = image.shape[:2]
        if ellipse.width * ellipse.height > w * h * self.max_area_ratio:
            logger.debug(
                f"Region at {seed} covers {ellipse.width}x{ellipse.height}, "
                f"over {self.max_area_ratio:.0%} of the canvas"
            )
            return None

        return ellipse, region

    def default_circle(self, x: float, y: float) -> Circle:
        """Placeholder outline used when no hold can be traced."""
        return Circle(center_x=x, center_y=y, radius=self.default_radius)
