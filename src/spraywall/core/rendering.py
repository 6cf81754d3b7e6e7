"""Rendering of the wall photo with hold outlines and sequence numbers."""

from typing import Iterable, Tuple

import cv2
import numpy as np

from spraywall.config import EditorSettings
from spraywall.models import Annotation, Circle, Ellipse, Polygon, ProblemType
from spraywall.utils.geometry import clamp
from spraywall.utils.image import ensure_rgb, resize_image
from spraywall.utils.profiling import timed

LABEL_FILL = (255, 0, 0)
LABEL_OUTLINE = (255, 255, 255)
LABEL_OUTLINE_PX = 2


def fit_display_size(natural_width: int, natural_height: int,
                     viewport_height: float,
                     max_width: int = 400,
                     max_height_ratio: float = 0.6) -> Tuple[int, int]:
    """
    Fit a photo into the editor canvas, preserving aspect ratio.

    Width is bounded first, then height against ``max_height_ratio`` of the
    viewport.

    Returns:
        (width, height) of the backing buffer, at least 1x1
    """
    w = float(natural_width)
    h = float(natural_height)
    max_height = viewport_height * max_height_ratio

    if w > max_width:
        h = h * max_width / w
        w = max_width
    if h > max_height:
        w = w * max_height / h
        h = max_height

    return (max(1, int(round(w))), max(1, int(round(h))))


class Renderer:
    """
    Draws annotations over a base image.

    The visible canvas and the export image share the same drawing code;
    only the outline width differs. Both are produced at backing-buffer
    resolution, since annotations are authored in that space.
    """

    def __init__(self, settings: EditorSettings = None):
        settings = settings or EditorSettings()
        self.line_width = settings.line_width
        self.export_line_width = settings.export_line_width
        self.min_font_px = settings.min_font_px
        self.max_font_px = settings.max_font_px
        self.font = cv2.FONT_HERSHEY_SIMPLEX
        self.font_thickness = 2

    def prepare_base(self, image: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
        """Scale a source photo to the backing buffer size (width, height)."""
        base = resize_image(ensure_rgb(image), size[0], size[1])
        return np.ascontiguousarray(base, dtype=np.uint8)

    @timed("canvas_render")
    def render(self, base: np.ndarray, annotations: Iterable[Annotation],
               problem_type: ProblemType) -> np.ndarray:
        """Render the visible canvas."""
        return self._compose(base, annotations, problem_type, self.line_width)

    @timed("export_render")
    def render_export(self, base: np.ndarray, annotations: Iterable[Annotation],
                      problem_type: ProblemType) -> np.ndarray:
        """Render the flattened image that gets saved with the problem."""
        return self._compose(base, annotations, problem_type, self.export_line_width)

    def _compose(self, base: np.ndarray, annotations: Iterable[Annotation],
                 problem_type: ProblemType, line_width: int) -> np.ndarray:
        canvas = base.copy()
        show_numbers = ProblemType.parse(problem_type) is ProblemType.ENDURANCE
        for annotation in annotations:
            self.draw_outline(canvas, annotation, line_width)
            if show_numbers and annotation.sequence_numbers:
                self.draw_label(canvas, annotation)
        return canvas

    def draw_outline(self, canvas: np.ndarray, annotation: Annotation, line_width: int):
        """Stroke one annotation outline in its color."""
        shape = annotation.shape
        color = annotation.color.rgb

        if isinstance(shape, Circle):
            cv2.circle(canvas, _int_point(shape.center), int(round(shape.radius)),
                       color, line_width, cv2.LINE_AA)
        elif isinstance(shape, Ellipse):
            axes = (int(round(shape.width / 2)), int(round(shape.height / 2)))
            cv2.ellipse(canvas, _int_point(shape.center), axes, 0, 0, 360,
                        color, line_width, cv2.LINE_AA)
        elif isinstance(shape, Polygon):
            pts = np.array([_int_point(p) for p in shape.points], dtype=np.int32)
            cv2.polylines(canvas, [pts], True, color, line_width, cv2.LINE_AA)
        else:
            raise TypeError(f"Unknown shape type: {type(shape).__name__}")

    def font_px(self, annotation: Annotation) -> float:
        """Label height: a quarter of the shape width, clamped."""
        return clamp(annotation.shape.label_width * 0.25,
                     self.min_font_px, self.max_font_px)

    def draw_label(self, canvas: np.ndarray, annotation: Annotation):
        """Draw joined sequence numbers centered on the shape, outlined in white."""
        text = annotation.label
        px = int(round(self.font_px(annotation)))
        scale = cv2.getFontScaleFromHeight(self.font, px, self.font_thickness)
        (text_w, text_h), _ = cv2.getTextSize(text, self.font, scale, self.font_thickness)

        cx, cy = annotation.shape.center
        origin = (int(round(cx - text_w / 2)), int(round(cy + text_h / 2)))

        # Outline is the glyph mask grown by LABEL_OUTLINE_PX on every side
        mask = np.zeros(canvas.shape[:2], dtype=np.uint8)
        cv2.putText(mask, text, origin, self.font, scale, 255,
                    self.font_thickness, cv2.LINE_8)
        size = 2 * LABEL_OUTLINE_PX + 1
        kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (size, size))
        outline = cv2.dilate(mask, kernel)

        canvas[outline > 0] = LABEL_OUTLINE
        canvas[mask > 0] = LABEL_FILL


def _int_point(point: Tuple[float, float]) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))
