"""Hold editor - owns the annotations of one wall photo and applies gestures."""

import logging
from typing import List, Optional, Tuple

import numpy as np

from spraywall.core.segmentation import RegionSegmenter
from spraywall.core.undo import Edit, EditHistory
from spraywall.models import Annotation, HoldColor, ProblemType, SHAPE_TYPES

logger = logging.getLogger("spraywall.editor")


class HoldEditor:
    """
    Ordered list of annotations plus the mutation rules of each mode.

    Bouldering:
        tap empty wall      -> trace a hold (red)
        tap / 2x / 3x hold  -> red / green / blue
        long press hold     -> delete
    Endurance:
        tap empty wall      -> trace a hold numbered with the next free number
        tap / 2x hold       -> append the next free number
        3x hold             -> delete
        long press hold     -> drop the last number, delete once none remain

    Taps with multiplicity other than 1 on empty wall do nothing.
    """

    def __init__(self, problem_type: ProblemType,
                 segmenter: RegionSegmenter = None,
                 history_depth: int = 50):
        self.problem_type = ProblemType.parse(problem_type)
        self.segmenter = segmenter or RegionSegmenter()
        self.history = EditHistory(max_depth=history_depth)
        self._annotations: Tuple[Annotation, ...] = ()

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return self._annotations

    def __len__(self) -> int:
        return len(self._annotations)

    def long_press_enabled(self) -> bool:
        """Both modes use long press on a hold."""
        return self.problem_type in (ProblemType.BOULDERING, ProblemType.ENDURANCE)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> Optional[int]:
        """
        Index of the newest annotation containing (x, y), or None.

        Newer shapes win where shapes overlap.
        """
        for index in range(len(self._annotations) - 1, -1, -1):
            shape = self._annotations[index].shape
            if not isinstance(shape, SHAPE_TYPES):
                raise TypeError(f"Unknown shape type: {type(shape).__name__}")
            if shape.contains(x, y):
                return index
        return None

    def next_sequence_number(self) -> int:
        """Smallest positive number not used by any annotation."""
        used = {n for a in self._annotations for n in a.sequence_numbers}
        number = 1
        while number in used:
            number += 1
        return number

    # ------------------------------------------------------------------
    # Gesture handlers
    # ------------------------------------------------------------------

    def apply_click(self, image: Optional[np.ndarray],
                    x: float, y: float, count: int) -> bool:
        """
        Apply a tap sequence of multiplicity ``count`` at (x, y).

        Args:
            image: Backing buffer the hold is traced from
            x, y: Tap position in backing-buffer pixels
            count: Tap multiplicity (1 = single tap)

        Returns:
            True if the annotation list changed
        """
        if image is None or count < 1:
            return False

        index = self.hit_test(x, y)
        if index is None:
            if count != 1:
                return False
            return self._add_hold(image, x, y)

        if self.problem_type is ProblemType.BOULDERING:
            color = HoldColor.for_tap_count(count)
            current = self._annotations[index]
            if current.color is color:
                return False
            return self._replace(index, current.with_color(color),
                                 f"Mark hold {color.name.lower()}")

        if count >= 3:
            return self._remove(index, "Remove hold")
        number = self.next_sequence_number()
        return self._replace(index, self._annotations[index].with_number(number),
                             f"Add number {number}")

    def apply_long_press(self, index: int) -> bool:
        """
        Apply a long press on the annotation at ``index``.

        The index is resolved against the current list; a stale index is
        ignored.
        """
        if not 0 <= index < len(self._annotations):
            logger.debug(f"Long press on missing shape {index}")
            return False

        if self.problem_type is ProblemType.BOULDERING:
            return self._remove(index, "Delete hold")

        current = self._annotations[index]
        if not current.sequence_numbers:
            return False
        trimmed = current.without_last_number()
        if not trimmed.sequence_numbers:
            return self._remove(index, "Delete hold")
        return self._replace(index, trimmed, "Remove number")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        edit = self.history.undo()
        if edit is None:
            return False
        self._annotations = edit.before
        return True

    def redo(self) -> bool:
        edit = self.history.redo()
        if edit is None:
            return False
        self._annotations = edit.after
        return True

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def clear(self):
        """Drop every annotation and the edit history (new image)."""
        self._annotations = ()
        self.history.clear()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _add_hold(self, image: np.ndarray, x: float, y: float) -> bool:
        h, w = image.shape[:2]
        if not (0 <= x < w and 0 <= y < h):
            return False

        numbers: Tuple[int, ...] = ()
        if self.problem_type is ProblemType.ENDURANCE:
            numbers = (self.next_sequence_number(),)

        detected = self.segmenter.detect_hold(image, (x, y))
        if detected is not None:
            ellipse, region = detected
            annotation = Annotation(shape=ellipse, color=HoldColor.RED,
                                    sequence_numbers=numbers,
                                    pixel_count=region.pixel_count)
        else:
            annotation = Annotation(shape=self.segmenter.default_circle(x, y),
                                    color=HoldColor.RED,
                                    sequence_numbers=numbers)

        logger.debug(f"Add {annotation.shape.kind} at ({x:.0f}, {y:.0f})")
        return self._commit("Add hold", self._annotations + (annotation,))

    def _replace(self, index: int, annotation: Annotation, description: str) -> bool:
        updated: List[Annotation] = list(self._annotations)
        updated[index] = annotation
        return self._commit(description, tuple(updated))

    def _remove(self, index: int, description: str) -> bool:
        updated = self._annotations[:index] + self._annotations[index + 1:]
        return self._commit(description, updated)

    def _commit(self, description: str, after: Tuple[Annotation, ...]) -> bool:
        edit = Edit(description=description, before=self._annotations, after=after)
        self._annotations = after
        self.history.record(edit)
        return True
