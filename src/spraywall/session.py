"""
Editor session - one wall photo being marked up.

Ties the pieces together: the image source provides the photo, the gesture
classifier turns pointer events into clicks and long presses, the hold
editor applies them, and the renderer redraws the visible buffer after every
change. Saving renders the export buffer and hands it to the problem store.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple, Union

import numpy as np

from spraywall.config import EditorSettings
from spraywall.core.editor import HoldEditor
from spraywall.core.gestures import GestureClassifier
from spraywall.core.rendering import Renderer, fit_display_size
from spraywall.core.scheduling import ManualScheduler, Scheduler
from spraywall.core.segmentation import RegionSegmenter
from spraywall.errors import PersistenceError, SprayWallError, ValidationError
from spraywall.io.image_source import ImageHandle, ImageSource
from spraywall.io.store import ProblemStore
from spraywall.models import Annotation, Problem, ProblemType
from spraywall.utils.geometry import scale_to_backing
from spraywall.utils.image import encode_png

logger = logging.getLogger("spraywall.session")

# (left, top, width, height) of the displayed canvas in client coordinates
Rect = Tuple[float, float, float, float]


class SprayWallSession:
    """
    Editing session for one problem.

    Args:
        problem_type: Bouldering or endurance interaction rules
        store: Where saved problems go
        owner_id: Author recorded with saved problems
        scheduler: Timer source for gestures (TkScheduler in the GUI)
        settings: Tunables, defaults when omitted
        image_source: Photo loader
        on_change: Called after the visible buffer was redrawn
        on_error: Called with a user-facing message when something fails
    """

    def __init__(self,
                 problem_type: ProblemType,
                 store: Optional[ProblemStore] = None,
                 owner_id: Optional[str] = None,
                 scheduler: Optional[Scheduler] = None,
                 settings: Optional[EditorSettings] = None,
                 image_source: Optional[ImageSource] = None,
                 on_change: Callable[[], None] = None,
                 on_error: Callable[[str], None] = None):
        self.settings = settings or EditorSettings()
        self.problem_type = ProblemType.parse(problem_type)
        self.store = store
        self.owner_id = owner_id or self.settings.owner_id
        self.scheduler = scheduler or ManualScheduler()
        self.image_source = image_source or ImageSource()
        self.on_change = on_change or (lambda: None)
        self.on_error = on_error or (lambda message: None)

        self.editor = HoldEditor(self.problem_type,
                                 segmenter=RegionSegmenter.from_settings(self.settings))
        self.renderer = Renderer(self.settings)
        self.classifier = GestureClassifier(
            self.scheduler,
            hit_test=self.editor.hit_test,
            on_click=self._on_click,
            on_long_press=self._on_long_press,
            long_press_enabled=self.editor.long_press_enabled,
            settings=self.settings,
        )

        self._handle: Optional[ImageHandle] = None
        self.base: Optional[np.ndarray] = None
        self.visible: Optional[np.ndarray] = None
        self._closed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def has_image(self) -> bool:
        return self.base is not None

    @property
    def display_size(self) -> Tuple[int, int]:
        """(width, height) of the backing buffer, (0, 0) without an image."""
        if self.base is None:
            return (0, 0)
        h, w = self.base.shape[:2]
        return (w, h)

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return self.editor.annotations

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def load_image(self, path: Union[str, Path]) -> bool:
        """Open a photo, replacing the current one and its annotations."""
        try:
            handle = self.image_source.open(path)
        except OSError as e:
            self._report(f"Could not open image: {e}")
            return False
        self._set_image(handle)
        return True

    def load_array(self, pixels: np.ndarray, source: str = "<memory>"):
        """Use an in-memory RGB buffer as the photo."""
        self._set_image(self.image_source.from_array(pixels, source))

    def _set_image(self, handle: ImageHandle):
        self.classifier.reset()
        self._release_image()
        self.editor.clear()

        self._handle = handle
        width, height = handle.size
        size = fit_display_size(
            width, height,
            viewport_height=self.settings.viewport_height,
            max_width=self.settings.max_display_width,
            max_height_ratio=self.settings.max_display_height_ratio,
        )
        self.base = self.renderer.prepare_base(handle.pixels, size)
        logger.info(f"Editing {handle.source} at {size[0]}x{size[1]}")
        self._refresh()

    def _release_image(self):
        if self._handle is not None:
            self._handle.release()
            self._handle = None
        self.base = None
        self.visible = None

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def to_canvas(self, cx: float, cy: float,
                  rect: Optional[Rect] = None) -> Tuple[float, float]:
        """Client coordinates to backing-buffer pixels; identity without a rect."""
        if rect is None:
            return (cx, cy)
        return scale_to_backing((cx, cy), rect, self.display_size)

    def pointer_down(self, cx: float, cy: float, rect: Optional[Rect] = None):
        if self.base is None:
            return
        x, y = self.to_canvas(cx, cy, rect)
        self.classifier.pointer_down(x, y)

    def pointer_up(self, cx: float = None, cy: float = None, rect: Optional[Rect] = None):
        # The tap position is the one captured at pointer down
        self.classifier.pointer_up()

    def pointer_cancel(self):
        self.classifier.pointer_cancel()

    def pointer_leave(self):
        self.classifier.pointer_leave()

    def _on_click(self, x: float, y: float, count: int):
        if self.base is None:
            return
        if self.editor.apply_click(self.base, x, y, count):
            self._refresh()

    def _on_long_press(self, index: int):
        if self.editor.apply_long_press(index):
            self._refresh()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        if self.editor.undo():
            self._refresh()
            return True
        return False

    def redo(self) -> bool:
        if self.editor.redo():
            self._refresh()
            return True
        return False

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render_export(self) -> Optional[np.ndarray]:
        """Flattened image at backing resolution, None without an image."""
        if self.base is None:
            return None
        return self.renderer.render_export(self.base, self.editor.annotations,
                                           self.problem_type)

    def save(self, name: str, tags: Iterable[str] = ()) -> Optional[Problem]:
        """
        Save the annotated photo as a new problem.

        Validation and store failures are reported through ``on_error``;
        annotations are kept so the user can retry.

        Returns:
            The stored problem, or None if nothing was saved
        """
        try:
            if self.base is None:
                raise ValidationError("Please upload an image.")
            name = (name or "").strip()
            if not name:
                raise ValidationError("Please enter a problem name.")
            if self.store is None:
                raise PersistenceError("No problem store configured.")

            image = encode_png(self.render_export())
            return self.store.save(self.owner_id, name, self.problem_type, image, tags)
        except SprayWallError as e:
            self._report(str(e))
            return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self):
        """Cancel pending gestures, drop the photo and all annotations."""
        self.classifier.reset()
        self._release_image()
        self.editor.clear()
        self.on_change()

    def close(self):
        if self._closed:
            return
        self.classifier.reset()
        self._release_image()
        self.editor.clear()
        self._closed = True
        logger.debug("Session closed")

    def __enter__(self) -> "SprayWallSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _refresh(self):
        if self.base is not None:
            self.visible = self.renderer.render(self.base, self.editor.annotations,
                                                self.problem_type)
        self.on_change()

    def _report(self, message: str):
        logger.warning(message)
        self.on_error(message)
