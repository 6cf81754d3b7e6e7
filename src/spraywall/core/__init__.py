"""Core editing logic: segmentation, gestures, annotation rules, rendering."""

from spraywall.core.segmentation import RegionSegmenter, SegmentedRegion
from spraywall.core.scheduling import Scheduler, ManualScheduler, TkScheduler
from spraywall.core.gestures import GestureClassifier, GestureState
from spraywall.core.undo import Edit, EditHistory
from spraywall.core.editor import HoldEditor
from spraywall.core.rendering import Renderer, fit_display_size

__all__ = [
    "RegionSegmenter",
    "SegmentedRegion",
    "Scheduler",
    "ManualScheduler",
    "TkScheduler",
    "GestureClassifier",
    "GestureState",
    "Edit",
    "EditHistory",
    "HoldEditor",
    "Renderer",
    "fit_display_size",
]
