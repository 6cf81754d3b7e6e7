"""
Configuration for the spray-wall editor.

All gesture timings, segmentation thresholds and drawing sizes live here so
they can be tuned per device without touching the algorithms.
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger("spraywall.config")

CONFIG_FILE = Path.home() / ".spraywall.json"
DEFAULT_STORE_DIR = Path.home() / ".spraywall" / "problems"

# Literal the user must type before a problem is deleted
DELETE_CONFIRM_KEYWORD = "delete"


@dataclass
class EditorSettings:
    """
    Persistent editor settings.

    Timings are milliseconds, distances and sizes are backing-buffer pixels.
    """
    # Region segmentation
    color_threshold: float = 40.0
    max_region_pixels: int = 50_000
    min_region_pixels: int = 10
    region_padding: int = 10
    max_region_area_ratio: float = 0.1
    default_circle_radius: float = 30.0

    # Gestures
    long_press_ms: int = 500
    click_commit_ms: int = 400
    tap_max_duration_ms: int = 350
    tap_window_ms: int = 450
    tap_distance: float = 50.0

    # Display
    max_display_width: int = 400
    max_display_height_ratio: float = 0.6
    viewport_height: int = 800

    # Drawing
    line_width: int = 4
    export_line_width: int = 3
    min_font_px: int = 14
    max_font_px: int = 28

    # Storage
    store_dir: str = str(DEFAULT_STORE_DIR)
    owner_id: str = "local"


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from config file, ignoring unknown keys."""
    path = Path(path) if path else CONFIG_FILE
    try:
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            known_fields = set(EditorSettings.__dataclass_fields__)
            filtered = {k: v for k, v in data.items() if k in known_fields}
            return EditorSettings(**filtered)
    except (OSError, ValueError, TypeError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
    return EditorSettings()


def save_settings(settings: EditorSettings, path: Optional[Path] = None):
    """Save settings to config file."""
    path = Path(path) if path else CONFIG_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(settings), f, indent=2)
    except OSError as e:
        logger.warning(f"Could not save settings to {path}: {e}")
