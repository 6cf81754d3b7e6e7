"""tkinter front-end."""

from spraywall.ui.canvas_view import SprayWallCanvas, run_editor

__all__ = ["SprayWallCanvas", "run_editor"]
