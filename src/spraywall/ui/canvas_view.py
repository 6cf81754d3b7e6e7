"""
Canvas view - tkinter editor window.

Left button press / release / leave on the canvas feed the session's
gesture classifier; the visible buffer is redrawn through PIL.ImageTk
whenever the session reports a change.
"""

import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Optional

from PIL import Image, ImageTk

from spraywall.config import EditorSettings
from spraywall.core.scheduling import TkScheduler
from spraywall.io.store import ProblemStore
from spraywall.models import ProblemType, normalize_tags
from spraywall.session import SprayWallSession

logger = logging.getLogger("spraywall.ui")


class SprayWallCanvas(ttk.Frame):
    """Photo canvas with name, tags and save controls."""

    def __init__(self, master, problem_type: ProblemType,
                 store: ProblemStore, settings: EditorSettings = None):
        super().__init__(master)
        self.settings = settings or EditorSettings()
        self.session = SprayWallSession(
            problem_type,
            store=store,
            scheduler=TkScheduler(self),
            settings=self.settings,
            on_change=self._redraw,
            on_error=self._show_error,
        )
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._setup_ui()

    def _setup_ui(self):
        toolbar = ttk.Frame(self)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=4, pady=4)

        ttk.Button(toolbar, text="Open...", command=self._open_image).pack(side=tk.LEFT)
        ttk.Button(toolbar, text="Undo", command=self.session.undo).pack(side=tk.LEFT, padx=2)
        ttk.Button(toolbar, text="Redo", command=self.session.redo).pack(side=tk.LEFT, padx=2)
        ttk.Label(toolbar, text=self.session.problem_type.value.title()).pack(side=tk.RIGHT)

        self.canvas = tk.Canvas(self, width=self.settings.max_display_width, height=300,
                                bg="#222222", highlightthickness=0, cursor="crosshair")
        self.canvas.pack(side=tk.TOP, padx=4, pady=4)
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<Leave>", lambda e: self.session.pointer_leave())

        form = ttk.Frame(self)
        form.pack(side=tk.TOP, fill=tk.X, padx=4, pady=4)
        ttk.Label(form, text="Name").grid(row=0, column=0, sticky=tk.W)
        self.name_var = tk.StringVar()
        ttk.Entry(form, textvariable=self.name_var).grid(row=0, column=1, sticky=tk.EW)
        ttk.Label(form, text="Tags").grid(row=1, column=0, sticky=tk.W)
        self.tags_var = tk.StringVar()
        ttk.Entry(form, textvariable=self.tags_var).grid(row=1, column=1, sticky=tk.EW)
        form.columnconfigure(1, weight=1)

        ttk.Button(self, text="Save", command=self._save).pack(side=tk.TOP, pady=4)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _canvas_rect(self):
        return (0, 0, self.canvas.winfo_width(), self.canvas.winfo_height())

    def _on_press(self, event):
        self.session.pointer_down(event.x, event.y, self._canvas_rect())

    def _on_release(self, event):
        self.session.pointer_up(event.x, event.y, self._canvas_rect())

    def _open_image(self):
        path = filedialog.askopenfilename(
            title="Open wall photo",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.bmp *.webp"), ("All files", "*.*")],
        )
        if path:
            self.load_image(path)

    def load_image(self, path: str):
        self.session.load_image(path)

    def _save(self):
        tags = normalize_tags(self.tags_var.get().split(","))
        problem = self.session.save(self.name_var.get(), tags)
        if problem is not None:
            messagebox.showinfo("Saved", f"Saved '{problem.name}'", parent=self)

    def _show_error(self, message: str):
        messagebox.showerror("Spray Wall", message, parent=self)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _redraw(self):
        self.canvas.delete("all")
        if self.session.visible is None:
            self._tk_image = None
            return
        width, height = self.session.display_size
        self.canvas.configure(width=width, height=height)
        self._tk_image = ImageTk.PhotoImage(Image.fromarray(self.session.visible))
        self.canvas.create_image(0, 0, anchor=tk.NW, image=self._tk_image)

    def destroy(self):
        self.session.close()
        super().destroy()


def run_editor(problem_type: ProblemType, store: ProblemStore,
               settings: EditorSettings = None, image_path: Optional[str] = None):
    """Open the editor window and run the Tk main loop."""
    root = tk.Tk()
    root.title("Spray Wall")
    settings = settings or EditorSettings()
    settings.viewport_height = root.winfo_screenheight()

    view = SprayWallCanvas(root, problem_type, store, settings)
    view.pack(fill=tk.BOTH, expand=True)
    if image_path:
        root.after(100, lambda: view.load_image(image_path))

    root.protocol("WM_DELETE_WINDOW", root.destroy)
    root.mainloop()
