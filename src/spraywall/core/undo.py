"""
Undo/Redo history of hold edits.

Annotations are immutable, so an edit is just the annotation list before and
after it. Undoing restores ``before``, redoing restores ``after``.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from spraywall.models import Annotation


@dataclass(frozen=True)
class Edit:
    """One reversible change of the annotation list."""
    description: str
    before: Tuple[Annotation, ...]
    after: Tuple[Annotation, ...]


class EditHistory:
    """Bounded undo/redo stacks of edits."""

    def __init__(self, max_depth: int = 50):
        self.max_depth = max_depth
        self.undo_stack: List[Edit] = []
        self.redo_stack: List[Edit] = []

    def record(self, edit: Edit):
        """Push an applied edit. A new edit invalidates the redo history."""
        self.undo_stack.append(edit)
        if len(self.undo_stack) > self.max_depth:
            self.undo_stack.pop(0)
        self.redo_stack.clear()

    def undo(self) -> Optional[Edit]:
        """Pop the last edit, or None if there is nothing to undo."""
        if not self.undo_stack:
            return None
        edit = self.undo_stack.pop()
        self.redo_stack.append(edit)
        return edit

    def redo(self) -> Optional[Edit]:
        """Pop the last undone edit, or None if there is nothing to redo."""
        if not self.redo_stack:
            return None
        edit = self.redo_stack.pop()
        self.undo_stack.append(edit)
        return edit

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    @property
    def undo_description(self) -> Optional[str]:
        return self.undo_stack[-1].description if self.undo_stack else None

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
