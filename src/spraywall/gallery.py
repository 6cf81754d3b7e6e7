"""Problem gallery - browse, retag and delete saved problems."""

import logging
from typing import Callable, List, Optional, Sequence

from spraywall.config import DELETE_CONFIRM_KEYWORD
from spraywall.errors import SprayWallError
from spraywall.io.store import ProblemStore
from spraywall.models import Problem, ProblemType, normalize_tags

logger = logging.getLogger("spraywall.gallery")


class ProblemGallery:
    """
    List of one owner's problems of one type, with a modal viewer.

    ``current`` is the problem open in the viewer; ``next``/``prev`` wrap
    around the list. Store failures go to ``on_error`` and the operation
    reports False.
    """

    def __init__(self, store: ProblemStore, owner_id: str,
                 problem_type: ProblemType,
                 on_error: Callable[[str], None] = None):
        self.store = store
        self.owner_id = owner_id
        self.problem_type = ProblemType.parse(problem_type)
        self.on_error = on_error or (lambda message: None)
        self._problems: List[Problem] = []
        self.current_index: Optional[int] = None

    @property
    def problems(self) -> List[Problem]:
        return list(self._problems)

    @property
    def current(self) -> Optional[Problem]:
        if self.current_index is None:
            return None
        return self._problems[self.current_index]

    def refresh(self) -> bool:
        """Reload the list from the store, keeping the open problem if it still exists."""
        current_id = self.current.problem_id if self.current else None
        try:
            self._problems = self.store.list_problems(self.owner_id, self.problem_type)
        except SprayWallError as e:
            self._report(f"Could not load problems: {e}")
            return False

        self.current_index = None
        if current_id is not None:
            for i, problem in enumerate(self._problems):
                if problem.problem_id == current_id:
                    self.current_index = i
                    break
        logger.debug(f"Loaded {len(self._problems)} {self.problem_type.value} problems")
        return True

    # ------------------------------------------------------------------
    # Viewer
    # ------------------------------------------------------------------

    def open(self, index: int) -> Optional[Problem]:
        if not 0 <= index < len(self._problems):
            return None
        self.current_index = index
        return self.current

    def close(self):
        self.current_index = None

    def next(self) -> Optional[Problem]:
        return self._step(1)

    def prev(self) -> Optional[Problem]:
        return self._step(-1)

    def _step(self, delta: int) -> Optional[Problem]:
        if self.current_index is None or not self._problems:
            return None
        self.current_index = (self.current_index + delta) % len(self._problems)
        return self.current

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    @staticmethod
    def add_tag(tags: Sequence[str], value: str) -> List[str]:
        """Tags with ``value`` appended, unless blank or already present."""
        return normalize_tags(list(tags) + [value])

    @staticmethod
    def remove_tag(tags: Sequence[str], value: str) -> List[str]:
        return [tag for tag in normalize_tags(tags) if tag != value.strip()]

    def save_tags(self, problem_id: str, tags: Sequence[str]) -> bool:
        try:
            updated = self.store.update_tags(problem_id, tags)
        except SprayWallError as e:
            self._report(f"Could not update tags: {e}")
            return False

        for i, problem in enumerate(self._problems):
            if problem.problem_id == problem_id:
                self._problems[i] = updated
        return True

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, problem_id: str, confirmation: str) -> bool:
        """
        Delete a problem once the user typed the confirmation keyword.

        Args:
            problem_id: Problem to delete
            confirmation: Text typed by the user, must equal DELETE_CONFIRM_KEYWORD

        Returns:
            True if the problem was deleted
        """
        if confirmation != DELETE_CONFIRM_KEYWORD:
            self._report(f"Type '{DELETE_CONFIRM_KEYWORD}' to confirm.")
            return False

        try:
            self.store.delete(problem_id)
        except SprayWallError as e:
            self._report(f"Could not delete problem: {e}")
            return False

        current_id = self.current.problem_id if self.current else None
        self._problems = [p for p in self._problems if p.problem_id != problem_id]
        if current_id == problem_id or not self._problems:
            self.current_index = None
        elif current_id is not None:
            self.current_index = next(
                i for i, p in enumerate(self._problems) if p.problem_id == current_id
            )
        return True

    def _report(self, message: str):
        logger.warning(message)
        self.on_error(message)
