"""Problem persistence.

``ProblemStore`` is the interface the editor and gallery talk to.
``JsonProblemStore`` keeps a JSON index plus one PNG per problem in a
directory.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from spraywall.errors import PersistenceError, ValidationError
from spraywall.models import Problem, ProblemType, normalize_tags
from spraywall.utils.profiling import profile_block

logger = logging.getLogger("spraywall.store")

VERSION = "1.0"
INDEX_FILE = "problems.json"


class ProblemStore(ABC):
    """Save, list, retag and delete problems."""

    @abstractmethod
    def save(self, owner_id: str, name: str, problem_type: ProblemType,
             image: bytes, tags: Iterable[str] = ()) -> Problem:
        """Store a new problem and return the stored record."""

    @abstractmethod
    def list_problems(self, owner_id: str,
                      problem_type: Optional[ProblemType] = None) -> List[Problem]:
        """Problems of ``owner_id``, most recent first."""

    @abstractmethod
    def update_tags(self, problem_id: str, tags: Iterable[str]) -> Problem:
        """Replace the tags of a problem."""

    @abstractmethod
    def delete(self, problem_id: str):
        """Remove a problem and its image."""

    @abstractmethod
    def read_image(self, problem: Problem) -> bytes:
        """Encoded flattened image of a problem."""


class JsonProblemStore(ProblemStore):
    """
    Directory-backed problem store.

    Layout:
        <root>/problems.json   index of all problems
        <root>/<id>.png        flattened image of each problem
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    @property
    def index_path(self) -> Path:
        return self.root / INDEX_FILE

    # ------------------------------------------------------------------
    # ProblemStore
    # ------------------------------------------------------------------

    def save(self, owner_id: str, name: str, problem_type: ProblemType,
             image: bytes, tags: Iterable[str] = ()) -> Problem:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Please enter a problem name.")
        if not image:
            raise ValidationError("Please upload an image.")

        problem = Problem(
            owner_id=owner_id,
            name=name,
            problem_type=ProblemType.parse(problem_type),
            tags=list(tags),
        )
        problem.image_file = f"{problem.problem_id}.png"

        with profile_block("problem_save"):
            records = self._read_index()
            try:
                self.root.mkdir(parents=True, exist_ok=True)
                (self.root / problem.image_file).write_bytes(image)
            except OSError as e:
                raise PersistenceError(f"Could not write image for '{name}': {e}") from e
            records.append(problem.to_dict())
            try:
                self._write_index(records)
            except PersistenceError:
                self._remove_image(problem)
                raise

        logger.info(f"Saved problem {problem.problem_id} '{name}' ({problem.problem_type.value})")
        return problem

    def list_problems(self, owner_id: str,
                      problem_type: Optional[ProblemType] = None) -> List[Problem]:
        wanted = ProblemType.parse(problem_type) if problem_type else None
        problems = []
        # Newest insertions first so equal timestamps keep most-recent-first
        for data in reversed(self._read_index()):
            problem = Problem.from_dict(data)
            if problem.owner_id != owner_id:
                continue
            if wanted is not None and problem.problem_type is not wanted:
                continue
            problems.append(problem)
        problems.sort(key=lambda p: p.created_at, reverse=True)
        return problems

    def update_tags(self, problem_id: str, tags: Iterable[str]) -> Problem:
        records = self._read_index()
        index = self._find(records, problem_id)
        problem = Problem.from_dict(records[index])
        problem.tags = normalize_tags(tags)
        problem.touch()
        records[index] = problem.to_dict()
        self._write_index(records)
        logger.info(f"Updated tags of {problem_id}: {problem.tags}")
        return problem

    def delete(self, problem_id: str):
        records = self._read_index()
        index = self._find(records, problem_id)
        problem = Problem.from_dict(records.pop(index))
        self._write_index(records)

        self._remove_image(problem)
        logger.info(f"Deleted problem {problem_id}")

    def read_image(self, problem: Problem) -> bytes:
        try:
            return (self.root / problem.image_file).read_bytes()
        except OSError as e:
            raise PersistenceError(f"Could not read image of {problem.problem_id}: {e}") from e

    def _remove_image(self, problem: Problem):
        if not problem.image_file:
            return
        image_path = self.root / problem.image_file
        try:
            image_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove {image_path}: {e}")

    # ------------------------------------------------------------------
    # Index file
    # ------------------------------------------------------------------

    def _find(self, records: List[Dict], problem_id: str) -> int:
        for i, data in enumerate(records):
            if data.get("id") == problem_id:
                return i
        raise PersistenceError(f"No problem with id {problem_id!r}")

    def _read_index(self) -> List[Dict]:
        if not self.index_path.exists():
            return []
        try:
            with open(self.index_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {self.index_path}: {e}") from e
        return list(data.get("problems", []))

    def _write_index(self, records: List[Dict]):
        data = {"version": VERSION, "problems": records}
        tmp_path = self.index_path.with_suffix(".tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.index_path)
        except OSError as e:
            raise PersistenceError(f"Could not write {self.index_path}: {e}") from e
