"""Pytest fixtures for spraywall tests."""

import pytest
import numpy as np

from spraywall.config import EditorSettings
from spraywall.core.scheduling import ManualScheduler
from spraywall.errors import PersistenceError
from spraywall.io.store import JsonProblemStore, ProblemStore
from spraywall.models import Annotation, Circle, Ellipse, HoldColor, Problem


# ============================================================================
# Image Fixtures
# ============================================================================

@pytest.fixture
def red_patch_image():
    """100x100 white image with a solid red 10x10 patch at x, y in [45, 55)."""
    img = np.full((100, 100, 3), 255, dtype=np.uint8)
    img[45:55, 45:55] = [255, 0, 0]
    return img


@pytest.fixture
def two_holds_image():
    """100x100 white image with a red hold at (20, 20) and a blue one at (70, 70)."""
    img = np.full((100, 100, 3), 255, dtype=np.uint8)
    img[15:25, 15:25] = [200, 30, 30]
    img[65:75, 65:75] = [30, 30, 200]
    return img


@pytest.fixture
def uniform_image():
    """300x300 mid-gray image, larger than the default pixel cap."""
    return np.full((300, 300, 3), 128, dtype=np.uint8)


# ============================================================================
# Annotation Fixtures
# ============================================================================

@pytest.fixture
def circle_annotation():
    return Annotation(shape=Circle(50, 50, 20), color=HoldColor.RED)


@pytest.fixture
def ellipse_annotation():
    return Annotation(
        shape=Ellipse(center_x=30, center_y=40, width=40, height=20),
        color=HoldColor.GREEN,
        sequence_numbers=(1, 3),
        pixel_count=120,
    )


# ============================================================================
# Session Collaborators
# ============================================================================

@pytest.fixture
def settings():
    return EditorSettings()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store(tmp_path):
    return JsonProblemStore(tmp_path / "problems")


class RecordingStore(ProblemStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved = []
        self.calls = []

    def save(self, owner_id, name, problem_type, image, tags=()):
        self.calls.append(("save", name))
        if self.fail:
            raise PersistenceError("backend unavailable")
        problem = Problem(owner_id=owner_id, name=name, problem_type=problem_type,
                          tags=list(tags))
        self.saved.append((problem, image))
        return problem

    def list_problems(self, owner_id, problem_type=None):
        self.calls.append(("list", owner_id))
        if self.fail:
            raise PersistenceError("backend unavailable")
        return [p for p, _ in self.saved]

    def update_tags(self, problem_id, tags):
        self.calls.append(("update_tags", problem_id))
        raise PersistenceError("backend unavailable")

    def delete(self, problem_id):
        self.calls.append(("delete", problem_id))
        raise PersistenceError("backend unavailable")

    def read_image(self, problem):
        raise PersistenceError("backend unavailable")


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def failing_store():
    return RecordingStore(fail=True)
