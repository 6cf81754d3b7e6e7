"""Tests for undo/redo history."""

import pytest

from spraywall.core.undo import Edit, EditHistory
from spraywall.models import Annotation, Circle


@pytest.fixture
def history():
    return EditHistory(max_depth=3)


def make_edit(n):
    before = tuple(Annotation(shape=Circle(i, i, 5)) for i in range(n))
    after = before + (Annotation(shape=Circle(n, n, 5)),)
    return Edit(description=f"Add {n}", before=before, after=after)


class TestEditHistory:

    def test_empty(self, history):
        assert not history.can_undo()
        assert not history.can_redo()
        assert history.undo() is None
        assert history.redo() is None
        assert history.undo_description is None

    def test_undo_returns_edit(self, history):
        edit = make_edit(0)
        history.record(edit)

        assert history.undo_description == "Add 0"
        assert history.undo() is edit
        assert history.can_redo()
        assert history.redo() is edit

    def test_record_clears_redo(self, history):
        history.record(make_edit(0))
        history.undo()
        history.record(make_edit(1))
        assert not history.can_redo()

    def test_max_depth(self, history):
        for n in range(5):
            history.record(make_edit(n))

        assert len(history.undo_stack) == 3
        assert history.undo_stack[0].description == "Add 2"

    def test_clear(self, history):
        history.record(make_edit(0))
        history.undo()
        history.clear()
        assert not history.can_undo()
        assert not history.can_redo()
