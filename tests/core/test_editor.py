"""Tests for the hold editor mutation rules."""

import pytest

from spraywall.core.editor import HoldEditor
from spraywall.core.segmentation import RegionSegmenter
from spraywall.models import Circle, Ellipse, HoldColor, ProblemType


@pytest.fixture
def bouldering():
    return HoldEditor(ProblemType.BOULDERING)


@pytest.fixture
def endurance():
    return HoldEditor(ProblemType.ENDURANCE)


class TestAddHold:
    """Tapping empty wall."""

    def test_tap_traces_ellipse(self, bouldering, red_patch_image):
        assert bouldering.apply_click(red_patch_image, 50, 50, 1)

        assert len(bouldering) == 1
        annotation = bouldering.annotations[0]
        assert isinstance(annotation.shape, Ellipse)
        assert annotation.color is HoldColor.RED
        assert annotation.pixel_count == 100
        assert annotation.sequence_numbers == ()

    def test_ellipse_matches_patch(self, bouldering, red_patch_image):
        """Bounding region is the red patch plus padding."""
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        shape = bouldering.annotations[0].shape

        assert shape.center_x - shape.width / 2 == pytest.approx(45, abs=10)
        assert shape.center_x + shape.width / 2 == pytest.approx(55, abs=10)
        assert shape.center_y - shape.height / 2 == pytest.approx(45, abs=10)
        assert shape.center_y + shape.height / 2 == pytest.approx(55, abs=10)

    def test_background_falls_back_to_circle(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 10, 80, 1)

        shape = bouldering.annotations[0].shape
        assert shape == Circle(10, 80, 30.0)
        assert bouldering.annotations[0].pixel_count == 0

    def test_tiny_region_falls_back_to_circle(self, bouldering, red_patch_image):
        red_patch_image[5:7, 5:7] = [0, 0, 0]
        bouldering.apply_click(red_patch_image, 5, 5, 1)
        assert isinstance(bouldering.annotations[0].shape, Circle)

    def test_out_of_bounds_ignored(self, bouldering, red_patch_image):
        assert not bouldering.apply_click(red_patch_image, 100, 50, 1)
        assert not bouldering.apply_click(red_patch_image, -1, 50, 1)
        assert len(bouldering) == 0

    def test_no_image_ignored(self, bouldering):
        assert not bouldering.apply_click(None, 50, 50, 1)

    @pytest.mark.parametrize("count", [2, 3])
    def test_multi_tap_on_empty_wall_ignored(self, bouldering, red_patch_image, count):
        assert not bouldering.apply_click(red_patch_image, 50, 50, count)
        assert len(bouldering) == 0

    def test_custom_segmenter(self, red_patch_image):
        editor = HoldEditor(ProblemType.BOULDERING,
                            segmenter=RegionSegmenter(default_radius=12))
        editor.apply_click(red_patch_image, 10, 10, 1)
        assert editor.annotations[0].shape.radius == 12


class TestHitTest:

    def test_hit_newest_first(self, bouldering, uniform_image):
        """Overlapping fallback circles resolve to the newest one."""
        bouldering.apply_click(uniform_image, 30, 50, 1)
        bouldering.apply_click(uniform_image, 85, 50, 1)

        assert bouldering.annotations[0].shape == Circle(30, 50, 30.0)
        assert bouldering.annotations[1].shape == Circle(85, 50, 30.0)
        assert bouldering.hit_test(58, 50) == 1
        assert bouldering.hit_test(20, 50) == 0
        assert bouldering.hit_test(200, 200) is None

    def test_hit_test_idempotent(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        first = bouldering.hit_test(50, 50)
        assert first == bouldering.hit_test(50, 50) == 0


class TestBouldering:
    """Color by tap multiplicity, delete by long press."""

    def test_double_tap_turns_green(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        assert bouldering.apply_click(red_patch_image, 50, 50, 2)

        assert bouldering.annotations[0].color is HoldColor.GREEN
        assert len(bouldering) == 1

    def test_triple_tap_turns_blue(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.apply_click(red_patch_image, 50, 50, 3)
        assert bouldering.annotations[0].color is HoldColor.BLUE

        bouldering.apply_click(red_patch_image, 50, 50, 5)
        assert bouldering.annotations[0].color is HoldColor.BLUE

    def test_single_tap_back_to_red(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.apply_click(red_patch_image, 50, 50, 2)
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        assert bouldering.annotations[0].color is HoldColor.RED

    def test_same_color_is_noop(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        assert not bouldering.apply_click(red_patch_image, 50, 50, 1)
        assert len(bouldering) == 1

    def test_long_press_deletes(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.apply_click(red_patch_image, 10, 10, 1)

        assert bouldering.apply_long_press(0)
        assert len(bouldering) == 1
        assert isinstance(bouldering.annotations[0].shape, Circle)

    def test_long_press_stale_index(self, bouldering):
        assert not bouldering.apply_long_press(3)
        assert not bouldering.apply_long_press(-1)

    def test_long_press_enabled(self, bouldering):
        assert bouldering.long_press_enabled()


class TestEndurance:
    """Sequence numbers."""

    def test_numbers_assigned_in_order(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 70, 70, 1)

        assert endurance.annotations[0].sequence_numbers == (1,)
        assert endurance.annotations[1].sequence_numbers == (2,)

    def test_double_tap_appends_next_number(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 70, 70, 1)
        endurance.apply_click(two_holds_image, 20, 20, 2)

        assert endurance.annotations[0].sequence_numbers == (1, 3)
        assert endurance.annotations[0].label == "1, 3"

    def test_single_tap_appends_next_number(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 20, 20, 1)
        assert endurance.annotations[0].sequence_numbers == (1, 2)

    def test_triple_tap_removes(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        assert endurance.apply_click(two_holds_image, 20, 20, 3)
        assert len(endurance) == 0

    def test_long_press_removes_last_number(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 20, 20, 2)

        assert endurance.apply_long_press(0)
        assert endurance.annotations[0].sequence_numbers == (1,)

    def test_long_press_on_only_number_deletes(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 70, 70, 1)

        assert endurance.apply_long_press(1)
        assert len(endurance) == 1
        assert endurance.annotations[0].sequence_numbers == (1,)

    def test_freed_number_reused(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 20, 20, 1)
        endurance.apply_click(two_holds_image, 70, 70, 1)
        endurance.apply_long_press(0)

        assert endurance.next_sequence_number() == 1
        endurance.apply_click(two_holds_image, 20, 20, 1)
        assert endurance.annotations[-1].sequence_numbers == (1,)

    def test_numbers_on_fallback_circle(self, endurance, two_holds_image):
        endurance.apply_click(two_holds_image, 45, 45, 1)
        annotation = endurance.annotations[0]
        assert isinstance(annotation.shape, Circle)
        assert annotation.sequence_numbers == (1,)


class TestHistory:

    def test_undo_redo(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.apply_click(red_patch_image, 50, 50, 2)

        assert bouldering.undo()
        assert bouldering.annotations[0].color is HoldColor.RED
        assert bouldering.undo()
        assert len(bouldering) == 0
        assert not bouldering.undo()

        assert bouldering.redo()
        assert bouldering.redo()
        assert bouldering.annotations[0].color is HoldColor.GREEN
        assert not bouldering.redo()

    def test_noop_not_recorded(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        assert bouldering.history.undo_description == "Add hold"
        assert len(bouldering.history.undo_stack) == 1

    def test_clear_drops_history(self, bouldering, red_patch_image):
        bouldering.apply_click(red_patch_image, 50, 50, 1)
        bouldering.clear()
        assert len(bouldering) == 0
        assert not bouldering.can_undo()
        assert not bouldering.can_redo()
