"""Tests for geometry helpers."""

import pytest

from spraywall.utils.geometry import (
    bounding_box,
    clamp,
    distance,
    point_in_circle,
    point_in_ellipse,
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    scale_to_backing,
)


class TestDistance:

    def test_distance(self):
        assert distance((0, 0), (3, 4)) == 5

    def test_point_in_circle_boundary(self):
        assert point_in_circle((3, 4), (0, 0), 5)
        assert not point_in_circle((3, 4.1), (0, 0), 5)


class TestEllipse:

    def test_inside_and_outside(self):
        assert point_in_ellipse((10, 0), (0, 0), 20, 10)
        assert point_in_ellipse((0, 5), (0, 0), 20, 10)
        assert not point_in_ellipse((0, 6), (0, 0), 20, 10)

    def test_degenerate(self):
        assert not point_in_ellipse((0, 0), (0, 0), 0, 0)


class TestPolygon:

    @pytest.fixture
    def triangle(self):
        return [(0, 0), (10, 0), (0, 10)]

    def test_point_in_polygon(self, triangle):
        assert point_in_polygon((2, 2), triangle)
        assert not point_in_polygon((8, 8), triangle)

    def test_area(self, triangle):
        assert polygon_area(triangle) == 50
        assert polygon_area([(0, 0), (1, 1)]) == 0

    def test_centroid_either_winding(self, triangle):
        assert polygon_centroid(triangle) == pytest.approx((10 / 3, 10 / 3))
        assert polygon_centroid(triangle[::-1]) == pytest.approx((10 / 3, 10 / 3))

    def test_centroid_degenerate(self):
        assert polygon_centroid([(0, 0), (4, 0)]) == (2, 0)
        assert polygon_centroid([(3, 4)]) == (3, 4)

    def test_bounding_box(self, triangle):
        assert bounding_box(triangle) == (0, 0, 10, 10)
        assert bounding_box([]) == (0, 0, 0, 0)


class TestScaleToBacking:

    def test_identity(self):
        assert scale_to_backing((10, 20), (0, 0, 100, 100), (100, 100)) == (10, 20)

    def test_scaled_and_offset(self):
        # Displayed at 200x100 from (50, 10), backing buffer 400x200
        assert scale_to_backing((150, 60), (50, 10, 200, 100), (400, 200)) == (200, 100)

    def test_clamped(self):
        assert scale_to_backing((-20, 500), (0, 0, 100, 100), (100, 100)) == (0, 100)

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2
