"""Tests for shape models."""

import pytest

from spraywall.models import (
    Circle,
    Ellipse,
    Polygon,
    shape_from_dict,
    shape_to_dict,
)


class TestCircle:

    def test_contains(self):
        circle = Circle(50, 50, 10)
        assert circle.contains(50, 50)
        assert circle.contains(60, 50)
        assert not circle.contains(61, 50)

    def test_label_width(self):
        assert Circle(0, 0, 12).label_width == 24

    def test_frozen(self):
        circle = Circle(0, 0, 1)
        with pytest.raises(AttributeError):
            circle.radius = 5


class TestEllipse:

    def test_radius_derived(self):
        assert Ellipse(0, 0, 40, 20).radius == 20

    def test_radius_explicit(self):
        assert Ellipse(0, 0, 40, 20, radius=7).radius == 7

    def test_contains(self):
        ellipse = Ellipse(50, 50, 40, 20)
        assert ellipse.contains(70, 50)
        assert ellipse.contains(50, 60)
        assert not ellipse.contains(50, 61)
        assert not ellipse.contains(65, 58)

    def test_degenerate_contains_nothing(self):
        assert not Ellipse(0, 0, 0, 10).contains(0, 0)


class TestPolygon:

    @pytest.fixture
    def square(self):
        return Polygon(((0, 0), (10, 0), (10, 10), (0, 10)))

    def test_points_normalized(self, square):
        assert square.points[1] == (10.0, 0.0)
        assert isinstance(square.points[1][0], float)

    def test_contains(self, square):
        assert square.contains(5, 5)
        assert not square.contains(15, 5)

    def test_center(self, square):
        assert square.center == pytest.approx((5, 5))

    def test_label_width(self, square):
        assert square.label_width == 10

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            Polygon(())


class TestSerialization:

    @pytest.mark.parametrize("shape", [
        Circle(1, 2, 3),
        Ellipse(4, 5, 20, 10),
        Polygon(((0, 0), (4, 0), (0, 3))),
    ])
    def test_round_trip(self, shape):
        data = shape_to_dict(shape)
        assert data["type"] == shape.kind
        assert shape_from_dict(data) == shape

    def test_unknown_shape_to_dict(self):
        with pytest.raises(TypeError):
            shape_to_dict("hexagon")

    def test_unknown_shape_from_dict(self):
        with pytest.raises(ValueError):
            shape_from_dict({"type": "hexagon"})
