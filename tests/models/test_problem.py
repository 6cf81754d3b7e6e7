"""Tests for problem model."""

import pytest

from spraywall.models import Problem, ProblemType, normalize_tags


class TestProblemType:

    @pytest.mark.parametrize("value, expected", [
        ("bouldering", ProblemType.BOULDERING),
        (" Endurance ", ProblemType.ENDURANCE),
        (ProblemType.ENDURANCE, ProblemType.ENDURANCE),
    ])
    def test_parse(self, value, expected):
        assert ProblemType.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ProblemType.parse("sport")


class TestNormalizeTags:

    def test_trim_dedupe(self):
        assert normalize_tags([" crimp", "crimp", "", "  ", "sloper"]) == ["crimp", "sloper"]

    def test_none(self):
        assert normalize_tags(None) == []


class TestProblem:

    def test_defaults(self):
        problem = Problem(owner_id="me", name="Warmup", problem_type=ProblemType.BOULDERING)
        assert len(problem.problem_id) == 32
        assert problem.created_at
        assert problem.updated_at == problem.created_at
        assert problem.tags == []

    def test_tags_normalized(self):
        problem = Problem(owner_id="me", name="A", problem_type=ProblemType.ENDURANCE,
                          tags=["x", " x ", "y"])
        assert problem.tags == ["x", "y"]

    def test_touch(self):
        problem = Problem(owner_id="me", name="A", problem_type=ProblemType.ENDURANCE,
                          created_at="2020-01-01T00:00:00+00:00")
        problem.touch()
        assert problem.updated_at > problem.created_at

    def test_dict_round_trip(self):
        problem = Problem(owner_id="me", name="Crux", problem_type=ProblemType.ENDURANCE,
                          image_file="abc.png", tags=["power"])
        data = problem.to_dict()

        assert data["type"] == "endurance"
        assert data["id"] == problem.problem_id
        assert Problem.from_dict(data) == problem
