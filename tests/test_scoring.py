"""
Tests for score clamping and likelihood labels.

Run with: pytest tests/test_scoring.py -v
"""
import pytest

from authorship_judge.scoring import (
    INDECISIVE,
    LIKELY_AI,
    LIKELY_HUMAN,
    POSSIBLY_AI,
    POSSIBLY_HUMAN,
    clamp_score,
    derive_ai_likelihood,
    derive_teacher_likelihood,
)


class TestClampScore:

    @pytest.mark.parametrize("raw,expected", [
        (150, 100),
        (-5, 0),
        (0, 0),
        (100, 100),
        ("85", 85),
        (69.6, 70),
        (float("inf"), 100),
        (float("-inf"), 0),
        ("1e999", 100),
        ("-1e999", 0),
        (10 ** 400, 100),
    ])
    def test_numeric_values(self, raw, expected):
        assert clamp_score(raw) == expected

    @pytest.mark.parametrize("raw", [None, "high", True, [], {}, float("nan")])
    def test_non_numeric_values_fall_back_to_neutral(self, raw):
        assert clamp_score(raw) == 50


class TestAiLikelihood:

    @pytest.mark.parametrize("score,expected", [
        (100, LIKELY_HUMAN),
        (70, LIKELY_HUMAN),
        (69, POSSIBLY_HUMAN),
        (50, POSSIBLY_HUMAN),
        (49, POSSIBLY_AI),
        (30, POSSIBLY_AI),
        (29, LIKELY_AI),
        (0, LIKELY_AI),
    ])
    def test_threshold_boundaries(self, score, expected):
        assert derive_ai_likelihood(score, "high", False) == expected

    def test_indecisive_flag_overrides_score(self):
        assert derive_ai_likelihood(95, "high", True) == INDECISIVE

    def test_indecisive_confidence_overrides_score(self):
        assert derive_ai_likelihood(5, "indecisive", False) == INDECISIVE


class TestTeacherLikelihood:

    def test_binary_split_at_fifty(self):
        assert derive_teacher_likelihood(50, "medium", False) == LIKELY_HUMAN
        assert derive_teacher_likelihood(49, "medium", False) == LIKELY_AI

    def test_indecisive(self):
        assert derive_teacher_likelihood(80, "indecisive", False) == INDECISIVE
