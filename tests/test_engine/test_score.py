"""
Score Value Object Tests.
"""

import math

import pytest
from hypothesis import given, settings as hyp_settings
from hypothesis import strategies as st

from fraudrisk.engine import RiskLevel, Score
from fraudrisk.exceptions import ErrorCode, InvalidArgumentError, ScoreValidationError


class TestScore:
    """Test construction and value semantics."""

    def test_valid_bounds(self):
        assert Score(0).value == 0.0
        assert Score(1).value == 1.0
        assert Score(0.42).value == 0.42

    def test_int_is_stored_as_float(self):
        assert isinstance(Score(1).value, float)

    def test_below_zero_fails(self):
        with pytest.raises(ScoreValidationError):
            Score(-0.01)

    def test_above_one_fails(self):
        with pytest.raises(ScoreValidationError):
            Score(1.01)

    def test_nan_fails(self):
        with pytest.raises(ScoreValidationError):
            Score(math.nan)

    def test_non_numeric_fails(self):
        with pytest.raises(InvalidArgumentError):
            Score("0.5")
        with pytest.raises(InvalidArgumentError):
            Score(True)

    def test_validation_error_carries_code_and_field(self):
        with pytest.raises(ScoreValidationError) as exc_info:
            Score(2.0)
        err = exc_info.value
        assert err.code == ErrorCode.VALIDATION_ERROR
        assert err.field == "value"
        assert err.to_dict()["code"] == "E1001"

    def test_value_equality(self):
        assert Score(0.5) == Score(0.5)
        assert Score(0.5) != Score(0.6)
        assert len({Score(0.5), Score(0.5)}) == 1

    def test_string_conversion(self):
        assert str(Score(0.5)) == "0.5"
        assert float(Score(0.25)) == 0.25

    def test_immutable(self):
        score = Score(0.3)
        with pytest.raises(AttributeError):
            score.value = 0.9


class TestScoreParsing:
    """Test the shape-detecting constructor."""

    def test_from_number(self):
        assert Score.of(0.7) == Score(0.7)

    def test_from_score_returns_same(self):
        score = Score(0.7)
        assert Score.of(score) is score

    def test_from_value_record(self):
        assert Score.of({"value": 0.7}) == Score(0.7)

    def test_record_without_value_fails(self):
        with pytest.raises(InvalidArgumentError):
            Score.of({"score": 0.7})

    def test_out_of_range_record_fails(self):
        with pytest.raises(ScoreValidationError):
            Score.of({"value": 3})

    def test_zero(self):
        assert Score.zero().value == 0.0


class TestScoreRiskLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.0, RiskLevel.UNKNOWN),
            (0.1, RiskLevel.LOW),
            (0.4, RiskLevel.MODERATE),
            (0.7, RiskLevel.HIGH),
            (0.9, RiskLevel.CRITICAL),
            (1.0, RiskLevel.CRITICAL),
        ],
    )
    def test_bands(self, value, expected):
        assert Score(value).risk_level() is expected


class TestScorePropertyBased:
    @given(st.floats(min_value=0.0, max_value=1.0))
    @hyp_settings(max_examples=100)
    def test_in_range_round_trips(self, value):
        assert Score(value).value == value

    @given(
        st.one_of(
            st.floats(max_value=-1e-9, allow_nan=False),
            st.floats(min_value=1.0 + 1e-9, allow_nan=False),
        )
    )
    @hyp_settings(max_examples=100)
    def test_out_of_range_fails(self, value):
        with pytest.raises(ScoreValidationError):
            Score(value)
