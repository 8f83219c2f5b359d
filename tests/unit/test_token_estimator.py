"""Unit tests for token estimation."""

import pytest

from llm_docs_builder.exceptions import ValidationError
from llm_docs_builder.token_estimator import TokenEstimator, estimate_tokens, round_half_up


@pytest.mark.unit
class TestTokenEstimator:
    """Test character-based token estimation."""

    def test_estimate(self):
        assert TokenEstimator().estimate("Hello, world!") == 3

    @pytest.mark.parametrize("content", ["", None])
    def test_empty(self, content):
        assert TokenEstimator().estimate(content) == 0

    def test_halves_round_up(self):
        assert TokenEstimator().estimate("abcdef") == 2
        assert TokenEstimator().estimate("ab") == 1

    def test_custom_ratio(self):
        assert TokenEstimator(chars_per_token=2).estimate("abcd") == 2

    @pytest.mark.parametrize("ratio", [0, -1.5])
    def test_invalid_ratio(self, ratio):
        with pytest.raises(ValidationError, match="chars_per_token must be positive"):
            TokenEstimator(chars_per_token=ratio)

    def test_shortcut(self):
        assert estimate_tokens("abcdefgh") == 2
        assert estimate_tokens("abcdefgh", chars_per_token=1) == 8


@pytest.mark.unit
class TestRoundHalfUp:
    """Test rounding with halves away from zero."""

    @pytest.mark.parametrize(
        "value,digits,expected",
        [(2.5, 0, 3), (-2.5, 0, -3), (2.4, 0, 2), (1.25, 1, 1.3), (3.14159, 2, 3.14), (0.0, 1, 0.0)],
    )
    def test_values(self, value, digits, expected):
        assert round_half_up(value, digits) == pytest.approx(expected)
