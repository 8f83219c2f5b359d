#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/token_estimator.py
"""Character-based token count estimation."""

from __future__ import annotations

import math

from llm_docs_builder.constants import DEFAULT_CHARS_PER_TOKEN
from llm_docs_builder.exceptions import ValidationError


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` with halves going away from zero.

    The built-in :func:`round` rounds halves to even, which makes 2.5 tokens
    come out as 2.
    """
    factor = 10**digits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value)


class TokenEstimator:
    """Estimate how many tokens a language model will see for a text.

    The estimate divides the character count by an average number of
    characters per token, which is about four for English prose.

    Parameters
    ----------
    chars_per_token : float, default 4.0
        Average characters per token

    Raises
    ------
    ValidationError
        If ``chars_per_token`` is not positive

    Examples
    --------
    >>> TokenEstimator().estimate("Hello, world!")
    3

    """

    def __init__(self, chars_per_token: float = DEFAULT_CHARS_PER_TOKEN):
        """Initialize the estimator."""
        if chars_per_token <= 0:
            raise ValidationError(
                f"chars_per_token must be positive, got {chars_per_token}",
                parameter_name="chars_per_token",
                parameter_value=chars_per_token,
            )
        self.chars_per_token = float(chars_per_token)

    def estimate(self, content: str | None) -> int:
        """Return the estimated token count of ``content`` (0 when empty)."""
        if not content:
            return 0
        return int(round_half_up(len(content) / self.chars_per_token))


def estimate_tokens(content: str | None, chars_per_token: float = DEFAULT_CHARS_PER_TOKEN) -> int:
    """Shortcut for ``TokenEstimator(chars_per_token).estimate(content)``."""
    return TokenEstimator(chars_per_token=chars_per_token).estimate(content)
