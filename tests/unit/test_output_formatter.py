"""Unit tests for the comparison report."""

import io

import pytest
from rich.console import Console

from llm_docs_builder.comparator import calculate_results
from llm_docs_builder.output_formatter import OutputFormatter


def _render(result) -> str:
    buffer = io.StringIO()
    OutputFormatter.display_comparison_results(result, console=Console(file=buffer, width=120))
    return buffer.getvalue()


@pytest.mark.unit
class TestFormatting:
    """Test size and number formatting."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 bytes"),
            (1023, "1023 bytes"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1048576, "1.0 MB"),
            (5_500_000, "5.25 MB"),
        ],
    )
    def test_format_bytes(self, size, expected):
        assert OutputFormatter.format_bytes(size) == expected

    @pytest.mark.parametrize("number,expected", [(0, "0"), (999, "999"), (1234567, "1,234,567")])
    def test_format_number(self, number, expected):
        assert OutputFormatter.format_number(number) == expected


@pytest.mark.unit
class TestReport:
    """Test summary lines and the advisory."""

    def test_reduction_summary(self):
        result = calculate_results("x" * 1000, "x" * 170, "human", "ai")
        assert OutputFormatter.summary_lines(result) == [
            "Reduction:      830 bytes (83%)",
            "Token savings:  207 tokens (83%)",
            "Factor:         5.9x smaller",
        ]

    def test_increase_summary(self):
        result = calculate_results("x" * 100, "x" * 150, "human", "ai")
        assert OutputFormatter.summary_lines(result) == [
            "Increase:       50 bytes (50%)",
            "Token increase: 13 tokens (52%)",
            "Factor:         0.7x larger",
        ]

    def test_same_size(self):
        assert OutputFormatter.summary_lines(calculate_results("abc", "abc", "h", "a")) == ["Same size"]

    @pytest.mark.parametrize(
        "ai_size,expected",
        [(1000, True), (970, True), (170, False), (1200, False)],
    )
    def test_needs_ai_version(self, ai_size, expected):
        result = calculate_results("x" * 1000, "x" * ai_size, "h", "a")
        assert OutputFormatter.needs_ai_version(result) is expected

    def test_no_ai_version_estimates(self):
        result = calculate_results("x" * 4000, "x" * 4000, "h", "a")
        lines = OutputFormatter.no_ai_version_lines(result)
        assert "For this page specifically (~1,000 tokens):" in lines
        assert "  • Estimated savings: ~830 tokens (83% reduction)" in lines
        assert "  • Could reduce to: ~170 tokens" in lines
        assert "  • Potential size: ~680 bytes" in lines

    def test_display_with_reduction(self):
        output = _render(calculate_results("x" * 1000, "x" * 170, "https://example.com (User-Agent: human)", "page.md"))
        assert "Context Window Comparison" in output
        assert "Human" in output
        assert "~250" in output
        assert "page.md" in output
        assert "5.9x smaller" in output
        assert "NO DEDICATED AI VERSION" not in output

    def test_display_shows_advisory(self):
        output = _render(calculate_results("x" * 1000, "x" * 1000, "human", "ai"))
        assert "Same size" in output
        assert "WARNING: NO DEDICATED AI VERSION DETECTED" in output
        assert "llm-docs-builder bulk-transform" in output
