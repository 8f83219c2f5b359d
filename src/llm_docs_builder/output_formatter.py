#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/output_formatter.py
"""Terminal rendering of comparison reports."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from llm_docs_builder.comparator import ComparisonResult
from llm_docs_builder.constants import NO_AI_VERSION_THRESHOLD
from llm_docs_builder.token_estimator import round_half_up

if TYPE_CHECKING:
    from rich.console import Console
    from rich.panel import Panel

logger = logging.getLogger(__name__)

TYPICAL_TOKEN_REDUCTION = 0.83
TYPICAL_REMAINING_SHARE = 0.17


class OutputFormatter:
    """Format sizes and print the comparison report."""

    @staticmethod
    def format_bytes(size: int) -> str:
        """Return a human-readable size.

        Examples
        --------
        >>> OutputFormatter.format_bytes(512)
        '512 bytes'
        >>> OutputFormatter.format_bytes(1536)
        '1.5 KB'
        >>> OutputFormatter.format_bytes(1048576)
        '1.0 MB'

        """
        if size < 1024:
            return f"{size} bytes"
        if size < 1024 * 1024:
            return f"{round_half_up(size / 1024.0, 1)} KB"
        return f"{round_half_up(size / (1024.0 * 1024), 2)} MB"

    @staticmethod
    def format_number(number: int) -> str:
        """Insert thousands separators: ``1234567`` becomes ``1,234,567``."""
        return f"{int(number):,}"

    @classmethod
    def needs_ai_version(cls, result: ComparisonResult) -> bool:
        """Return True when the server does not seem to serve a dedicated AI version."""
        if result.reduction_bytes == 0:
            return True
        return result.reduction_bytes > 0 and result.reduction_percent < NO_AI_VERSION_THRESHOLD

    @classmethod
    def display_comparison_results(cls, result: ComparisonResult, console: Console | None = None) -> None:
        """Print the comparison report.

        Parameters
        ----------
        result : ComparisonResult
            Output of :meth:`Comparator.compare`
        console : rich.console.Console, optional
            Console to print to; a new stdout console is used when omitted

        """
        from rich.console import Console
        from rich.table import Table

        console = console or Console()

        table = Table(show_header=True, header_style="bold", title="Context Window Comparison")
        table.add_column("Version", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Tokens", justify="right")
        table.add_column("Source", style="dim", overflow="fold")
        table.add_row(
            "Human",
            cls.format_bytes(result.human_size),
            f"~{cls.format_number(result.human_tokens)}",
            result.human_source,
        )
        table.add_row(
            "AI",
            cls.format_bytes(result.ai_size),
            f"~{cls.format_number(result.ai_tokens)}",
            result.ai_source,
        )
        console.print()
        console.print(table)
        console.print(cls._summary_panel(result))

        if cls.needs_ai_version(result):
            console.print(cls._no_ai_version_panel(result))
        console.print()

    @classmethod
    def summary_lines(cls, result: ComparisonResult) -> list[str]:
        """Return the reduction (or increase) lines of the report."""
        if result.reduction_bytes > 0:
            return [
                f"Reduction:      {cls.format_bytes(result.reduction_bytes)} ({result.reduction_percent}%)",
                f"Token savings:  {cls.format_number(result.token_reduction)} tokens "
                f"({result.token_reduction_percent}%)",
                f"Factor:         {result.factor}x smaller",
            ]
        if result.reduction_bytes < 0:
            return [
                f"Increase:       {cls.format_bytes(abs(result.reduction_bytes))} ({abs(result.reduction_percent)}%)",
                f"Token increase: {cls.format_number(abs(result.token_reduction))} tokens "
                f"({abs(result.token_reduction_percent)}%)",
                f"Factor:         {result.factor}x larger",
            ]
        return ["Same size"]

    @classmethod
    def no_ai_version_lines(cls, result: ComparisonResult) -> list[str]:
        """Return the advisory shown when no AI-optimized version is served."""
        savings = int(round_half_up(result.human_tokens * TYPICAL_TOKEN_REDUCTION))
        remaining = int(round_half_up(result.human_tokens * TYPICAL_REMAINING_SHARE))
        potential_size = int(round_half_up(result.human_size * TYPICAL_REMAINING_SHARE))
        return [
            "The server is returning nearly identical content to both human and AI",
            "User-Agents, indicating no AI-optimized version is currently served.",
            "",
            "Typical documentation optimization results:",
            "  • 67-95% token reduction (average 83%)",
            "  • 3-20x smaller file sizes",
            "",
            f"For this page specifically (~{cls.format_number(result.human_tokens)} tokens):",
            f"  • Estimated savings: ~{cls.format_number(savings)} tokens (83% reduction)",
            f"  • Could reduce to: ~{cls.format_number(remaining)} tokens",
            f"  • Potential size: ~{cls.format_bytes(potential_size)}",
            "",
            "To serve AI-optimized documentation:",
            "  1. llm-docs-builder bulk-transform --docs ./docs --config llm-docs-builder.yml",
            "  2. Serve the generated .md files to AI User-Agents",
            "  3. llm-docs-builder compare --url <your-url> --file <local-md>",
        ]

    @classmethod
    def _summary_panel(cls, result: ComparisonResult) -> Panel:
        from rich.panel import Panel

        style = "green" if result.reduction_bytes > 0 else "yellow" if result.reduction_bytes == 0 else "red"
        return Panel("\n".join(cls.summary_lines(result)), border_style=style, expand=False)

    @classmethod
    def _no_ai_version_panel(cls, result: ComparisonResult) -> Panel:
        from rich.panel import Panel

        return Panel(
            "\n".join(cls.no_ai_version_lines(result)),
            title="[bold yellow]WARNING: NO DEDICATED AI VERSION DETECTED[/bold yellow]",
            border_style="yellow",
            expand=False,
        )
