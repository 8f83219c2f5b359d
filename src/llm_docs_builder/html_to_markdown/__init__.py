#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML to Markdown conversion for documentation pages."""

from llm_docs_builder.html_to_markdown.converter import HtmlToMarkdownConverter
from llm_docs_builder.html_to_markdown.figures import FigureCodeBlockRenderer
from llm_docs_builder.html_to_markdown.tables import (
    CellRenderResult,
    ColumnSpec,
    SpanCell,
    SpanSlots,
    TableMarkupRenderer,
    TablePath,
)

__all__ = [
    "CellRenderResult",
    "ColumnSpec",
    "FigureCodeBlockRenderer",
    "HtmlToMarkdownConverter",
    "SpanCell",
    "SpanSlots",
    "TableMarkupRenderer",
    "TablePath",
]
