#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/whitespace.py
"""Final whitespace normalization."""

from __future__ import annotations

import re

from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.transformers.base import BaseTransformer

_TRAILING_SPACES = re.compile(r" +$", re.MULTILINE)
_EXCESS_BLANK_LINES = re.compile(r"\n{4,}")


class WhitespaceTransformer(BaseTransformer):
    """Strip trailing spaces, cap blank runs at two lines and trim the document."""

    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        options = self.resolve_options(options)
        if not options.normalize_whitespace:
            return content

        result = _TRAILING_SPACES.sub("", content)
        result = _EXCESS_BLANK_LINES.sub("\n\n\n", result)
        return result.strip()
