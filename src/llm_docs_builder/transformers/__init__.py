#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown transformers applied by the document pipeline.

Available Transformers
----------------------
- ContentCleanupTransformer: frontmatter, comments, badges, code, images, quotes
- LinkTransformer: base URL expansion, ``.html`` to ``.md``, link text cleanup
- HeadingTransformer: hierarchical heading titles
- EnhancementTransformer: AI context note and table of contents
- WhitespaceTransformer: trailing spaces and blank line runs
"""

from llm_docs_builder.transformers.base import BaseTransformer
from llm_docs_builder.transformers.cleanup import ContentCleanupTransformer
from llm_docs_builder.transformers.enhancement import EnhancementTransformer
from llm_docs_builder.transformers.headings import HeadingTransformer
from llm_docs_builder.transformers.links import LinkTransformer
from llm_docs_builder.transformers.whitespace import WhitespaceTransformer

__all__ = [
    "BaseTransformer",
    "ContentCleanupTransformer",
    "EnhancementTransformer",
    "HeadingTransformer",
    "LinkTransformer",
    "WhitespaceTransformer",
]
