#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/markdown_transformer.py
"""Single-document transformation pipeline.

Content is loaded (and converted from HTML when needed), then passed through
the transformers in a fixed order:

1. ContentCleanupTransformer
2. LinkTransformer
3. HeadingTransformer
4. TextCompressor (only with ``remove_stopwords`` or ``remove_duplicates``)
5. EnhancementTransformer
6. WhitespaceTransformer
"""

from __future__ import annotations

import logging
from pathlib import Path

from llm_docs_builder._input_utils import read_text_file
from llm_docs_builder.exceptions import ValidationError
from llm_docs_builder.html_detector import HtmlDetector
from llm_docs_builder.html_to_markdown import HtmlToMarkdownConverter
from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.text_compressor import TextCompressor
from llm_docs_builder.transformers import (
    ContentCleanupTransformer,
    EnhancementTransformer,
    HeadingTransformer,
    LinkTransformer,
    WhitespaceTransformer,
)

logger = logging.getLogger(__name__)


class MarkdownTransformer:
    """Transform one Markdown (or HTML) document for AI consumption.

    Parameters
    ----------
    file_path : str or Path, optional
        Source file; ignored when ``options.content`` is set
    options : BuilderOptions, optional
        Transformation flags

    Examples
    --------
    >>> options = BuilderOptions(content="<h1>Title</h1><p>Body</p>")
    >>> MarkdownTransformer(None, options).transform()
    '# Title\\n\\nBody'

    """

    def __init__(self, file_path: str | Path | None, options: BuilderOptions | None = None):
        """Initialize the pipeline for one document."""
        self.file_path = file_path
        self.options = options if options is not None else BuilderOptions()
        self._detector = HtmlDetector()
        self._converter = HtmlToMarkdownConverter()
        self._cleanup = ContentCleanupTransformer()
        self._links = LinkTransformer()
        self._headings = HeadingTransformer()
        self._enhancement = EnhancementTransformer()
        self._whitespace = WhitespaceTransformer()

    def transform(self) -> str:
        """Return the transformed Markdown.

        Raises
        ------
        FileNotFoundError
            If no content was supplied and the file does not exist

        """
        content = self.load_content()

        content = self._cleanup.transform(content, self.options)
        content = self._links.transform(content, self.options)
        content = self._headings.transform(content, self.options)
        if self.options.remove_stopwords or self.options.remove_duplicates:
            content = TextCompressor().compress(
                content,
                remove_stopwords=self.options.remove_stopwords,
                remove_duplicates=self.options.remove_duplicates,
            )
        content = self._enhancement.transform(content, self.options)
        return self._whitespace.transform(content, self.options)

    def load_content(self) -> str:
        """Load the raw content, converting HTML documents to Markdown.

        Table fragments are returned untouched so their HTML survives.
        """
        if self.options.content is not None:
            content = self.options.content
        else:
            if self.file_path is None:
                raise ValidationError("file_path is required when options.content is not set", parameter_name="file_path")
            content = read_text_file(self.file_path)

        snippet = self._detector.detection_snippet(content)
        if self._detector.is_table_fragment(snippet):
            logger.debug("Content is a table fragment; keeping HTML as is")
            return content
        if self._detector.is_html_content(content, snippet):
            logger.debug("Converting HTML content from %s", self.options.source_url or self.file_path)
            return self._converter.convert(content)
        return content
