"""llm_docs_builder - Build and optimize documentation for LLMs.

llm_docs_builder turns Markdown and rendered HTML documentation into compact
Markdown that wastes fewer tokens in a language model's context window, and
generates ``llms.txt`` indexes describing a documentation set.

Key Features
------------
- HTML to Markdown conversion with nested, rowspan and colspan tables
- Cleanup transformations (frontmatter, comments, badges, images, code)
- Optional stopword and duplicate removal, TOC and AI instruction injection
- ``llms.txt`` generation, parsing and validation
- Size comparison of the human and AI versions of a page

Examples
--------
Convert an HTML fragment:

    >>> from llm_docs_builder import convert_html
    >>> convert_html("<h2>Install</h2><pre><code>pip install x</code></pre>")
    '## Install\\n\\n```\\npip install x\\n```'

Transform a file with a preset:

    >>> from llm_docs_builder import BuilderOptions, CompressionPresets, transform_markdown
    >>> options = BuilderOptions(**CompressionPresets.get("moderate"))
    >>> markdown = transform_markdown("docs/guide.md", options)

Generate ``llms.txt``:

    >>> from llm_docs_builder import generate_from_docs
    >>> content = generate_from_docs("./docs", {"base_url": "https://example.com/docs"})

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "llm_docs_builder requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.9.0"

from pathlib import Path
from typing import Any, Mapping

from llm_docs_builder.bulk_transformer import BulkTransformer
from llm_docs_builder.comparator import Comparator, ComparisonResult
from llm_docs_builder.config import load_config, merge_with_options
from llm_docs_builder.exceptions import (
    ConfigurationError,
    FileError,
    FileNotFoundError,
    GenerationError,
    LlmDocsBuilderError,
    NetworkError,
    ValidationError,
)
from llm_docs_builder.generator import Generator
from llm_docs_builder.html_to_markdown import HtmlToMarkdownConverter
from llm_docs_builder.markdown_transformer import MarkdownTransformer
from llm_docs_builder.options import BuilderOptions, CompressionPresets
from llm_docs_builder.parser import ParsedContent, Parser
from llm_docs_builder.validator import Validator

OptionsInput = BuilderOptions | Mapping[str, Any] | None


def _resolve_options(options: OptionsInput, config_file: str | Path | None) -> BuilderOptions:
    """Return ``options`` as-is, or merge a mapping over the configuration file."""
    if isinstance(options, BuilderOptions):
        return options
    return merge_with_options(load_config(config_file), options or {})


def convert_html(html: str) -> str:
    """Convert an HTML document or fragment to Markdown."""
    return HtmlToMarkdownConverter().convert(html)


def transform_markdown(
    file_path: str | Path | None = None,
    options: OptionsInput = None,
    config_file: str | Path | None = None,
) -> str:
    """Transform one Markdown or HTML document for AI consumption.

    Parameters
    ----------
    file_path : str or Path, optional
        Document to read; may be omitted when ``options`` carries ``content``
    options : BuilderOptions or mapping, optional
        A mapping is merged over the configuration file and defaults
    config_file : str or Path, optional
        Explicit configuration file; discovered in the working directory
        when omitted

    Returns
    -------
    str
        Transformed Markdown

    """
    return MarkdownTransformer(file_path, _resolve_options(options, config_file)).transform()


def bulk_transform(
    docs_path: str | Path,
    options: OptionsInput = None,
    config_file: str | Path | None = None,
) -> list[str]:
    """Transform every Markdown file under ``docs_path`` and return the written paths."""
    return BulkTransformer(docs_path, _resolve_options(options, config_file)).transform_all()


def generate_from_docs(
    docs_path: str | Path | None = None,
    options: OptionsInput = None,
    config_file: str | Path | None = None,
) -> str:
    """Generate ``llms.txt`` content for ``docs_path`` (default: ``options.docs``)."""
    resolved = _resolve_options(options, config_file)
    return Generator(docs_path if docs_path is not None else resolved.docs, resolved).generate()


def parse(file_path: str | Path) -> ParsedContent:
    """Parse an ``llms.txt`` file."""
    return Parser(file_path).parse()


def validate(content: str) -> bool:
    """Return True when ``content`` is a well-formed ``llms.txt`` document."""
    return Validator(content).is_valid()


def compare(url: str, local_file: str | Path | None = None, **kwargs: Any) -> ComparisonResult:
    """Compare the human and AI versions of ``url``; see :class:`Comparator`."""
    return Comparator(url, local_file=local_file, **kwargs).compare()


__all__ = [
    "__version__",
    "convert_html",
    "transform_markdown",
    "bulk_transform",
    "generate_from_docs",
    "parse",
    "validate",
    "compare",
    # Options
    "BuilderOptions",
    "CompressionPresets",
    # Components
    "BulkTransformer",
    "Comparator",
    "ComparisonResult",
    "Generator",
    "HtmlToMarkdownConverter",
    "MarkdownTransformer",
    "ParsedContent",
    "Parser",
    "Validator",
    # Exceptions
    "LlmDocsBuilderError",
    "ValidationError",
    "ConfigurationError",
    "FileError",
    "FileNotFoundError",
    "GenerationError",
    "NetworkError",
]
