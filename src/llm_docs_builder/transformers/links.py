#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/links.py
"""Link rewriting: absolute URLs, ``.md`` targets and terser link text."""

from __future__ import annotations

import re

from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.transformers.base import BaseTransformer

_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_HTML_URL = re.compile(r"https?://[^\s<>]+\.html?(?=[)\s]|$)", re.MULTILINE)
_HTML_EXTENSION = re.compile(r"\.html?$")
_VERBOSE_PREFIX = re.compile(r"^(?:click here to|see|read more about|check out|visit)\s+(?:the\s+)?", re.IGNORECASE)
_VERBOSE_SUFFIX = re.compile(r"\s+(?:here|documentation|docs)$", re.IGNORECASE)
_ABSOLUTE_PREFIXES = ("http://", "https://", "//", "#")


class LinkTransformer(BaseTransformer):
    """Rewrite Markdown links.

    - ``base_url``: relative destinations are joined onto the base URL
    - ``convert_urls``: ``.html`` and ``.htm`` URLs are pointed at ``.md``
    - ``simplify_links``: filler such as "click here to" is dropped from
      link text

    Examples
    --------
    >>> options = BuilderOptions(base_url="https://example.com/docs")
    >>> LinkTransformer().transform("[Guide](./guide.md)", options)
    '[Guide](https://example.com/docs/guide.md)'

    """

    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        options = self.resolve_options(options)
        result = content

        if options.base_url:
            result = expand_relative_links(result, options.base_url)
        if options.convert_urls:
            result = _HTML_URL.sub(lambda match: _HTML_EXTENSION.sub(".md", match.group(0)), result)
        if options.simplify_links:
            result = _MARKDOWN_LINK.sub(_simplified_link, result)

        return result


def join_url(base_url: str, path: str) -> str:
    """Join ``path`` onto ``base_url`` with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def expand_relative_links(content: str, base_url: str) -> str:
    def expand(match: re.Match[str]) -> str:
        text, url = match.group(1), match.group(2)
        if url.startswith(_ABSOLUTE_PREFIXES):
            return match.group(0)
        cleaned = url[2:] if url.startswith("./") else url
        return f"[{text}]({join_url(base_url, cleaned)})"

    return _MARKDOWN_LINK.sub(expand, content)


def _simplified_link(match: re.Match[str]) -> str:
    text, url = match.group(1), match.group(2)
    simplified = _VERBOSE_SUFFIX.sub("", _VERBOSE_PREFIX.sub("", text)).strip()
    return f"[{simplified or text}]({url})"
