#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/html_detector.py
"""Decide whether loaded documentation content is HTML or Markdown.

Remote documentation is sometimes served as rendered HTML even when a
``.md`` URL was requested. The detector looks at the start of the content
and then at the parsed document to avoid treating Markdown that merely
starts with a tag as HTML.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

from llm_docs_builder.constants import DETECTION_SNIPPET_LENGTH

logger = logging.getLogger(__name__)

_LEADING_COMMENT = re.compile(r"\A<!--.*?-->\s*", re.DOTALL)
_HTML_CANDIDATE = re.compile(
    r"\A<\s*(?:!DOCTYPE\s+html|html\b|body\b|head\b|article\b|section\b|main\b|p\b|div\b|table\b|thead\b"
    r"|tbody\b|tr\b|td\b|th\b|meta\b|link\b|h[1-6]\b|ul\b|ol\b|li\b|blockquote\b)",
    re.IGNORECASE,
)
_TABLE_FRAGMENT = re.compile(r"\A<\s*(?:table|thead|tbody|tr|td|th)\b", re.IGNORECASE)
_MARKDOWN_HEADING = re.compile(r"\A#+\s+")
_BULLET_ITEM = re.compile(r"\A[*+-]\s+\S")
_ORDERED_ITEM = re.compile(r"\A\d+\.\s+\S")
_QUOTE_LINE = re.compile(r"\A>\s+\S")
_RULE_LINE = re.compile(r"\A(?:-{3,}|_{3,}|={3,})\Z")
_BODY_WRAPPER = re.compile(r"<\s*(?:!DOCTYPE\s+html|html\b|body\b)", re.IGNORECASE)
_HEAD_ONLY_TAGS = frozenset(["html", "head", "title", "meta", "link", "base", "style", "script"])


class HtmlDetector:
    """Heuristics for recognising HTML documents and table fragments."""

    def detection_snippet(self, content: str | None) -> str | None:
        """Return the start of ``content`` with leading whitespace and comments removed.

        Parameters
        ----------
        content : str or None
            Raw loaded content

        Returns
        -------
        str or None
            At most 500 characters, or None when ``content`` is None

        """
        if content is None:
            return None

        snippet = content.lstrip()
        while True:
            stripped = _LEADING_COMMENT.sub("", snippet, count=1)
            if stripped == snippet:
                break
            if not stripped:
                return ""
            snippet = stripped

        return snippet.lstrip()[:DETECTION_SNIPPET_LENGTH]

    def is_html_content(self, content: str, snippet: str | None = None) -> bool:
        """Return True when ``content`` should be converted from HTML.

        Parameters
        ----------
        content : str
            Full loaded content
        snippet : str, optional
            Precomputed :meth:`detection_snippet`; computed when omitted

        """
        if snippet is None:
            snippet = self.detection_snippet(content)
        if not snippet or self.is_markdown_heading_snippet(snippet):
            return False
        if not self.is_html_candidate_snippet(snippet):
            return False
        return self._is_full_html_document(content)

    def is_html_candidate_snippet(self, snippet: str) -> bool:
        return bool(_HTML_CANDIDATE.match(snippet))

    def is_table_fragment(self, snippet: str | None) -> bool:
        """Return True when the snippet starts with a table element."""
        if not snippet:
            return False
        return bool(_TABLE_FRAGMENT.match(snippet))

    def is_markdown_heading_snippet(self, snippet: str) -> bool:
        """Return True when any non-tag line looks like an ATX heading."""
        for line in snippet.splitlines():
            trimmed = line.lstrip()
            if not trimmed or trimmed.startswith("<"):
                continue
            if _MARKDOWN_HEADING.match(trimmed):
                return True
        return False

    def is_markdown_like_text(self, text: str | None) -> bool:
        """Return True when ``text`` carries Markdown block syntax."""
        if text is None:
            return False
        if self.is_markdown_heading_snippet(text):
            return True

        for line in text.splitlines():
            trimmed = line.lstrip()
            if not trimmed or trimmed.startswith("<"):
                continue
            if _BULLET_ITEM.match(trimmed) or _ORDERED_ITEM.match(trimmed) or _QUOTE_LINE.match(trimmed):
                return True
            if trimmed.startswith(("```", "~~~")):
                return True
            if _RULE_LINE.match(trimmed.strip()):
                return True
        return False

    def _is_full_html_document(self, content: str) -> bool:
        soup = BeautifulSoup(content, "html.parser")
        body = soup.find("body")

        if body is None and not any(tag.name not in _HEAD_ONLY_TAGS for tag in soup.find_all(True)):
            logger.debug("Content has no body-level elements; treating it as Markdown")
            return False

        containers = [body] if body is not None else [soup, soup.find("html")]
        for container in containers:
            if not isinstance(container, Tag):
                continue
            for node in container.find_all(string=True, recursive=False):
                text = str(node)
                if isinstance(node, PreformattedString) or not text.strip():
                    continue
                if not self._allow_inline_body_text(content, text):
                    logger.debug("Found unwrapped text outside HTML elements: %r", text.strip()[:40])
                    return False
        return True

    def _allow_inline_body_text(self, content: str, text: str) -> bool:
        if self.is_markdown_like_text(text):
            return False
        return bool(_BODY_WRAPPER.search(content))
