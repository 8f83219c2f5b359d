#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/html_to_markdown/figures.py
"""Recover fenced code blocks from syntax-highlighted ``<figure class="code">`` markup.

Static site generators often wrap highlighted code in a figure holding a
caption, a line-number gutter and a table of ``.line`` elements. This module
turns such a figure back into a single fenced block whose info string carries
the detected language and the caption.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from bs4.element import Tag

from llm_docs_builder.constants import GENERIC_CODE_CLASSES

logger = logging.getLogger(__name__)

_PRE_SELECTORS = ("td.main pre", "td:not(.line-numbers) pre", "div.highlight pre", "pre")
_LANGUAGE_ATTRIBUTES = ("data-language", "data-lang", "lang")
_LANGUAGE_CLASS = re.compile(r"^(?:language|lang)-(.*)$", re.IGNORECASE)


def class_tokens(node: Tag) -> list[str]:
    """Return the non-empty class names of ``node``."""
    value = node.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return [token for token in value if token]


class FigureCodeBlockRenderer:
    """Render a code figure as a fenced Markdown block.

    Parameters
    ----------
    element : Tag
        The ``<figure>`` element
    inline_collapser : callable
        ``(node) -> str``; used for the ``<figcaption>`` text
    fence_calculator : callable
        ``(code) -> str``; returns a fence that does not collide with ``code``

    Attributes
    ----------
    code_block_node : Tag or None
        The ``<pre>`` the code was read from, set by :meth:`render`

    """

    def __init__(
        self,
        element: Tag,
        inline_collapser: Callable[[Tag], str],
        fence_calculator: Callable[[str], str],
    ):
        """Initialize the renderer for a single figure."""
        self.element = element
        self.inline_collapser = inline_collapser
        self.fence_calculator = fence_calculator
        self.code_block_node: Tag | None = None

    def render(self) -> str | None:
        """Return the fenced block, or None when the figure holds no code."""
        self.code_block_node = None
        if not self.is_code_figure():
            return None

        lines = self._extract_code_lines()
        if not lines:
            return None

        info_string = " ".join(part for part in (self.detect_language(), self._caption_text()) if part)
        code = "\n".join(lines)
        fence = self.fence_calculator(code)
        logger.debug("Rendering code figure with info string %r", info_string)
        return f"{fence}{info_string}\n{code}\n{fence}"

    def is_code_figure(self) -> bool:
        return any(token.lower() == "code" for token in class_tokens(self.element))

    def detect_language(self) -> str | None:
        """Find the highlighted language from attributes or class names."""
        candidates = [
            self.element.select_one("code"),
            self.element.select_one("pre"),
            self.element.select_one("td.main"),
            self.element.select_one("div.highlight"),
            self.element,
        ]
        candidates.extend(self.element.select("[data-language], [data-lang], [lang], [class]"))

        for node in candidates:
            if node is None:
                continue
            language = _language_from_node(node)
            if language:
                return language
        return None

    def _caption_text(self) -> str | None:
        caption = self.element.select_one("figcaption")
        if caption is None:
            return None
        return self.inline_collapser(caption)

    def _extract_code_lines(self) -> list[str]:
        pre = None
        for selector in _PRE_SELECTORS:
            pre = self.element.select_one(selector)
            if pre is not None:
                break
        self.code_block_node = pre
        if pre is None:
            return []

        line_nodes = pre.select(".line")
        if line_nodes:
            lines = [_line_text(node) for node in line_nodes]
        else:
            source = pre.find("code") or pre
            lines = source.get_text().replace("\r\n", "\n").replace("\r", "\n").split("\n")

        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        return lines


def _line_text(node: Tag) -> str:
    text = node.get_text().replace("\u00a0", " ")
    return text.replace("\r\n", "").replace("\r", "").rstrip()


def _language_from_node(node: Tag) -> str | None:
    for attribute in _LANGUAGE_ATTRIBUTES:
        value = node.get(attribute)
        if value is not None and str(value).strip():
            return str(value).strip()

    for token in class_tokens(node):
        match = _LANGUAGE_CLASS.match(token)
        if match and match.group(1).strip():
            return match.group(1).strip()
        if token.lower() in GENERIC_CODE_CLASSES:
            continue
        return token
    return None
