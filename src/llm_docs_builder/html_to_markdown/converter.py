#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/html_to_markdown/converter.py
"""Convert HTML fragments and documents to clean Markdown.

The converter walks a BeautifulSoup tree in two modes. Block rendering
emits paragraphs, headings, lists, tables, quotes and code fences separated
by blank lines. Inline rendering flattens text-level markup into a single
string whose line breaks come only from ``<br>``.

Links with an unsafe scheme (``javascript:``, ``data:`` and friends) are
dropped together with any ``|`` separator that joined them to a neighbour.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Sequence

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from llm_docs_builder.constants import (
    BLOCK_CONTAINER_TAGS,
    BLOCK_LEVEL_TAGS,
    HEADING_LEVELS,
    IGNORED_TAGS,
    INLINE_EM_TAGS,
    INLINE_STRONG_TAGS,
    LIST_TAGS,
    MARKDOWN_LABEL_ESCAPE_PATTERN,
    SAFE_RELATIVE_LINK_PREFIXES,
    SAFE_URI_SCHEMES,
    UNSAFE_URI_SCHEME_PATTERN,
    URI_SCHEME_PATTERN,
)
from llm_docs_builder.html_to_markdown.figures import FigureCodeBlockRenderer, class_tokens
from llm_docs_builder.html_to_markdown.helpers import (
    code_fence_for,
    longest_backtick_run,
    parse_integer,
    prune_trailing_unsafe_link_separator,
    squeeze_blank_lines_outside_fences,
)
from llm_docs_builder.html_to_markdown.tables import TableMarkupRenderer

logger = logging.getLogger(__name__)

_INLINE_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")
_HORIZONTAL_WHITESPACE = re.compile(r"[ \t\r\f\v]+")
_DESTINATION_NEEDS_BRACKETS = re.compile(r"[\s()]")


class _InlineResult(NamedTuple):
    text: str
    pruned_unsafe_link: bool = False


def is_text_node(node: PageElement) -> bool:
    """Return True for character data, excluding comments and doctypes."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def collapse_inline_preserving_newlines(text: str | None) -> str:
    """Collapse runs of spaces to one and trim, keeping ``\\n`` from ``<br>``."""
    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return _HORIZONTAL_WHITESPACE.sub(" ", normalized).strip(" ")


def escape_markdown_label(text: str) -> str:
    r"""Backslash-escape characters that would break a link or image label.

    >>> escape_markdown_label("[beta]_1")
    '\\[beta\\]\\_1'
    """
    return MARKDOWN_LABEL_ESCAPE_PATTERN.sub(lambda match: "\\" + match.group(0), text)


def format_markdown_link_destination(url: str) -> str:
    """Wrap a destination in angle brackets when it holds spaces or parentheses."""
    if _DESTINATION_NEEDS_BRACKETS.search(url):
        return f"<{url}>"
    return url


def safe_link_destination(href: str | None) -> str | None:
    """Return the trimmed ``href`` when it is safe to emit, otherwise None.

    Relative references, fragments and the http, https, mailto, ftp and tel
    schemes are allowed. ``javascript:``, ``vbscript:`` and ``data:`` are
    rejected, as is any other explicit scheme.
    """
    if href is None:
        return None
    value = href.strip()
    if not value:
        return None
    if UNSAFE_URI_SCHEME_PATTERN.match(value):
        return None
    if value.startswith(SAFE_RELATIVE_LINK_PREFIXES):
        return value

    match = URI_SCHEME_PATTERN.match(value)
    if match is None:
        return value
    if match.group(1).lower() in SAFE_URI_SCHEMES:
        return value
    return None


def clean_output(output: str) -> str:
    """Normalize newlines, trailing spaces and blank lines of rendered Markdown."""
    cleaned = output.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = re.sub(r"[ \t]+\n", "\n", cleaned)
    cleaned = squeeze_blank_lines_outside_fences(cleaned)
    cleaned = re.sub(r"\A(?:[ \t]*\n)+", "", cleaned)
    return re.sub(r"(?:\n[ \t]*)+\Z", "", cleaned)


class HtmlToMarkdownConverter:
    """Render HTML as Markdown.

    The converter is stateless between calls; one instance can convert any
    number of documents.

    Examples
    --------
    >>> HtmlToMarkdownConverter().convert("<h1>Title</h1><p>Some <b>bold</b> text</p>")
    '# Title\\n\\nSome **bold** text'

    """

    def __init__(self) -> None:
        """Initialize the converter and its table renderer."""
        self._table_renderer = TableMarkupRenderer(
            inline_collapser=self.collapsed_inline_for,
            block_renderer=self.render_blocks,
        )

    def convert(self, html: str | None) -> str:
        """Convert an HTML string to Markdown.

        Parameters
        ----------
        html : str or None
            HTML fragment or full document

        Returns
        -------
        str
            Markdown without leading or trailing blank lines; empty for
            blank input

        """
        if not html or not html.strip():
            return ""

        soup = BeautifulSoup(html, "html.parser")
        rendered = self.render_blocks(list(soup.children), 0)
        return clean_output(rendered)

    # Block rendering

    def render_blocks(self, nodes: Sequence[PageElement], depth: int = 0) -> str:
        """Render sibling nodes as blocks separated by blank lines.

        Consecutive text and inline elements are gathered into one paragraph.
        """
        parts: list[str] = []
        inline_buffer: list[PageElement] = []

        def flush_inline() -> None:
            if not inline_buffer:
                return
            rendered = collapse_inline_preserving_newlines(self._render_inline_nodes(inline_buffer))
            inline_buffer.clear()
            if rendered:
                parts.append(rendered)

        for node in nodes:
            if is_text_node(node):
                inline_buffer.append(node)
                continue
            if not isinstance(node, Tag):
                continue
            if node.name.lower() in IGNORED_TAGS:
                continue

            if _is_block_like(node):
                flush_inline()
                rendered = self._render_element_block(node, depth)
                if rendered and rendered.strip():
                    parts.append(rendered)
            else:
                inline_buffer.append(node)

        flush_inline()
        return "\n\n".join(parts)

    def _render_element_block(self, element: Tag, depth: int) -> str:
        tag = element.name.lower()

        if tag == "table":
            return self._table_renderer.render_table(element)
        if tag == "hr":
            return "---"
        if tag in HEADING_LEVELS:
            text = self.collapsed_inline_for(element)
            return f"{'#' * HEADING_LEVELS[tag]} {text}" if text else ""
        if tag == "blockquote":
            return self._render_blockquote(element)
        if tag == "pre":
            return self._render_fenced_code(element)
        if tag == "img":
            return self._render_image(element)
        if tag in LIST_TAGS:
            ordered = tag == "ol"
            start = parse_integer(element.get("start")) if ordered else None
            return self._render_list(element, ordered, depth, start)
        if tag == "dl":
            return self._render_definition_list(element)
        if tag == "figure" and "code" in (token.lower() for token in class_tokens(element)):
            figure = self._render_code_figure(element, depth)
            if figure is not None:
                return figure
        if tag in BLOCK_CONTAINER_TAGS:
            blocks = self.render_blocks(list(element.children), depth)
            return blocks if blocks.strip() else self.collapsed_inline_for(element)

        return self.collapsed_inline_for(element)

    def _render_code_figure(self, element: Tag, depth: int) -> str | None:
        renderer = FigureCodeBlockRenderer(
            element,
            inline_collapser=self.collapsed_inline_for,
            fence_calculator=code_fence_for,
        )
        code_block = renderer.render()
        if code_block is None:
            return None

        before: list[PageElement] = []
        after: list[PageElement] = []
        holder_found = False
        for child in element.children:
            if isinstance(child, Tag) and child.name.lower() == "figcaption":
                continue
            if not holder_found and _contains(child, renderer.code_block_node):
                holder_found = True
                continue
            (after if holder_found else before).append(child)

        parts = [self.render_blocks(before, depth), code_block, self.render_blocks(after, depth)]
        return "\n\n".join(part for part in parts if part.strip())

    def _render_blockquote(self, element: Tag) -> str:
        has_block_children = any(_is_block_like(child) for child in element.find_all(True, recursive=False))
        inner = self.render_blocks(list(element.children), 0) if has_block_children else ""
        if not inner.strip():
            inner = self.collapsed_inline_for(element)
        if not inner.strip():
            return ""

        return "\n".join(f"> {line}" if line.strip() else ">" for line in inner.split("\n"))

    def _render_fenced_code(self, element: Tag) -> str:
        source = element.find("code") or element
        code = source.get_text().replace("\r\n", "\n").replace("\r", "\n").rstrip()
        fence = code_fence_for(code)
        return f"{fence}\n{code}\n{fence}"

    # Lists

    def _render_list(self, list_node: Tag, ordered: bool, depth: int, start: int | None = None) -> str:
        lines: list[str] = []
        index = (start if start is not None else 1) if ordered else 0
        indent = "  " * depth

        for item in list_node.find_all(True, recursive=False):
            if item.name.lower() != "li":
                continue

            if ordered:
                override = parse_integer(item.get("value"))
                if override is not None:
                    index = override
                prefix = f"{indent}{index}. "
                index += 1
            else:
                prefix = f"{indent}- "

            segments = self._build_list_item_segments(item)
            leading_text, segments = self._extract_leading_inline_text(segments, depth)
            leading_text = collapse_inline_preserving_newlines(leading_text)
            item_lines = [prefix + leading_text if leading_text else prefix.rstrip()]

            previous_kind = None
            for kind, value in segments:
                segment_lines = self._render_list_item_segment(kind, value, depth)
                if not segment_lines:
                    continue
                if kind == "nested_list":
                    insert_blank = previous_kind in ("block", "inline")
                else:
                    insert_blank = True
                if insert_blank and item_lines[-1]:
                    item_lines.append("")
                item_lines.extend(segment_lines)
                previous_kind = kind

            lines.append("\n".join(item_lines))

        return "\n".join(lines)

    def _build_list_item_segments(self, item: Tag) -> list[tuple[str, object]]:
        segments: list[tuple[str, object]] = []
        inline_nodes: list[PageElement] = []

        def flush_inline() -> None:
            if inline_nodes:
                segments.append(("inline", list(inline_nodes)))
                inline_nodes.clear()

        for child in item.children:
            if isinstance(child, Tag) and child.name.lower() in LIST_TAGS:
                flush_inline()
                segments.append(("nested_list", child))
            elif isinstance(child, Tag) and _is_block_like(child):
                flush_inline()
                segments.append(("block", child))
            elif is_text_node(child) or isinstance(child, Tag):
                inline_nodes.append(child)

        flush_inline()
        return segments

    def _extract_leading_inline_text(
        self, segments: list[tuple[str, object]], depth: int
    ) -> tuple[str, list[tuple[str, object]]]:
        remaining = list(segments)
        while remaining:
            kind, value = remaining[0]
            if kind == "inline":
                candidate = collapse_inline_preserving_newlines(self._render_inline_nodes(value))
                remaining.pop(0)
                if candidate:
                    return candidate, remaining
                continue
            if kind == "block":
                rendered = self._render_element_block(value, depth + 1)
                if rendered is not None and "\n" not in rendered:
                    remaining.pop(0)
                    return rendered.strip(), remaining
            return "", remaining
        return "", remaining

    def _render_list_item_segment(self, kind: str, value, depth: int) -> list[str]:
        if kind == "nested_list":
            ordered = value.name.lower() == "ol"
            start = parse_integer(value.get("start")) if ordered else None
            return self._render_list(value, ordered, depth + 1, start).split("\n")

        if kind == "block":
            rendered = self._render_element_block(value, depth + 1)
        else:
            rendered = collapse_inline_preserving_newlines(self._render_inline_nodes(value))
        if not rendered or not rendered.strip():
            return []
        return _indent_lines(rendered, depth + 1)

    def _render_definition_list(self, element: Tag) -> str:
        entries: list[str] = []
        term: str | None = None
        definitions: list[str] = []

        def flush_entry() -> None:
            if term is not None and definitions:
                entries.append("\n".join([term] + [f": {definition}" for definition in definitions]))

        for child in element.find_all(True, recursive=False):
            tag = child.name.lower()
            if tag == "dt":
                flush_entry()
                term = self.collapsed_inline_for(child)
                definitions = []
            elif tag == "dd" and term is not None:
                definitions.append(self.collapsed_inline_for(child))

        flush_entry()
        return "\n\n".join(entries)

    # Inline rendering

    def collapsed_inline_for(self, node: Tag) -> str:
        """Return the inline Markdown of ``node``'s children on collapsed whitespace."""
        return collapse_inline_preserving_newlines(self._render_inline_children(node))

    def _render_inline_nodes(self, nodes: Sequence[PageElement]) -> str:
        parts: list[str] = []
        for node in nodes:
            if node.parent is None:
                continue
            result = self._render_inline(node)
            if result.pruned_unsafe_link:
                prune_trailing_unsafe_link_separator(parts)
            if result.text:
                parts.append(result.text)
        return "".join(parts)

    def _render_inline_children(self, parent: Tag, escape_for_label: bool = False) -> str:
        parts: list[str] = []
        for child in list(parent.children):
            if child.parent is None:
                continue
            result = self._render_inline(child, escape_for_label)
            if result.pruned_unsafe_link:
                prune_trailing_unsafe_link_separator(parts)
            if result.text:
                parts.append(result.text)
        return "".join(parts)

    def _render_inline(self, node: PageElement, escape_for_label: bool = False) -> _InlineResult:
        if is_text_node(node):
            text = _inline_text(str(node))
            return _InlineResult(escape_markdown_label(text) if escape_for_label else text)
        if not isinstance(node, Tag):
            return _InlineResult("")

        tag = node.name.lower()
        if tag in IGNORED_TAGS:
            return _InlineResult("")
        if tag in INLINE_STRONG_TAGS:
            return _InlineResult(self._render_wrapped_inline(node, "**", escape_for_label))
        if tag in INLINE_EM_TAGS:
            return _InlineResult(self._render_wrapped_inline(node, "*", escape_for_label))
        if tag == "code":
            return _InlineResult(_render_inline_code(node))
        if tag == "a":
            return self._render_link(node)
        if tag == "img":
            return _InlineResult(self._render_image(node))
        if tag == "br":
            return _InlineResult("\n")
        return _InlineResult(self._render_inline_children(node, escape_for_label))

    def _render_wrapped_inline(self, node: Tag, wrapper: str, escape_for_label: bool) -> str:
        content = collapse_inline_preserving_newlines(self._render_inline_children(node, escape_for_label))
        return f"{wrapper}{content}{wrapper}" if content else ""

    def _render_link(self, node: Tag) -> _InlineResult:
        href = (node.get("href") or "").strip()
        if not href:
            return _InlineResult(self.collapsed_inline_for(node))

        destination = safe_link_destination(href)
        if destination is None:
            logger.debug("Dropping link with unsafe destination %r", href)
            _prune_unsafe_link_separators(node)
            return _InlineResult("", pruned_unsafe_link=True)

        label = collapse_inline_preserving_newlines(self._render_inline_children(node, escape_for_label=True))
        return _InlineResult(f"[{label}]({format_markdown_link_destination(destination)})")

    def _render_image(self, node: Tag) -> str:
        src = node.get("src") or ""
        if not src:
            return ""

        alt = escape_markdown_label(node.get("alt") or "")
        title = node.get("title") or ""
        title_part = f' "{title}"' if title else ""
        return f"![{alt}]({format_markdown_link_destination(src)}{title_part})"


def _is_block_like(node: PageElement) -> bool:
    if not isinstance(node, Tag):
        return False
    tag = node.name.lower()
    return tag in HEADING_LEVELS or tag in BLOCK_CONTAINER_TAGS or tag in BLOCK_LEVEL_TAGS


def _contains(node: PageElement, target: Tag | None) -> bool:
    if target is None or not isinstance(node, Tag):
        return False
    return node is target or any(descendant is target for descendant in node.descendants)


def _indent_lines(text: str, depth: int) -> list[str]:
    indent = "  " * depth
    return [f"{indent}{line}" if line.strip() else "" for line in text.split("\n")]


def _inline_text(text: str) -> str:
    escaped = text.replace("<", "&lt;").replace(">", "&gt;")
    return _INLINE_WHITESPACE.sub(" ", escaped)


def _render_inline_code(node: Tag) -> str:
    code = node.get_text().replace("\r\n", "\n").replace("\r", "\n")
    code = re.sub(r"\n+", " ", code).strip()
    if not code:
        return ""
    fence = "`" * (longest_backtick_run(code) + 1)
    return f"{fence}{code}{fence}"


def _prune_unsafe_link_separators(node: Tag) -> None:
    """Detach ``|`` text siblings that only separated ``node`` from its neighbours."""
    for sibling in (node.previous_sibling, node.next_sibling):
        if is_text_node(sibling) and sibling.strip() == "|":
            sibling.extract()
