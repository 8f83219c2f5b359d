#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/enhancement.py
"""Content added for AI readers: a context note and a table of contents."""

from __future__ import annotations

import re
from dataclasses import dataclass

from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.transformers.base import BaseTransformer

_HEADING = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
_FIRST_H1 = re.compile(r"^#\s+.+$", re.MULTILINE)
_ANCHOR_DISALLOWED = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TocEntry:
    """A heading collected for the table of contents."""

    level: int
    title: str
    anchor: str


def heading_anchor(title: str) -> str:
    """Return the GitHub-style anchor for a heading title.

    >>> heading_anchor("Getting Started!")
    'getting-started'
    """
    return _WHITESPACE.sub("-", _ANCHOR_DISALLOWED.sub("", title.lower()))


class EnhancementTransformer(BaseTransformer):
    """Insert a custom AI context note and a table of contents.

    Both are placed right after the first H1, or at the top of a document
    that has none. The note is inserted first, so a generated table of
    contents ends up above it.
    """

    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        options = self.resolve_options(options)
        result = content

        if options.custom_instruction:
            result = inject_custom_instruction(result, options.custom_instruction, options.remove_blockquotes)
        if options.generate_toc:
            result = generate_table_of_contents(result)

        return result


def inject_custom_instruction(content: str, instruction: str | None, remove_blockquotes: bool = False) -> str:
    """Insert ``instruction`` as an "AI Context" note followed by a rule.

    The note is rendered as a blockquote unless ``remove_blockquotes`` is set.
    """
    if not instruction:
        return content

    note = f"**AI Context**: {instruction}\n\n---\n\n"
    if not remove_blockquotes:
        note = f"> {note}"
    return _insert_after_first_h1(content, note)


def generate_table_of_contents(content: str) -> str:
    """Insert a ``## Table of Contents`` section listing the document's headings.

    The first heading is left out of the list when it is the H1 the section
    is inserted under.
    """
    entries = [
        TocEntry(len(match.group(1)), match.group(2).strip(), heading_anchor(match.group(2).strip()))
        for match in _HEADING.finditer(content)
    ]
    if not entries:
        return content

    lines = ["## Table of Contents\n"]
    for position, entry in enumerate(entries):
        if position == 0 and entry.level == 1:
            continue
        lines.append(f"{'  ' * (entry.level - 1)}- [{entry.title}](#{entry.anchor})")
    lines.append("\n---\n")
    toc = "\n".join(lines)

    if _FIRST_H1.search(content) is None:
        return f"{toc}\n\n{content}"
    return _insert_after_first_h1(content, f"{toc}\n")


def _insert_after_first_h1(content: str, block: str) -> str:
    match = _FIRST_H1.search(content)
    if match is None:
        return f"{block}{content}"

    head = content[: match.end()]
    rest = content[match.end() :]
    if rest.startswith("\n"):
        rest = rest[1:]
    return f"{head}\n\n{block}{rest}"
