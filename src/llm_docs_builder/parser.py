#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/parser.py
"""Parse an ``llms.txt`` file into its title, description and link sections."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from llm_docs_builder._input_utils import read_text_file

logger = logging.getLogger(__name__)

SectionContent = Union[list[dict[str, str]], str]

_LINK_ENTRY = re.compile(r"^[-*]\s*\[([^\]]+)\]\(([^)]+)\)(?::\s*(.*))?$")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class ParsedContent:
    """Structured view of an ``llms.txt`` document.

    Parameters
    ----------
    title : str, optional
        Text of the H1
    description : str, optional
        First blockquote after the title
    sections : dict
        Section key (lowercased ``## Name`` with whitespace as ``_``) to a
        list of ``{"title", "url", "description"}`` links, or to the
        section's text when it holds no links

    """

    title: str | None = None
    description: str | None = None
    sections: dict[str, SectionContent] = field(default_factory=dict)

    @property
    def documentation_links(self) -> SectionContent:
        return self.sections.get("documentation", [])

    @property
    def example_links(self) -> SectionContent:
        return self.sections.get("examples", [])

    @property
    def optional_links(self) -> SectionContent:
        return self.sections.get("optional", [])

    def to_dict(self) -> dict[str, Any]:
        """Return the title, description and sections as one flat mapping."""
        result: dict[str, Any] = {}
        if self.title is not None:
            result["title"] = self.title
        if self.description is not None:
            result["description"] = self.description
        result.update(self.sections)
        return result

    def to_xml(self) -> str:
        """Render the content as an ``<llms_context>`` XML document.

        Text and attribute-like values are XML-escaped.
        """
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<llms_context>"]
        if self.title:
            lines.append(f"  <title>{_escape(self.title)}</title>")
        if self.description:
            lines.append(f"  <description>{_escape(self.description)}</description>")

        _append_xml_section(lines, "documentation", self.documentation_links)
        _append_xml_section(lines, "examples", self.example_links)
        _append_xml_section(lines, "optional", self.optional_links)

        lines.append("</llms_context>")
        return "\n".join(lines)


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def _append_xml_section(lines: list[str], name: str, content: SectionContent) -> None:
    if not content:
        return

    lines.append(f"  <{name}>")
    if isinstance(content, list):
        for link in content:
            lines.extend(
                [
                    "    <link>",
                    f"      <title>{_escape(link['title'])}</title>",
                    f"      <url>{_escape(link['url'])}</url>",
                    f"      <description>{_escape(link['description'])}</description>",
                    "    </link>",
                ]
            )
    else:
        lines.append(f"    {_escape(content)}")
    lines.append(f"  </{name}>")


def parse_section_content(body: str) -> SectionContent:
    """Return the link entries of a section body, or its stripped text."""
    links = []
    for line in body.splitlines():
        match = _LINK_ENTRY.match(line.strip())
        if match:
            links.append(
                {
                    "title": match.group(1),
                    "url": match.group(2),
                    "description": (match.group(3) or "").strip(),
                }
            )
    return links if links else body.strip()


class Parser:
    """Read and parse an ``llms.txt`` file.

    Parameters
    ----------
    file_path : str or Path
        File to parse

    Raises
    ------
    FileNotFoundError
        If the file does not exist

    Examples
    --------
    >>> parsed = Parser("llms.txt").parse()
    >>> parsed.title
    'My Project'
    >>> parsed.documentation_links[0]["url"]
    'https://example.com/docs/README.md'

    """

    def __init__(self, file_path: str | Path):
        """Load the file content."""
        self.file_path = file_path
        self.content = read_text_file(file_path)

    def parse(self) -> ParsedContent:
        parsed = ParsedContent()
        current_section: str | None = None
        current_lines: list[str] = []

        def save_section() -> None:
            if current_section is not None and current_lines:
                parsed.sections[current_section] = parse_section_content("".join(current_lines))

        for line in self.content.splitlines(keepends=True):
            if line.startswith("# "):
                save_section()
                if parsed.title is None and not parsed.sections:
                    parsed.title = line[2:].strip()
                current_section = None
                current_lines = []
            elif line.startswith("> ") and parsed.title is not None and parsed.description is None:
                parsed.description = line[2:].strip()
            elif line.startswith("## "):
                save_section()
                current_section = _WHITESPACE.sub("_", line[3:].strip().lower())
                current_lines = []
            elif line.strip():
                current_lines.append(line)

        save_section()
        logger.debug("Parsed %s with sections: %s", self.file_path, ", ".join(parsed.sections) or "none")
        return parsed
