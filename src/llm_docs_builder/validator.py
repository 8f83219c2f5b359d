#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/validator.py
"""Check ``llms.txt`` content against the format's structural rules."""

from __future__ import annotations

import logging
import re

from llm_docs_builder.constants import (
    EXPECTED_SECTION_ORDER,
    MAX_DESCRIPTION_LENGTH,
    MAX_LINE_LENGTH,
    MAX_LLMS_TXT_SIZE,
    MAX_TITLE_LENGTH,
)

logger = logging.getLogger(__name__)

_SECTION_HEADER = re.compile(r"^## (.+)$", re.MULTILINE)
_ANY_LINK = re.compile(r"\[([^\]]*)\]\(([^)]*)\)")
_NONEMPTY_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_URL_FORMAT = re.compile(
    r"""^(?:
        https?://
        | /
        | \.\.?/
        | [a-zA-Z0-9_.-]+(?:/|\.md|\.txt|\.rb|\.html)?
        | [A-Z]+[a-zA-Z]*
        | docs/
        | examples/
        | lib/
    ).*$""",
    re.VERBOSE,
)
_LIST_LINK_START = re.compile(r"^[-*]\s+\[")
_LIST_LINK_ENTRY = re.compile(r"^[-*]\s+\[.+\]\(.+\)(?::\s*.+)?$")
_HEADER = re.compile(r"^(#+)[ \t]+(.*)$", re.MULTILINE)


class Validator:
    """Validate ``llms.txt`` content.

    Validation collects every problem instead of stopping at the first one.

    Parameters
    ----------
    content : str
        The ``llms.txt`` text

    Attributes
    ----------
    errors : list of str
        Problems found by the last :meth:`validate` call

    Examples
    --------
    >>> validator = Validator("# Project\\n\\n> Docs.\\n")
    >>> validator.is_valid()
    True

    """

    def __init__(self, content: str):
        """Initialize the validator."""
        self.content = content
        self.errors: list[str] = []

    def is_valid(self) -> bool:
        return self.validate()

    def validate(self) -> bool:
        """Run every check, filling :attr:`errors`, and return whether none failed."""
        self.errors = []
        lines = self.content.splitlines()

        self._validate_required_sections(lines)
        self._validate_structure(lines)
        self._validate_link_format()
        self._validate_list_format(lines)
        self._validate_headers()
        self._validate_links()
        self._validate_size(lines)

        if self.errors:
            logger.debug("Validation found %d problem(s)", len(self.errors))
        return not self.errors

    def _validate_required_sections(self, lines: list[str]) -> None:
        first_line = lines[0] if lines else ""
        if not first_line.startswith("# "):
            self.errors.append('Missing required H1 title (must start with "# ")')
        if len(first_line.strip()) > MAX_TITLE_LENGTH:
            self.errors.append(f"Title is too long (max {MAX_TITLE_LENGTH} characters)")

    def _validate_structure(self, lines: list[str]) -> None:
        if sum(1 for line in lines if line.startswith("# ")) > 1:
            self.errors.append("Multiple H1 headers found (only one allowed)")

        description = next((line for line in lines[1:3] if line.startswith("> ")), None)
        if description is not None and len(description.strip()) > MAX_DESCRIPTION_LENGTH:
            self.errors.append(f"Description blockquote is too long (max {MAX_DESCRIPTION_LENGTH} characters)")

        current_index = -1
        for section in _SECTION_HEADER.findall(self.content):
            name = section.strip()
            if name not in EXPECTED_SECTION_ORDER:
                continue
            index = EXPECTED_SECTION_ORDER.index(name)
            if index < current_index:
                self.errors.append(f"Section '{name}' is out of order")
            current_index = index

    def _validate_link_format(self) -> None:
        for text, url in _ANY_LINK.findall(self.content):
            if not text:
                self.errors.append("Empty link text found")
            if not url:
                self.errors.append("Empty link URL found")
            if not _URL_FORMAT.match(url):
                self.errors.append(f"Invalid URL format: {url}")

    def _validate_list_format(self, lines: list[str]) -> None:
        for number, line in enumerate(lines, start=1):
            if _LIST_LINK_START.match(line) and not _LIST_LINK_ENTRY.match(line):
                self.errors.append(f"Invalid list item format at line {number}")

    def _validate_headers(self) -> None:
        for hashes, text in _HEADER.findall(self.content):
            level = len(hashes)
            if level == 1 and not text.strip():
                self.errors.append("Empty H1 header text")
            elif level > 2:
                self.errors.append(f"Headers deeper than H2 not recommended (found H{level})")

    def _validate_links(self) -> None:
        for _text, url in _NONEMPTY_LINK.findall(self.content):
            if url.startswith("http") and not url.startswith("https"):
                self.errors.append(f"Non-HTTPS URL found: {url} (consider using HTTPS)")
            if " " in url:
                self.errors.append(f"URL contains spaces: {url}")

    def _validate_size(self, lines: list[str]) -> None:
        if len(self.content.encode("utf-8")) > MAX_LLMS_TXT_SIZE:
            self.errors.append(f"File size exceeds maximum ({MAX_LLMS_TXT_SIZE} bytes)")
        for number, line in enumerate(lines, start=1):
            if len(line) > MAX_LINE_LENGTH:
                self.errors.append(f"Line {number} exceeds maximum length ({MAX_LINE_LENGTH} characters)")
