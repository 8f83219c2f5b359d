#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/text_compressor.py
"""Lossy prose compression: stopword removal and duplicate elimination.

Code is never altered. Fenced blocks and inline code spans are swapped for
placeholders before any words are touched and restored afterwards.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from llm_docs_builder.constants import DEFAULT_SIMILARITY_THRESHOLD, STOPWORDS

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"^```.*?^```", re.DOTALL | re.MULTILINE)
_INLINE_CODE = re.compile(r"`[^`]+`")
_HEADING_LINE = re.compile(r"^#+\s")
_BULLET_LINE = re.compile(r"^[*\-]\s")
_LINK = re.compile(r"\[[^\]]+\]\([^)]+\)")
_WORD = re.compile(r"\w+")
_CAPITALIZED = re.compile(r"^[A-Z]")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"\. |\n")
_WHITESPACE = re.compile(r"\s+")


class TextCompressor:
    """Reduce the token footprint of Markdown prose.

    Parameters
    ----------
    preserve_technical : bool, default True
        Keep code spans and fenced blocks untouched
    custom_stopwords : iterable of str, optional
        Extra words removed along with the built-in English list

    Examples
    --------
    >>> TextCompressor().compress("Run the tests in the repo", remove_stopwords=True)
    'Run  tests   repo'

    """

    def __init__(self, preserve_technical: bool = True, custom_stopwords: Iterable[str] = ()):
        """Initialize the compressor."""
        self.preserve_technical = preserve_technical
        self.stopwords = STOPWORDS | frozenset(word.lower() for word in custom_stopwords)

    def compress(self, content: str, remove_stopwords: bool = False, remove_duplicates: bool = False) -> str:
        """Apply the selected compression methods in order."""
        result = content
        if remove_stopwords:
            result = self.remove_stopwords(result)
        if remove_duplicates:
            result = self.remove_duplicate_paragraphs(result)
        return result

    def remove_stopwords(self, content: str) -> str:
        """Drop lowercase stopwords from prose lines.

        Headings, bullet items and lines containing links keep their wording,
        and capitalised words are always kept.
        """
        protected: dict[str, str] = {}

        def protect(kind: str):
            def replace(match: re.Match[str]) -> str:
                placeholder = f"___{kind}_{len(protected)}___"
                protected[placeholder] = match.group(0)
                return placeholder

            return replace

        if self.preserve_technical:
            content = _FENCED_BLOCK.sub(protect("CODE_BLOCK"), content)
            content = _INLINE_CODE.sub(protect("INLINE_CODE"), content)

        lines = [self._strip_line(line) for line in content.split("\n")]
        result = "\n".join(lines)

        for placeholder, original in protected.items():
            result = result.replace(placeholder, original)
        return result

    def _strip_line(self, line: str) -> str:
        if _HEADING_LINE.match(line) or _BULLET_LINE.match(line) or _LINK.search(line):
            return line

        def drop(match: re.Match[str]) -> str:
            word = match.group(0)
            if word.lower() in self.stopwords and not _CAPITALIZED.match(word):
                return ""
            return word

        return _WORD.sub(drop, line)

    def remove_duplicate_paragraphs(self, content: str) -> str:
        """Keep the first occurrence of each paragraph.

        Paragraphs are compared case-insensitively with whitespace collapsed.
        Blank paragraphs are dropped and the rest are joined by blank lines.
        """
        seen: set[str] = set()
        unique: list[str] = []
        for paragraph in _PARAGRAPH_BREAK.split(content):
            normalized = _normalize(paragraph)
            if not normalized or normalized in seen:
                continue
            seen.add(normalized)
            unique.append(paragraph)

        logger.debug("Kept %d unique paragraphs", len(unique))
        return "\n\n".join(unique)

    def remove_duplicate_sentences(
        self, content: str, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    ) -> str:
        """Drop sentences whose word sets are near-duplicates of an earlier one.

        Parameters
        ----------
        content : str
            Text to deduplicate
        similarity_threshold : float, default 0.8
            Jaccard similarity at or above which a sentence counts as repeated

        Returns
        -------
        str
            Remaining sentences joined with ``". "``

        """
        seen: list[str] = []
        unique: list[str] = []
        for sentence in _SENTENCE_BREAK.split(content):
            normalized = _normalize(sentence)
            if not normalized:
                continue
            if any(similarity(normalized, previous) >= similarity_threshold for previous in seen):
                continue
            seen.append(normalized)
            unique.append(sentence)
        return ". ".join(unique)


def similarity(first: str, second: str) -> float:
    """Jaccard similarity of the word sets of two strings."""
    words_first = first.split()
    words_second = second.split()
    if words_first == words_second:
        return 1.0
    if not words_first or not words_second:
        return 0.0

    set_first, set_second = set(words_first), set(words_second)
    return len(set_first & set_second) / len(set_first | set_second)


def _normalize(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip().lower()
