#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/cleanup.py
"""Removal of Markdown elements that carry little value for language models."""

from __future__ import annotations

import re

from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.transformers.base import BaseTransformer

_YAML_FRONTMATTER = re.compile(r"\A---[ \t]*$.*?^---[ \t]*$\n?", re.DOTALL | re.MULTILINE)
_TOML_FRONTMATTER = re.compile(r"\A\+\+\+[ \t]*$.*?^\+\+\+[ \t]*$\n?", re.DOTALL | re.MULTILINE)
_HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_BADGE_HOSTS = r"(?:badge|shield|svg|travis|coveralls|fury)"
_LINKED_BADGE = re.compile(rf"\[!\[[^\]]*\]\([^)]*{_BADGE_HOSTS}[^)]*\)\]\([^)]*\)", re.IGNORECASE)
_STANDALONE_BADGE = re.compile(rf"!\[[^\]]*\]\([^)]*{_BADGE_HOSTS}[^)]*\)", re.IGNORECASE)
_BACKTICK_FENCE = re.compile(r"^```.*?^```[^\n]*", re.DOTALL | re.MULTILINE)
_TILDE_FENCE = re.compile(r"^~~~.*?^~~~[^\n]*", re.DOTALL | re.MULTILINE)
_INDENTED_CODE = re.compile(r"^(?: {4,}|\t).+$", re.MULTILINE)
_INLINE_CODE = re.compile(r"`[^`]+`")
_INLINE_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]+\)")
_REFERENCE_IMAGE = re.compile(r"!\[[^\]]*\]\[[^\]]+\]")
_BLOCKQUOTE_MARKER = re.compile(r"^>[ \t]?", re.MULTILINE)


class ContentCleanupTransformer(BaseTransformer):
    """Strip frontmatter, comments, badges, code, images and quote markers.

    Steps run in that order, each only when its flag is set on the options.
    """

    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        options = self.resolve_options(options)
        result = content

        if options.remove_frontmatter:
            result = remove_frontmatter(result)
        if options.remove_comments:
            result = _HTML_COMMENT.sub("", result)
        if options.remove_badges:
            result = remove_badges(result)
        if options.remove_code_examples:
            result = remove_code_examples(result)
        if options.remove_images:
            result = remove_images(result)
        if options.remove_blockquotes:
            result = _BLOCKQUOTE_MARKER.sub("", result)

        return result


def remove_frontmatter(content: str) -> str:
    """Remove a leading YAML (``---``) or TOML (``+++``) frontmatter block."""
    content = _YAML_FRONTMATTER.sub("", content, count=1)
    return _TOML_FRONTMATTER.sub("", content, count=1)


def remove_badges(content: str) -> str:
    """Remove badge images, linked or standalone."""
    content = _LINKED_BADGE.sub("", content)
    return _STANDALONE_BADGE.sub("", content)


def remove_code_examples(content: str) -> str:
    """Remove fenced blocks, indented blocks and inline code spans."""
    content = _BACKTICK_FENCE.sub("", content)
    content = _TILDE_FENCE.sub("", content)
    content = _INDENTED_CODE.sub("", content)
    return _INLINE_CODE.sub("", content)


def remove_images(content: str) -> str:
    content = _INLINE_IMAGE.sub("", content)
    return _REFERENCE_IMAGE.sub("", content)
