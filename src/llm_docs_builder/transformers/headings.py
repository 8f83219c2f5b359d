#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/transformers/headings.py
"""Heading normalization: give each subheading its full section path."""

from __future__ import annotations

import re

from llm_docs_builder.options import BuilderOptions
from llm_docs_builder.transformers.base import BaseTransformer

_FENCE_LINE = re.compile(r"^(?:```|~~~)")
_HEADING_LINE = re.compile(r"^(#{1,6})\s+(.+?)$")


class HeadingTransformer(BaseTransformer):
    """Rewrite H2 and deeper headings as ``Parent / Child`` paths.

    A chunk of the document read in isolation then still says where it
    belongs. H1 headings and anything inside fenced code are left alone.

    Examples
    --------
    >>> options = BuilderOptions(normalize_headings=True)
    >>> HeadingTransformer().transform("# Guide\\n## Install\\n### Linux\\n", options)
    '# Guide\\n## Guide / Install\\n### Guide / Install / Linux\\n'

    """

    def transform(self, content: str, options: BuilderOptions | None = None) -> str:
        options = self.resolve_options(options)
        if not options.normalize_headings:
            return content

        separator = options.heading_separator
        stack: list[str] = []
        in_code_block = False
        output: list[str] = []

        for line in content.splitlines(keepends=True):
            if _FENCE_LINE.match(line):
                in_code_block = not in_code_block
                output.append(line)
                continue
            if in_code_block:
                output.append(line)
                continue

            body = line.rstrip("\r\n")
            match = _HEADING_LINE.match(body)
            if match is None:
                output.append(line)
                continue

            level = len(match.group(1))
            stack = stack[: level - 1]
            stack.append(match.group(2).strip())

            if level == 1:
                output.append(line)
            else:
                ending = line[len(body) :]
                output.append(f"{'#' * level} {separator.join(stack)}{ending}")

        return "".join(output)
