#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/html_to_markdown/helpers.py
"""Text helpers shared by the HTML to Markdown renderers.

These are small, pure string functions: integer parsing for HTML attributes,
code fence sizing, blank line squeezing and link separator pruning.
"""

from __future__ import annotations

import re

from llm_docs_builder.constants import MAX_BLANK_LINES, MIN_CODE_FENCE_LENGTH, STRICT_INTEGER_PATTERN

_BACKTICK_RUN = re.compile(r"`+")
_LEADING_INTEGER = re.compile(r"^[+-]?\d+")
_TRAILING_SEPARATOR = re.compile(r"[ \t]*\|\s*$")


def parse_integer(raw: str | None) -> int | None:
    """Parse an attribute value that must be a plain integer literal.

    Parameters
    ----------
    raw : str or None
        Attribute value such as ``"3"`` or ``" -1 "``

    Returns
    -------
    int or None
        The parsed integer, or None when the value is missing or malformed
        (``"1.0"``, ``"abc"``, ``""``)

    Examples
    --------
    >>> parse_integer("2")
    2
    >>> parse_integer("2px") is None
    True

    """
    if raw is None:
        return None
    value = str(raw).strip()
    if not STRICT_INTEGER_PATTERN.match(value):
        return None
    return int(value)


def leading_integer(value: str) -> int:
    """Return the integer prefix of ``value``, or 0 when it has none.

    ``"2abc"`` gives 2, ``"1.0"`` gives 1 and ``"abc"`` gives 0.
    """
    match = _LEADING_INTEGER.match(value)
    return int(match.group(0)) if match else 0


def longest_backtick_run(text: str) -> int:
    """Return the length of the longest run of backticks in ``text``."""
    return max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)


def code_fence_for(code: str) -> str:
    """Pick a backtick fence that cannot collide with the code it wraps.

    The fence is at least three backticks long and always one longer than
    the longest backtick run inside ``code``.
    """
    return "`" * max(MIN_CODE_FENCE_LENGTH, longest_backtick_run(code) + 1)


def squeeze_blank_lines_outside_fences(
    text: str,
    max_blank: int = MAX_BLANK_LINES,
    fence_chars: str = "`~",
    min_fence: int = MIN_CODE_FENCE_LENGTH,
) -> str:
    """Limit runs of blank lines to ``max_blank`` except inside fenced code.

    A fence opens on a line made of an optional indent followed by at least
    ``min_fence`` repeats of a fence character, and closes on a line with the
    same indent and exactly the same fence run.

    Parameters
    ----------
    text : str
        Markdown text
    max_blank : int, default 2
        Maximum number of consecutive blank lines kept outside fences
    fence_chars : str, default "`~"
        Characters that can open a fence
    min_fence : int, default 3
        Minimum fence run length

    Returns
    -------
    str
        Text with excess blank lines removed

    """
    if not text:
        return ""

    fence_set = re.escape(fence_chars)
    open_re = re.compile(rf"^(\s*)([{fence_set}])\2{{{min_fence - 1},}}.*$")

    output: list[str] = []
    inside_fence = False
    close_re: re.Pattern[str] | None = None
    blank_streak = 0

    for line in text.split("\n"):
        if inside_fence:
            output.append(line)
            if close_re is not None and close_re.match(line):
                inside_fence = False
                close_re = None
            continue

        match = open_re.match(line)
        if match:
            indent, char = match.group(1), match.group(2)
            run_length = len(line[len(indent) :]) - len(line[len(indent) :].lstrip(char))
            close_re = re.compile(rf"^{re.escape(indent)}{re.escape(char * run_length)}\s*$")
            inside_fence = True
            blank_streak = 0
            output.append(line)
            continue

        if not line.strip():
            blank_streak += 1
            if blank_streak <= max_blank:
                output.append(line)
        else:
            blank_streak = 0
            output.append(line)

    return "\n".join(output)


def prune_trailing_unsafe_link_separator(parts: list[str]) -> None:
    """Drop a dangling ``|`` separator left behind by a removed link.

    Mutates ``parts`` in place. Trailing whitespace-only parts are removed
    along with the separator, so ``["Foo | "]`` becomes ``["Foo"]``.
    """
    while parts:
        last = parts[-1]
        without_separator = _TRAILING_SEPARATOR.sub("", last, count=1)

        if without_separator != last:
            trimmed = without_separator.rstrip()
            if trimmed:
                parts[-1] = trimmed
            else:
                parts.pop()
            continue

        if not last.strip():
            parts.pop()
            continue

        break
