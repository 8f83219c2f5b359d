#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/html_to_markdown/tables.py
"""HTML table to Markdown pipe-table rendering.

The renderer classifies each ``<table>`` once and hands it to one of four
strategies:

- ``NESTED``: the table contains another table and is returned as raw HTML
- ``ROWSPAN``: rows are expanded through the span grid and each cell keeps
  its own internal line layout
- ``COLSPAN``: rows are expanded through the span grid and formatted with
  shared column widths
- ``SIMPLE``: plain header/data rows with shared column widths

Cell content is produced by two injected callables, an inline collapser and a
block renderer, so the table logic can be exercised without a full converter.
Every cell value passes through :func:`sanitize_table_cell_line` before it is
placed in a row, which escapes literal pipes outside inline code spans.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from bs4.element import PageElement, Tag

from llm_docs_builder.constants import TABLE_CELL_TAGS
from llm_docs_builder.html_to_markdown.helpers import leading_integer, parse_integer

logger = logging.getLogger(__name__)

InlineCollapser = Callable[[Tag], str]
BlockRenderer = Callable[[Sequence[PageElement], int], Optional[str]]


class TablePath(Enum):
    """Rendering strategy selected for a table."""

    NESTED = "nested"
    ROWSPAN = "rowspan"
    COLSPAN = "colspan"
    SIMPLE = "simple"


@dataclass(frozen=True)
class CellRenderResult:
    """Sanitized lines of one table cell.

    Parameters
    ----------
    lines : tuple[str, ...]
        Display lines of the cell; a blank cell holds a single empty string
    pipe_split : bool, default False
        Whether the content was already split on pipes, which makes forced
        padding unnecessary for the cell

    """

    lines: tuple[str, ...] = ("",)
    pipe_split: bool = False

    @property
    def width(self) -> int:
        """Length of the longest line."""
        return max((len(line) for line in self.lines), default=0)


EMPTY_CELL = CellRenderResult()


@dataclass(frozen=True)
class ColumnSpec:
    """Display width of a column and whether its lines are padded to it."""

    width: int
    pad: bool


@dataclass(frozen=True)
class SpanCell:
    """A rendered cell value with its parsed spans, ready for grid placement."""

    value: str
    colspan: int = 1
    rowspan: int = 1


@dataclass
class SpanSlots:
    """Rows still covered by an earlier rowspan, keyed by column index.

    One instance lives for exactly one table render.
    """

    remaining: dict[int, int] = field(default_factory=dict)

    def pending(self, column: int) -> bool:
        return self.remaining.get(column, 0) > 0

    def consume(self, column: int) -> None:
        left = self.remaining.get(column, 0) - 1
        if left > 0:
            self.remaining[column] = left
        else:
            self.remaining.pop(column, None)

    def assign(self, column: int, rows: int) -> None:
        if rows > 0:
            self.remaining[column] = rows
        else:
            self.remaining.pop(column, None)


@dataclass
class _TableRow:
    header: bool
    values: list[str]


def sanitize_table_cell_line(text: str | None, escape_pipes: bool = False) -> str:
    """Escape a cell's text so it cannot break the surrounding pipe table.

    Backslashes are doubled and protect the character that follows them.
    Backtick runs are copied verbatim and open or close an inline code span;
    a span only closes on a run of the same length that opened it. When
    ``escape_pipes`` is set, ``|`` outside code spans becomes ``\\|``.

    Parameters
    ----------
    text : str or None
        Rendered cell text
    escape_pipes : bool, default False
        Whether to escape literal pipes outside code spans

    Returns
    -------
    str
        The sanitized text, stripped of surrounding whitespace

    Examples
    --------
    >>> sanitize_table_cell_line("a|b", escape_pipes=True)
    'a\\\\|b'
    >>> sanitize_table_cell_line("`a|b`", escape_pipes=True)
    '`a|b`'

    """
    if not text:
        return ""

    out: list[str] = []
    index = 0
    length = len(text)
    inside_code = False
    fence_length = 0

    while index < length:
        char = text[index]

        if char == "\\":
            out.append("\\\\")
            index += 1
            if index < length:
                out.append(text[index])
                index += 1
            continue

        if char == "`":
            run_length = 1
            while index + run_length < length and text[index + run_length] == "`":
                run_length += 1
            out.append("`" * run_length)
            index += run_length

            if not inside_code:
                inside_code = True
                fence_length = run_length
            elif run_length == fence_length:
                inside_code = False
                fence_length = 0
            continue

        if char == "|" and escape_pipes and not inside_code:
            out.append("\\|")
        else:
            out.append(char)
        index += 1

    return "".join(out).strip()


def span_value_significant(raw_value: str | None) -> bool:
    """Decide whether a ``rowspan``/``colspan`` value needs span-aware rendering.

    Only a clean literal ``"1"`` (or a missing attribute) is insignificant.
    Empty strings, values above one, zero, negatives and anything that does
    not round-trip through integer parsing (``"1.0"``, ``"abc"``) all count.
    """
    if raw_value is None:
        return False

    value = str(raw_value).strip()
    if not value:
        return True
    if value == "1":
        return False

    integer = leading_integer(value)
    if integer > 1:
        return True
    return integer <= 0 or value != str(integer)


def table_cell_data(value: str | None) -> CellRenderResult:
    """Split a rendered cell into sanitized, non-blank display lines."""
    if not value:
        return EMPTY_CELL

    lines = [sanitize_table_cell_line(line, escape_pipes=True) for line in _normalize_newlines(value).split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return EMPTY_CELL
    return CellRenderResult(lines=tuple(lines), pipe_split=False)


def pad_table_row(values: Sequence[str] | None, length: int) -> list[str]:
    """Pad ``values`` with empty cells, or truncate it, to exactly ``length``."""
    padded = list(values or [])
    padded.extend([""] * (length - len(padded)))
    return padded[:length]


def expand_row_for_spans(cells: Sequence[SpanCell], slots: SpanSlots) -> list[str]:
    """Place one row's cells on the table grid.

    Before each real cell, columns still covered by a rowspan from an earlier
    row receive an empty placeholder. A cell with ``colspan`` N occupies N
    columns (its value in the first, placeholders after it), and a cell with
    ``rowspan`` N reserves each of those columns for the next N-1 rows.
    Reservations extending past the row's last real cell are drained at the
    end, so short rows still line up.

    Parameters
    ----------
    cells : Sequence[SpanCell]
        The row's cells in document order
    slots : SpanSlots
        Rowspan reservations for the current table, updated in place

    Returns
    -------
    list[str]
        Cell values including placeholders

    """
    row: list[str] = []
    column = 0

    def drain() -> None:
        nonlocal column
        while slots.pending(column):
            row.append("")
            slots.consume(column)
            column += 1

    for cell in cells:
        drain()
        for offset in range(cell.colspan):
            row.append(cell.value if offset == 0 else "")
            slots.assign(column + offset, cell.rowspan - 1 if cell.rowspan > 1 else 0)
        column += cell.colspan

    drain()
    return row


def compute_column_specs(
    header_cells: Sequence[CellRenderResult], data_rows: Sequence[Sequence[CellRenderResult]]
) -> list[ColumnSpec]:
    """Compute one :class:`ColumnSpec` per column.

    A column is padded when any of its cells spans several lines without
    having been pipe-split. Padded columns are as wide as their widest cell;
    unpadded columns take the header's width only, even if a data cell is
    wider. Widths never drop below 1.
    """
    specs: list[ColumnSpec] = []
    for index, header_cell in enumerate(header_cells):
        column_cells = [row[index] if index < len(row) else EMPTY_CELL for row in data_rows]

        header_width = header_cell.width
        content_width = max((cell.width for cell in column_cells), default=0)
        requires_padding = any(len(cell.lines) > 1 and not cell.pipe_split for cell in [header_cell, *column_cells])

        width = max(header_width, content_width) if requires_padding else header_width
        specs.append(ColumnSpec(width=max(width, 1), pad=requires_padding))
    return specs


def format_table_row(row_cells: Sequence[CellRenderResult], column_specs: Sequence[ColumnSpec]) -> list[str]:
    """Render a row as one or more ``| a | b |`` lines.

    Multi-line cells stack vertically. Lines where every value is blank are
    skipped; a row that would emit nothing renders as one line of
    width-sized blanks so the grid stays intact.
    """
    row_height = max((len(cell.lines) for cell in row_cells), default=0) or 1

    lines: list[str] = []
    for line_index in range(row_height):
        values = []
        for column_index, spec in enumerate(column_specs):
            cell = row_cells[column_index] if column_index < len(row_cells) else EMPTY_CELL
            line = cell.lines[line_index] if line_index < len(cell.lines) else ""
            values.append(line.ljust(spec.width) if spec.pad else line)

        if all(not value.strip() for value in values):
            continue
        lines.append(f"| {' | '.join(values)} |")

    if not lines:
        placeholder = " | ".join(" " * spec.width for spec in column_specs)
        return [f"| {placeholder} |"]
    return lines


def render_table_separator(column_widths: Sequence[int]) -> str:
    """Build the ``|---|---|`` line; every segment has at least three dashes."""
    return "|" + "|".join("-" * max(width + 2, 3) for width in column_widths) + "|"


def format_spanned_row(cells: Sequence[str]) -> list[str]:
    """Render a span-expanded row, keeping each cell's own line layout.

    Each cell is split on its internal newlines and its segments are padded
    to that cell's widest segment (not the column's). Sub-lines are joined
    with ``" | "`` and wrapped in borders, one output line per sub-line.
    """
    split_values = [
        _normalize_newlines(sanitize_table_cell_line(value, escape_pipes=True)).split("\n") for value in cells
    ]
    max_lines = max((len(segments) for segments in split_values), default=0)
    widths = [max(len(segment) for segment in segments) for segments in split_values]

    lines = []
    for line_index in range(max_lines):
        parts = []
        for segments, width in zip(split_values, widths):
            segment = segments[line_index] if line_index < len(segments) else ""
            parts.append(segment.ljust(width) if width > 0 and segment else segment)
        lines.append(" | ".join(parts))

    return [_bordered(line) for line in lines or [""]]


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _bordered(content: str) -> str:
    return f"| {content or ' '} |"


def _column_widths_from_cells(cells: Sequence[CellRenderResult]) -> list[int]:
    return [max(cell.width, 1) for cell in cells]


def _with_optional_caption(caption: str | None, table_markdown: str) -> str:
    return f"{caption}\n\n{table_markdown}" if caption else table_markdown


class TableMarkupRenderer:
    """Convert HTML ``<table>`` elements to Markdown pipe tables.

    Parameters
    ----------
    inline_collapser : callable
        ``(node) -> str``; flattens a node's inline content to Markdown
    block_renderer : callable
        ``(children, depth) -> str | None``; renders block content, where an
        empty or None result means the cell should fall back to inline text

    Examples
    --------
    >>> renderer = TableMarkupRenderer(inline_collapser=collapse, block_renderer=render_blocks)
    >>> renderer.render_table(soup.table)
    '| A | B |\\n|---|---|\\n| 1 | 2 |'

    """

    def __init__(self, inline_collapser: InlineCollapser, block_renderer: BlockRenderer):
        """Initialize the renderer with its content collaborators."""
        self._inline_collapser = inline_collapser
        self._block_renderer = block_renderer

    def render_table(self, table: Tag) -> str:
        """Render ``table`` as Markdown.

        Returns the original HTML for nested tables (and for rowspan tables
        without usable rows), an empty string for other tables without
        usable rows, and otherwise a pipe table optionally preceded by its
        caption.
        """
        path = self.classify(table)
        logger.debug("Rendering table via %s path", path.value)

        if path is TablePath.NESTED:
            return str(table)
        if path is TablePath.ROWSPAN:
            return self._render_rowspan_table(table)
        if path is TablePath.COLSPAN:
            return self._render_colspan_table(table)
        return self._render_simple_table(table)

    def classify(self, table: Tag) -> TablePath:
        """Pick the rendering strategy for ``table``."""
        if table.find("table") is not None:
            return TablePath.NESTED
        if self._has_significant_span(table, "rowspan"):
            return TablePath.ROWSPAN
        if self._has_significant_span(table, "colspan"):
            return TablePath.COLSPAN
        return TablePath.SIMPLE

    def render_table_cell(self, cell: Tag) -> str:
        """Render a cell's content, preferring block layout over inline text."""
        content = self._block_renderer(list(cell.children), 0)
        cleaned = (content or "").strip()
        if cleaned:
            return cleaned
        return self._inline_collapser(cell)

    # Strategies

    def _render_simple_table(self, table: Tag) -> str:
        rows = [_TableRow(header, [self.render_table_cell(cell) for cell in cells]) for header, cells in _rows(table)]
        return self._render_grid(table, rows)

    def _render_colspan_table(self, table: Tag) -> str:
        slots = SpanSlots()
        rows = [_TableRow(header, self._expand_cells(cells, slots)) for header, cells in _rows(table)]
        return self._render_grid(table, rows)

    def _render_rowspan_table(self, table: Tag) -> str:
        slots = SpanSlots()
        rows = [_TableRow(header, self._expand_cells(cells, slots)) for header, cells in _rows(table)]
        if not rows:
            logger.debug("Rowspan table has no cells; keeping original HTML")
            return str(table)

        column_count = max(len(row.values) for row in rows) or 1
        header_index = _find_header_index(rows)

        header_values = pad_table_row(rows[header_index].values, column_count)
        header_cells = [table_cell_data(value) for value in header_values]

        lines = format_spanned_row(header_values)
        lines.append(render_table_separator(_column_widths_from_cells(header_cells)))
        for index, row in enumerate(rows):
            if index == header_index:
                continue
            lines.extend(format_spanned_row(pad_table_row(row.values, column_count)))

        return _with_optional_caption(self._caption_text(table), "\n".join(lines))

    def _render_grid(self, table: Tag, rows: list[_TableRow]) -> str:
        if not rows:
            return ""

        header_index = _find_header_index(rows)
        header_values = rows[header_index].values
        data_values = [row.values for index, row in enumerate(rows) if index != header_index]

        column_count = max(len(header_values), max((len(values) for values in data_values), default=0)) or 1

        header_cells = [table_cell_data(value) for value in pad_table_row(header_values, column_count)]
        data_cells = [[table_cell_data(value) for value in pad_table_row(values, column_count)] for values in data_values]

        column_specs = compute_column_specs(header_cells, data_cells)

        lines = format_table_row(header_cells, column_specs)
        lines.append(render_table_separator([spec.width for spec in column_specs]))
        for row_cells in data_cells:
            lines.extend(format_table_row(row_cells, column_specs))

        return _with_optional_caption(self._caption_text(table), "\n".join(lines))

    # Helpers

    def _expand_cells(self, cells: list[Tag], slots: SpanSlots) -> list[str]:
        span_cells = [
            SpanCell(
                value=self.render_table_cell(cell),
                colspan=_span_count(cell.get("colspan")),
                rowspan=_span_count(cell.get("rowspan")),
            )
            for cell in cells
        ]
        return expand_row_for_spans(span_cells, slots)

    def _caption_text(self, table: Tag) -> str | None:
        caption = table.find("caption")
        if caption is None:
            return None
        return self._inline_collapser(caption).strip() or None

    @staticmethod
    def _has_significant_span(table: Tag, attribute: str) -> bool:
        return any(
            span_value_significant(cell.get(attribute))
            for cell in table.find_all(["td", "th"])
            if cell.has_attr(attribute)
        )


def _rows(table: Tag) -> list[tuple[bool, list[Tag]]]:
    """Collect ``(is_header_candidate, cells)`` for every row that has cells."""
    rows = []
    for row in table.find_all("tr"):
        cells = [child for child in row.find_all(True, recursive=False) if child.name.lower() in TABLE_CELL_TAGS]
        if not cells:
            continue
        header = row.find_parent("thead") is not None or all(cell.name.lower() == "th" for cell in cells)
        rows.append((header, cells))
    return rows


def _find_header_index(rows: Sequence[_TableRow]) -> int:
    return next((index for index, row in enumerate(rows) if row.header), 0)


def _span_count(raw: str | None) -> int:
    value = parse_integer(raw)
    if value is None or value <= 0:
        return 1
    return value
