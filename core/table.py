"""
Tabular model and box-drawn renderer.

A ``Table`` holds the columns and rows of exactly one query result. Column
widths are tracked incrementally while rows are ingested and only ever
grow, so rendering is a single pass over the stored cells.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from core.border import Border, BorderStyle, resolve
from core.errors import ShapeError

logger = logging.getLogger(__name__)

ROW_COUNTER_POSITION = 1
ROW_COUNTER_LABEL = "#"
ROW_COUNTER_MIN_WIDTH = 4
NULL_VALUE = "NULL"


def format_cell(value: Any) -> str:
    """Convert a driver value into the text shown in a cell."""
    if value is None:
        return NULL_VALUE
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


@dataclass
class Header:
    """A registered column: rendered name and running width."""

    name: str
    length: int

    @classmethod
    def row_counter(cls) -> "Header":
        return cls(name=f" {ROW_COUNTER_LABEL}", length=ROW_COUNTER_MIN_WIDTH)

    @classmethod
    def from_column(cls, name: str) -> "Header":
        label = name.upper()
        return cls(name=f" {label}", length=len(label) + 2)

    def observe(self, value: str) -> None:
        """Grow the column so the value fits with its padding."""
        self.length = max(self.length, len(value) + 2)


class Table:
    """
    A single result set ready to be rendered.

    Args:
        border_style: BorderStyle, style code or name used by ``render``
    """

    def __init__(self, border_style: Union[BorderStyle, str, int, None] = None):
        self.border_style = BorderStyle.from_code(border_style)
        self.headers: Dict[int, Header] = {}
        self.rows: List[List[str]] = []

    @property
    def border(self) -> Border:
        return resolve(self.border_style)

    @property
    def data_column_count(self) -> int:
        return len([position for position in self.headers if position != ROW_COUNTER_POSITION])

    def set_header(self, position: int, name: str) -> None:
        """
        Register a result column at a 1-based position.

        Position 1 belongs to the row counter and is created on the first
        call. Registering an existing position again leaves it unchanged.
        A new position must directly follow the highest registered one.
        """
        if position <= ROW_COUNTER_POSITION:
            raise ShapeError(
                f"Column position {position} is reserved; result columns start at 2"
            )
        if ROW_COUNTER_POSITION not in self.headers:
            self.headers[ROW_COUNTER_POSITION] = Header.row_counter()
        if position in self.headers:
            return
        next_position = max(self.headers) + 1
        if position != next_position:
            raise ShapeError(
                f"Column position {position} leaves a gap; next position is {next_position}"
            )
        self.headers[position] = Header.from_column(name)

    def set_headers(self, names: Iterable[str]) -> None:
        """Register result columns left to right, starting at position 2."""
        for offset, name in enumerate(names):
            self.set_header(ROW_COUNTER_POSITION + 1 + offset, name)

    def ingest_row(self, values: Iterable[Any]) -> None:
        """
        Append a row of result values aligned to columns 2..N.

        Raises:
            ShapeError: if the value count differs from the data column count
        """
        values = list(values)
        expected = self.data_column_count
        if len(values) != expected:
            raise ShapeError(
                f"Row has {len(values)} value(s) but {expected} column(s) are registered"
            )

        counter = f"#{len(self.rows) + 1}"
        cells = [counter] + [format_cell(value) for value in values]

        row: List[str] = []
        for position, cell in enumerate(cells, start=ROW_COUNTER_POSITION):
            self.headers[position].observe(cell)
            row.append(f" {cell}")
        self.rows.append(row)

    def column_names(self) -> List[Tuple[int, str]]:
        """Return (position, upper-case name) pairs in ascending position."""
        return [
            (position, self.headers[position].name.strip())
            for position in sorted(self.headers)
        ]

    def render(self) -> List[str]:
        """
        Produce the box-drawn lines for the table.

        The output is a top border, the header line and the header
        separator, followed by a content line and a separator line per row.

        Raises:
            ShapeError: if the table has no rows or inconsistent shapes
        """
        widths = self._column_widths()
        if not self.rows:
            raise ShapeError("Cannot render a table without rows")

        border = self.border
        column_count = len(widths)

        header_up = [border.corner_up_left]
        header_mid = [border.vertical]
        header_bottom = [border.vertical_left]
        for index, position in enumerate(sorted(self.headers)):
            length = widths[index]
            is_last_column = index == column_count - 1
            header_up.append(border.horizontal * length)
            header_up.append(border.corner_up_right if is_last_column else border.division_up)
            header_mid.append(_pad(self.headers[position].name, length))
            header_mid.append(border.vertical)
            header_bottom.append(border.horizontal * length)
            header_bottom.append(border.vertical_right if is_last_column else border.intersection)

        lines = ["".join(header_up), "".join(header_mid), "".join(header_bottom)]

        last_row = len(self.rows) - 1
        for i, row in enumerate(self.rows):
            if len(row) != column_count:
                raise ShapeError(
                    f"Row {i + 1} has {len(row)} cell(s) but {column_count} column(s) are registered"
                )
            is_last_row = i == last_row
            content = [border.vertical]
            separator = [border.corner_bottom_left if is_last_row else border.vertical_left]
            for j, cell in enumerate(row):
                content.append(_pad(cell, widths[j]))
                content.append(border.vertical)
                separator.append(border.horizontal * widths[j])
                separator.append(_junction(border, is_last_row, j == column_count - 1))
            lines.append("".join(content))
            lines.append("".join(separator))

        logger.debug("Rendered table with %s row(s) and %s column(s)", len(self.rows), column_count)
        return lines

    def _column_widths(self) -> List[int]:
        positions = sorted(self.headers)
        if positions != list(range(ROW_COUNTER_POSITION, len(positions) + 1)):
            raise ShapeError(f"Column positions are not contiguous: {positions}")
        if len(positions) < 2:
            raise ShapeError("Table has no result columns")
        return [self.headers[position].length for position in positions]


def _junction(border: Border, is_last_row: bool, is_last_column: bool) -> str:
    if not is_last_row:
        return border.vertical_right if is_last_column else border.intersection
    return border.corner_bottom_right if is_last_column else border.division_bottom


def _pad(value: str, length: int) -> str:
    """Right-pad a value with spaces up to ``length`` characters."""
    missing = length - len(value)
    if missing > 0:
        return value + " " * missing
    return value


def build_table(
    column_names: Iterable[str],
    rows: Iterable[Iterable[Any]],
    border_style: Optional[Union[BorderStyle, str, int]] = None,
) -> Table:
    """Build a table from column names and row values in one call."""
    table = Table(border_style)
    table.set_headers(column_names)
    for values in rows:
        table.ingest_row(values)
    return table
