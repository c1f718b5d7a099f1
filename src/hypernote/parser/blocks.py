"""Table and blockquote detection.

A single forward pass over lines. Runs of table rows and runs of quoted
lines are buffered and flushed through their renderer when the run ends.
The scanner is in at most one run at a time; entering one flushes the other.
"""

from __future__ import annotations

import re
from enum import Enum

from ..config import BLOCKQUOTE_PREFIX

SEPARATOR_CELL = re.compile(r"^:?-+:?$")


class BlockState(Enum):
    NORMAL = "normal"
    IN_TABLE = "table"
    IN_BLOCKQUOTE = "blockquote"


def split_row(line: str) -> list[str]:
    """Split a table row into trimmed cells.

    The empty pieces outside a leading or trailing pipe are dropped, so
    "| a | b |" and "a | b" both give ["a", "b"].
    """
    cells = [cell.strip() for cell in line.split("|")]
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


def _is_separator(cells: list[str]) -> bool:
    return bool(cells) and all(SEPARATOR_CELL.match(cell) for cell in cells)


def _alignment(cell: str) -> str | None:
    if cell.startswith(":") and cell.endswith(":"):
        return "center"
    if cell.endswith(":"):
        return "right"
    if cell.startswith(":"):
        return "left"
    return None


def _fit(cells: list[str], width: int) -> list[str]:
    return (cells + [""] * width)[:width]


def _render_row(cells: list[str], tag: str, aligns: list[str | None]) -> str:
    out = []
    for cell, align in zip(cells, aligns):
        style = f' style="text-align: {align}"' if align else ""
        out.append(f"<{tag}{style}>{cell}</{tag}>")
    return "<tr>" + "".join(out) + "</tr>"


def render_table(lines: list[str]) -> str:
    """Render a run of pipe-delimited lines as a table.

    With a separator row at index 1, row 0 is the header. Otherwise every
    row is a body row. A single line cannot carry a header decision and is
    returned unchanged. All rows are padded or cut to the first row's width.
    """
    if len(lines) < 2:
        return "\n".join(lines)

    rows = [split_row(line) for line in lines]
    width = len(rows[0])

    if _is_separator(rows[1]):
        aligns = [_alignment(cell) for cell in _fit(rows[1], width)]
        head = _render_row(_fit(rows[0], width), "th", aligns)
        body = [_render_row(_fit(row, width), "td", aligns) for row in rows[2:]]
        html = f"<table><thead>{head}</thead>"
        if body:
            html += "<tbody>" + "".join(body) + "</tbody>"
        return html + "</table>"

    aligns = [None] * width
    body = [_render_row(_fit(row, width), "td", aligns) for row in rows]
    return "<table><tbody>" + "".join(body) + "</tbody></table>"


def render_blockquote(lines: list[str]) -> str:
    """Join a run of quoted lines into one blockquote."""
    return f"<blockquote>{'<br>'.join(lines)}</blockquote>"


class BlockScanner:
    """Line scanner with NORMAL / IN_TABLE / IN_BLOCKQUOTE states."""

    def __init__(self) -> None:
        self.state = BlockState.NORMAL
        self.buffer: list[str] = []
        self.output: list[str] = []

    def feed(self, line: str) -> None:
        if "|" in line:
            self._enter(BlockState.IN_TABLE)
            self.buffer.append(line)
        elif line.startswith(BLOCKQUOTE_PREFIX):
            self._enter(BlockState.IN_BLOCKQUOTE)
            self.buffer.append(line[len(BLOCKQUOTE_PREFIX) :])
        else:
            self.flush()
            self.output.append(line)

    def _enter(self, state: BlockState) -> None:
        if self.state is not state:
            self.flush()
            self.state = state

    def flush(self) -> None:
        if self.state is BlockState.IN_TABLE:
            self.output.append(render_table(self.buffer))
        elif self.state is BlockState.IN_BLOCKQUOTE:
            self.output.append(render_blockquote(self.buffer))
        self.state = BlockState.NORMAL
        self.buffer = []

    def finish(self) -> list[str]:
        self.flush()
        return self.output


def classify_blocks(text: str) -> str:
    """Render tables and blockquotes in already inline-formatted text."""
    scanner = BlockScanner()
    for line in text.split("\n"):
        scanner.feed(line)
    return "\n".join(scanner.finish())
