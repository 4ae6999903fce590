"""Fixed-width alignment of Markdown table rows."""

import re
from typing import List

from wcwidth import wcwidth

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")
LINE_BREAK_MARKER = "<br>"


def replace_line_breaks(text: str) -> str:
    return _LINE_BREAK_RE.sub(LINE_BREAK_MARKER, text)


def display_width(text: str) -> int:
    """Terminal column width of ``text``: wide (CJK) characters count 2, combining marks 0."""
    return sum(max(wcwidth(char), 0) for char in text)


def pad(text: str, width: int) -> str:
    return text + " " * max(width - display_width(text), 0)


def column_widths(rows: List[List[str]]) -> List[int]:
    widths = [0] * len(rows[0])
    for row in rows:
        for j, cell in enumerate(row):
            widths[j] = max(widths[j], display_width(replace_line_breaks(cell)))
    return widths


def adjust_table(rows: List[List[str]]) -> List[List[str]]:
    """Return a copy of ``rows`` with every column padded to the same display width.

    Row 1 is the header separator and is rewritten as dashes. Line breaks in
    cells become ``<br>`` so each row stays on one line.
    """
    if not rows:
        return []
    widths = column_widths(rows)
    adjusted = []
    for i, row in enumerate(rows):
        if i == 1:
            adjusted.append(["-" * w for w in widths])
            continue
        adjusted.append([pad(replace_line_breaks(cell), widths[j]) for j, cell in enumerate(row)])
    return adjusted
