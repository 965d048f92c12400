"""
Offset Index Module

Converts character offsets within the scanned text into zero-based
(line, column) pairs and back.
"""

import bisect
from typing import List, Tuple

from .spans import Span


def line_col_of(text: str, offset: int) -> Tuple[int, int]:
    """
    Get the (line, column) of a character offset.

    The line is the number of newlines strictly before the offset and the
    column is the distance from the character following the last of them.
    An offset right after a newline is column 0 of the next line.

    Args:
        text: Full source text
        offset: Character offset, 0 <= offset <= len(text)

    Returns:
        Tuple of (line, column)

    Raises:
        ValueError: If the offset falls outside the text
    """
    if offset < 0 or offset > len(text):
        raise ValueError(f"Offset {offset} outside text of length {len(text)}")

    line = text.count('\n', 0, offset)
    column = offset - text.rfind('\n', 0, offset) - 1
    return line, column


def offset_of(text: str, line: int, column: int) -> int:
    """
    Get the character offset of a (line, column) pair.

    Args:
        text: Full source text
        line: Zero-based line number
        column: Zero-based column within that line

    Returns:
        Character offset into text

    Raises:
        ValueError: If the line does not exist or the column is past its end
    """
    if line < 0 or column < 0:
        raise ValueError(f"Negative position ({line}, {column})")

    line_start = 0
    for _ in range(line):
        newline = text.find('\n', line_start)
        if newline == -1:
            raise ValueError(f"Line {line} outside text")
        line_start = newline + 1

    line_end = text.find('\n', line_start)
    if line_end == -1:
        line_end = len(text)
    if line_start + column > line_end:
        raise ValueError(f"Column {column} past end of line {line}")

    return line_start + column


def span_of(text: str, start: int, end: int) -> Span:
    """Build the Span covering text[start:end]."""
    start_line, start_col = line_col_of(text, start)
    end_line, end_col = line_col_of(text, end)
    return Span(start_line, start_col, end_line, end_col)


class OffsetIndex:
    """
    Line-start table for converting many offsets of the same text.

    Built once per text; each lookup is a binary search.
    """

    def __init__(self, text: str):
        self.length = len(text)
        self.line_starts: List[int] = [0]
        position = text.find('\n')
        while position != -1:
            self.line_starts.append(position + 1)
            position = text.find('\n', position + 1)

    def line_col(self, offset: int) -> Tuple[int, int]:
        """Same result as line_col_of on the indexed text."""
        if offset < 0 or offset > self.length:
            raise ValueError(f"Offset {offset} outside text of length {self.length}")

        line = bisect.bisect_right(self.line_starts, offset) - 1
        return line, offset - self.line_starts[line]

    def span(self, start: int, end: int) -> Span:
        """Same result as span_of on the indexed text."""
        start_line, start_col = self.line_col(start)
        end_line, end_col = self.line_col(end)
        return Span(start_line, start_col, end_line, end_col)
