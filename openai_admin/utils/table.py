"""
Plain-text table output.

Rows are buffered so column widths can be computed, and flushed when the
writer is closed, including when closed by an exception.
"""

import sys
from typing import List, Optional, Sequence, TextIO


COLUMN_PADDING = 2


class TableWriter:
    """Left-aligned table writer used as a context manager."""

    def __init__(
        self,
        header: Sequence[str],
        stream: Optional[TextIO] = None
    ):
        self.header = list(header)
        self.stream = stream if stream is not None else sys.stdout
        self._rows: List[List[str]] = []

    def add_row(self, row: Sequence[str]) -> None:
        if len(row) != len(self.header):
            raise ValueError(
                f"Row has {len(row)} cells, expected {len(self.header)}"
            )
        self._rows.append([str(cell) for cell in row])

    def flush(self) -> None:
        rows = [self.header] + self._rows
        widths = [max(len(row[i]) for row in rows) for i in range(len(self.header))]

        for row in rows:
            cells = [
                cell.ljust(widths[i] + COLUMN_PADDING)
                for i, cell in enumerate(row[:-1])
            ]
            cells.append(row[-1])
            self.stream.write("".join(cells).rstrip() + "\n")

        self.stream.flush()
        self._rows = []

    def __enter__(self) -> "TableWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()
