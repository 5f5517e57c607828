# svim/core/Row.py
"""Row Module for the svim editor
================================
A `Row` holds the characters of one line of the buffer.

Columns are character counts (Unicode code points), never bytes and never
screen cells. Converting columns to screen cells is the renderer's job
(see `svim.ui.DrawScreen`).
"""

from __future__ import annotations


class Row:
    """One line of text.

    Attributes:
        text (str): The characters of the line, without any line terminator.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        """Number of characters in the row."""
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._text == other._text
        return NotImplemented

    def __repr__(self) -> str:
        return f"Row({self._text!r})"

    def render(self, start: int, end: int) -> str:
        """Returns the characters in the column range `[start, end)`.

        Both bounds are clipped to the row, so asking for a range that lies
        partly or entirely outside the row is safe and yields the visible
        part (possibly an empty string).

        Args:
            start (int): First column to include.
            end (int): Column after the last one to include.

        Returns:
            str: The visible substring.
        """
        length = len(self._text)
        start = max(0, min(start, length))
        end = max(start, min(end, length))
        return self._text[start:end]

    def insert(self, at: int, ch: str) -> None:
        """Inserts `ch` before column `at`, appending when `at` is past the end."""
        if at >= len(self._text):
            self._text += ch
            return
        at = max(0, at)
        self._text = self._text[:at] + ch + self._text[at:]

    def delete(self, at: int) -> None:
        """Removes the character at column `at`; no-op outside the row."""
        if at < 0 or at >= len(self._text):
            return
        self._text = self._text[:at] + self._text[at + 1:]

    def split(self, at: int) -> "Row":
        """Cuts the row at column `at`.

        This row keeps `[0, at)`; the returned row holds `[at, length)`.
        """
        at = max(0, min(at, len(self._text)))
        tail = Row(self._text[at:])
        self._text = self._text[:at]
        return tail

    def append(self, other: "Row") -> None:
        self._text += other._text
