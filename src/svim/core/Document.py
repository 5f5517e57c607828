# svim/core/Document.py
"""Document Module for the svim editor
=====================================
This module provides the `Document` class, the ordered buffer of `Row`
objects that the editor works on, together with the file identity it was
loaded from and a dirty flag tracking unsaved changes.

All content mutation and all file I/O go through `Document`. Failures are
reported with the typed exceptions defined here:

- `OpenError`: the file could not be read at load time.
- `SaveError`: the buffer could not be written (no file name, or the write
  itself failed).

Newline handling
----------------
On open, one trailing newline is stripped, the text is split on ``"\\n"``
and a trailing ``"\\r"`` is removed from every line. On save the rows are
joined with ``"\\n"`` and a single final newline is written when the
buffer is not empty. A file that already ends with a newline is therefore
written back byte-for-byte; a file without one gains it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from svim.core.Row import Row


if TYPE_CHECKING:
    from svim.core.Viewport import Position


logger = logging.getLogger("svim")

LINE_BREAK = "\n"


class DocumentError(Exception):
    """Base class for document I/O failures.

    Attributes:
        path (Optional[str]): The file involved, if any.
        reason (str): Short human-readable cause.
    """

    def __init__(self, path: Optional[str], reason: str) -> None:
        super().__init__(f"{path or '[NoName]'}: {reason}")
        self.path = path
        self.reason = reason


class OpenError(DocumentError):
    """The file is missing or could not be read."""


class SaveError(DocumentError):
    """The document could not be written."""


def _split_lines(content: str) -> list[str]:
    if not content:
        return []
    if content.endswith(LINE_BREAK):
        content = content[:-1]
    return [line[:-1] if line.endswith("\r") else line for line in content.split(LINE_BREAK)]


## ==================== Document Class ====================
class Document:
    """Class Document
    ===================
    An ordered sequence of rows plus file identity and dirty flag.

    Attributes:
        rows (list[Row]): The lines of the buffer, in order.
        file_name (Optional[str]): Path the document is saved to; None for an
            untitled buffer.
    """

    def __init__(self, rows: Optional[list[Row]] = None, file_name: Optional[str] = None) -> None:
        self.rows: list[Row] = rows if rows is not None else []
        self.file_name = file_name
        self._dirty = False

    @classmethod
    def default(cls) -> "Document":
        """Returns an empty, untitled, clean document."""
        return cls()

    @classmethod
    def open(cls, path: str) -> "Document":
        """Loads a UTF-8 text file, one row per line.

        Args:
            path (str): File to read.

        Returns:
            Document: A clean document whose file identity is `path`.

        Raises:
            OpenError: If the file is missing, is not a regular file, cannot
                be read or is not valid UTF-8.
        """
        try:
            with open(path, "r", encoding="utf-8", newline="") as fh:
                content = fh.read()
        except FileNotFoundError as e:
            raise OpenError(path, "no such file") from e
        except IsADirectoryError as e:
            raise OpenError(path, "is a directory") from e
        except UnicodeDecodeError as e:
            raise OpenError(path, "not valid UTF-8 text") from e
        except OSError as e:
            raise OpenError(path, e.strerror or str(e)) from e

        rows = [Row(line) for line in _split_lines(content)]
        logger.info("Opened '%s' (%d lines).", path, len(rows))
        return cls(rows, file_name=path)

    def row(self, y: int) -> Optional[Row]:
        """Returns the row at index `y`, or None outside `[0, row_count)`."""
        if 0 <= y < len(self.rows):
            return self.rows[y]
        return None

    def length(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self._dirty

    def lines(self) -> list[str]:
        """Returns the text of every row."""
        return [row.text for row in self.rows]

    def insert(self, position: "Position", ch: str) -> None:
        """Inserts a character, or breaks the line when `ch` is a newline.

        On the virtual line after the last row (`position.y == row_count`)
        a new row is appended: empty for a line break, holding `ch`
        otherwise.

        Args:
            position (Position): Where to insert.
            ch (str): A single character.
        """
        y = position.y
        if y >= len(self.rows):
            self.rows.append(Row("" if ch == LINE_BREAK else ch))
        elif ch == LINE_BREAK:
            tail = self.rows[y].split(position.x)
            self.rows.insert(y + 1, tail)
        else:
            self.rows[y].insert(position.x, ch)
        self._dirty = True

    def delete(self, position: "Position") -> None:
        """Deletes the character at `position`.

        At the end of a row that has a successor, the successor is merged
        into the row instead. Positions on the virtual line, or at the end of
        the last row, leave the document untouched.
        """
        y = position.y
        row = self.row(y)
        if row is None:
            return
        if position.x >= len(row):
            if y + 1 >= len(self.rows):
                return
            row.append(self.rows.pop(y + 1))
        else:
            row.delete(position.x)
        self._dirty = True

    def save(self) -> None:
        """Writes all rows to the file identity.

        Raises:
            SaveError: If the document is untitled or the write fails.
        """
        if not self.file_name:
            raise SaveError(None, "no file name")
        content = LINE_BREAK.join(self.lines())
        if self.rows:
            content += LINE_BREAK
        try:
            with open(self.file_name, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as e:
            raise SaveError(self.file_name, e.strerror or str(e)) from e
        self._dirty = False
        logger.info("Saved '%s' (%d lines).", self.file_name, len(self.rows))

    def save_as(self, path: str) -> None:
        """Gives the document a new file identity and saves it there.

        The previous identity is kept when saving fails.

        Raises:
            SaveError: If `path` is empty or the write fails.
        """
        if not path:
            raise SaveError(None, "no file name")
        previous = self.file_name
        self.file_name = path
        try:
            self.save()
        except SaveError:
            self.file_name = previous
            raise
