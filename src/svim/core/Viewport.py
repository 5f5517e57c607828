# svim/core/Viewport.py
"""Cursor and viewport controller.

Two pure functions keep the logical cursor and the scroll offset in step:

- `move_cursor` maps (position, key, document, viewport size) to a new
  position, wrapping across line ends for Left/Right.
- `scroll` maps (cursor, old offset, viewport size) to the offset that keeps
  the cursor inside the visible window.

Neither function mutates its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from svim.core.Keys import Key, KeyKind


if TYPE_CHECKING:
    from svim.core.Document import Document


@dataclass(frozen=True)
class Position:
    """A buffer coordinate: column `x`, row `y`."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Size:
    """Character-cell dimensions of the text area."""

    width: int
    height: int


def _row_length(document: "Document", y: int) -> int:
    row = document.row(y)
    return len(row) if row is not None else 0


def move_cursor(position: Position, key: Key, document: "Document", size: Size) -> Position:
    """Returns the cursor position after a navigation key.

    `y` may reach `document.length()`, the virtual line used for appending.
    After the move `x` is clamped to the length of the (possibly new) row,
    so the cursor never dangles past the end of a shorter line. Keys that
    are not navigation keys leave the position unchanged.

    Args:
        position (Position): Current cursor.
        key (Key): The key pressed.
        document (Document): Buffer the cursor lives in.
        size (Size): Text area dimensions, used for paging.

    Returns:
        Position: The new cursor.
    """
    x, y = position.x, position.y
    row_count = document.length()
    kind = key.kind

    if kind is KeyKind.UP:
        y = max(y - 1, 0)
    elif kind is KeyKind.DOWN:
        y = min(y + 1, row_count)
    elif kind is KeyKind.LEFT:
        if x > 0:
            x -= 1
        elif y > 0:
            y -= 1
            x = _row_length(document, y)
    elif kind is KeyKind.RIGHT:
        if x < _row_length(document, y):
            x += 1
        elif y < row_count:
            y += 1
            x = 0
    elif kind is KeyKind.PAGE_UP:
        y = max(y - size.height, 0)
    elif kind is KeyKind.PAGE_DOWN:
        y = min(y + size.height, row_count)
    elif kind is KeyKind.HOME:
        x = 0
    elif kind is KeyKind.END:
        x = _row_length(document, y)
    else:
        return position

    x = min(x, _row_length(document, y))
    return Position(x, y)


def scroll(cursor: Position, offset: Position, size: Size) -> Position:
    """Returns the scroll offset that keeps `cursor` on screen.

    The offset only moves when the cursor has left the visible window, and
    then just far enough to bring it back to the nearest edge. An axis whose
    dimension is not positive is left alone.
    """
    off_x, off_y = offset.x, offset.y

    if size.height > 0:
        if cursor.y < off_y:
            off_y = cursor.y
        elif cursor.y >= off_y + size.height:
            off_y = cursor.y - size.height + 1

    if size.width > 0:
        if cursor.x < off_x:
            off_x = cursor.x
        elif cursor.x >= off_x + size.width:
            off_x = cursor.x - size.width + 1

    return Position(off_x, off_y)
