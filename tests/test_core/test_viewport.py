# tests/test_core/test_viewport.py
"""Unit tests for the cursor/viewport controller in `svim.core.Viewport`."""

import random

import pytest

from svim.core.Document import Document
from svim.core.Keys import Key, KeyKind
from svim.core.Row import Row
from svim.core.Viewport import Position, Size, move_cursor, scroll


SIZE = Size(width=10, height=3)


@pytest.fixture
def document() -> Document:
    return Document([Row("hello"), Row("hi"), Row(""), Row("a longer line"), Row("end")])


def move(document: Document, x: int, y: int, kind: KeyKind, size: Size = SIZE) -> Position:
    return move_cursor(Position(x, y), Key(kind), document, size)


@pytest.mark.parametrize(
    ("start", "kind", "expected"),
    [
        ((3, 1), KeyKind.UP, (3, 0)),
        ((3, 0), KeyKind.UP, (3, 0)),
        ((1, 0), KeyKind.DOWN, (1, 1)),
        ((0, 4), KeyKind.DOWN, (0, 5)),
        ((0, 5), KeyKind.DOWN, (0, 5)),
        ((2, 0), KeyKind.LEFT, (1, 0)),
        ((0, 0), KeyKind.LEFT, (0, 0)),
        ((1, 0), KeyKind.RIGHT, (2, 0)),
        ((0, 5), KeyKind.RIGHT, (0, 5)),
        ((4, 3), KeyKind.HOME, (0, 3)),
        ((0, 3), KeyKind.END, (13, 3)),
        ((0, 5), KeyKind.END, (0, 5)),
        ((0, 4), KeyKind.PAGE_UP, (0, 1)),
        ((0, 1), KeyKind.PAGE_UP, (0, 0)),
        ((0, 1), KeyKind.PAGE_DOWN, (0, 4)),
        ((0, 4), KeyKind.PAGE_DOWN, (0, 5)),
    ],
)
def test_movement_rules(document: Document, start, kind: KeyKind, expected) -> None:
    assert move(document, *start, kind) == Position(*expected)


def test_left_at_line_start_wraps_to_end_of_previous_line(document: Document) -> None:
    for y in range(1, document.length() + 1):
        previous = document.row(y - 1)
        assert move(document, 0, y, KeyKind.LEFT) == Position(len(previous), y - 1)


def test_right_at_line_end_wraps_to_start_of_next_line(document: Document) -> None:
    for y in range(document.length()):
        row = document.row(y)
        assert move(document, len(row), y, KeyKind.RIGHT) == Position(0, y + 1)


def test_vertical_moves_reclamp_column(document: Document) -> None:
    """Moving onto a shorter line pulls the column back to its end."""
    assert move(document, 5, 0, KeyKind.DOWN) == Position(2, 1)
    assert move(document, 10, 3, KeyKind.UP) == Position(0, 2)
    assert move(document, 10, 3, KeyKind.PAGE_DOWN) == Position(0, 5)


def test_non_navigation_keys_leave_position_alone(document: Document) -> None:
    start = Position(1, 1)
    for key in (Key.char("x"), Key.ctrl("q"), Key(KeyKind.ENTER), Key(KeyKind.ESCAPE)):
        assert move_cursor(start, key, document, SIZE) is start


def test_empty_document_only_has_the_virtual_line() -> None:
    empty = Document.default()
    for kind in (KeyKind.UP, KeyKind.DOWN, KeyKind.LEFT, KeyKind.RIGHT, KeyKind.END):
        assert move(empty, 0, 0, kind) == Position(0, 0)


def test_move_cursor_does_not_mutate_inputs(document: Document) -> None:
    before = document.lines()
    move(document, 0, 0, KeyKind.PAGE_DOWN)
    assert document.lines() == before


# --- Scroll ---
@pytest.mark.parametrize(
    ("cursor", "offset", "expected"),
    [
        ((0, 0), (0, 0), (0, 0)),
        ((0, 2), (0, 0), (0, 0)),
        ((0, 3), (0, 0), (0, 1)),
        ((0, 10), (0, 0), (0, 8)),
        ((0, 4), (0, 6), (0, 4)),
        ((9, 0), (0, 0), (0, 0)),
        ((10, 0), (0, 0), (1, 0)),
        ((25, 0), (0, 0), (16, 0)),
        ((3, 0), (5, 0), (3, 0)),
    ],
)
def test_scroll_rules(cursor, offset, expected) -> None:
    assert scroll(Position(*cursor), Position(*offset), SIZE) == Position(*expected)


def test_scroll_ignores_axes_with_no_room() -> None:
    offset = Position(4, 4)
    assert scroll(Position(0, 0), offset, Size(0, 0)) == offset
    assert scroll(Position(0, 0), offset, Size(5, 0)) == Position(0, 4)


def test_scroll_keeps_cursor_visible_after_random_walk() -> None:
    rng = random.Random(1234)
    document = Document([Row("x" * rng.randint(0, 40)) for _ in range(60)])
    size = Size(width=7, height=4)
    kinds = [
        KeyKind.UP, KeyKind.DOWN, KeyKind.LEFT, KeyKind.RIGHT,
        KeyKind.PAGE_UP, KeyKind.PAGE_DOWN, KeyKind.HOME, KeyKind.END,
    ]
    cursor = Position()
    offset = Position()

    for _ in range(2000):
        cursor = move_cursor(cursor, Key(rng.choice(kinds)), document, size)
        offset = scroll(cursor, offset, size)

        row = document.row(cursor.y)
        assert 0 <= cursor.y <= document.length()
        assert 0 <= cursor.x <= (len(row) if row is not None else 0)
        assert offset.y <= cursor.y < offset.y + size.height
        assert offset.x <= cursor.x < offset.x + size.width
