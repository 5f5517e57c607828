# svim/core/Keys.py
"""Terminal-independent key events.

`svim.ui.KeyBinder` turns curses input into these values; the editor core
only ever sees `Key` objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyKind(Enum):
    CHAR = "char"
    CTRL = "ctrl"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    HOME = "home"
    END = "end"
    BACKSPACE = "backspace"
    DELETE = "delete"
    ENTER = "enter"
    ESCAPE = "escape"
    UNKNOWN = "unknown"


NAVIGATION_KINDS = frozenset(
    {
        KeyKind.UP,
        KeyKind.DOWN,
        KeyKind.LEFT,
        KeyKind.RIGHT,
        KeyKind.PAGE_UP,
        KeyKind.PAGE_DOWN,
        KeyKind.HOME,
        KeyKind.END,
    }
)


@dataclass(frozen=True)
class Key:
    """A decoded key press.

    Attributes:
        kind (KeyKind): Category of the key.
        value (str): The character for CHAR, the lower-case letter for CTRL
            (``Key(KeyKind.CTRL, "q")`` is Ctrl-Q), a free-form description
            for UNKNOWN, empty otherwise.
    """

    kind: KeyKind
    value: str = ""

    @classmethod
    def char(cls, ch: str) -> "Key":
        return cls(KeyKind.CHAR, ch)

    @classmethod
    def ctrl(cls, letter: str) -> "Key":
        return cls(KeyKind.CTRL, letter.lower())

    def __str__(self) -> str:
        if self.kind is KeyKind.CHAR:
            return repr(self.value)
        if self.kind is KeyKind.CTRL:
            return f"Ctrl-{self.value.upper()}"
        if self.kind is KeyKind.UNKNOWN:
            return f"unknown({self.value})"
        return self.kind.value
