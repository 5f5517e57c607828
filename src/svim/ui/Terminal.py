# svim/ui/Terminal.py
"""Terminal.py
==================
The terminal collaborator used by the editor core: screen size, clearing,
cursor placement and visibility, status-line colours, flushing and the
blocking key read. Everything goes through one curses window.

A failing key read is the only unrecoverable condition in the editor; it
surfaces as `FatalIOError` so the entry point can restore the terminal and
exit with a diagnostic.
"""

from __future__ import annotations

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from svim.core.Keys import Key
from svim.core.Viewport import Position, Size
from svim.utils.utils import hex_to_xterm


if TYPE_CHECKING:
    from svim.ui.KeyBinder import KeyBinder


STATUS_PAIR = 1


class FatalIOError(Exception):
    """The terminal could not deliver input."""


## ================= class Terminal ==============================
class Terminal:
    """Class Terminal
    =========================
    Thin wrapper around a curses window.

    Attributes:
        stdscr (curses.window): The window everything is drawn to.
        keybinder (KeyBinder): Decodes raw input into `Key` events.
        status_attr (int): Curses attribute for the status bar.
    """

    def __init__(self, stdscr: Any, keybinder: "KeyBinder", config: Optional[dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.keybinder = keybinder
        self.config = config or {}
        self.status_attr = curses.A_REVERSE
        self._init_status_colors()

    def _init_status_colors(self) -> None:
        """Creates the status bar colour pair.

        - 256-colour terminals: configured hex colours mapped to xterm indices.
        - anything else: reverse video.
        """
        colors = self.config.get("colors", {})
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            if getattr(curses, "COLORS", 0) < 256:
                return
            fg_idx = hex_to_xterm(colors.get("status_fg", "#3f3f3f"))
            bg_idx = hex_to_xterm(colors.get("status_bg", "#efefef"))
            curses.init_pair(STATUS_PAIR, fg_idx, bg_idx)
            self.status_attr = curses.color_pair(STATUS_PAIR)
        except curses.error as exc:
            logging.warning("init_pair failed (%s), status bar falls back to A_REVERSE", exc)
            self.status_attr = curses.A_REVERSE

    def size(self) -> Size:
        height, width = self.stdscr.getmaxyx()
        return Size(width, height)

    def clear_screen(self) -> None:
        self.stdscr.erase()

    def clear_current_line(self, y: int) -> None:
        try:
            self.stdscr.move(y, 0)
            self.stdscr.clrtoeol()
        except curses.error:
            pass

    def write(self, y: int, x: int, text: str, attr: int = 0) -> None:
        """Draws `text` at screen cell `(x, y)`.

        Writing the bottom-right cell makes curses raise after the text has
        been drawn, so that error is ignored.
        """
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def cursor_position(self, position: Position) -> None:
        """Moves the hardware cursor to the 0-based screen cell `position`."""
        try:
            self.stdscr.move(position.y, position.x)
        except curses.error as e:
            logging.warning("Curses error positioning cursor at (%d, %d): %s", position.y, position.x, e)

    def cursor_show(self) -> None:
        self._set_cursor_visibility(1)

    def cursor_hide(self) -> None:
        self._set_cursor_visibility(0)

    def _set_cursor_visibility(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            # Not every terminal can change cursor visibility.
            pass

    def flush(self) -> None:
        self.stdscr.refresh()

    def read_key(self) -> Key:
        """Blocks until the next key press and returns it decoded.

        Raises:
            FatalIOError: If the terminal read fails.
        """
        try:
            return self.keybinder.get_key_input(self.stdscr)
        except (curses.error, OSError) as e:
            logging.critical("Reading from the terminal failed: %s", e)
            raise FatalIOError(f"could not read key: {e}") from e
