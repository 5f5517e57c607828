# svim/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from types import TracebackType
from typing import Any, Optional


class TerminalAppMode:
    """
    Scoped raw mode for the editor:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - raw + noecho (cbreak fallback) so Ctrl-Q/Ctrl-S reach the editor
      instead of driving terminal flow control.
    - keypad(True) so arrows and paging keys arrive as curses key codes.

    Use as a context manager; the previous modes are restored on every exit
    path, including exceptions.
    """

    def __init__(self, stdscr: Any) -> None:
        self._entered: bool = False
        self._stdscr = stdscr

    def __enter__(self) -> "TerminalAppMode":
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.exit()

    @property
    def active(self) -> bool:
        return self._entered

    def enter(self) -> None:
        stdscr = self._stdscr
        self._tputs("smcup")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()

        stdscr.keypad(True)
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass

        stdscr.scrollok(False)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered raw mode.")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            self._stdscr.keypad(False)
        except curses.error:
            pass
        try:
            curses.noraw()
        except curses.error:
            try:
                curses.nocbreak()
            except curses.error:
                pass
        try:
            curses.echo()
        except curses.error:
            pass

        self._tputs("rmcup")
        self._entered = False
        logging.debug("TerminalAppMode: restored terminal modes.")

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Non-fatal where the capability is missing (Linux console, etc.).
            logging.debug("tputs(%s) skipped: %r", capname, e)
