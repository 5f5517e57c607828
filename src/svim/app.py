# svim/app.py
"""
svim Entry Point
================

Starts the editor:
1) Environment Loading: reads ~/.config/svim/.env (e.g. SVIM_KEYTRACE).
2) Configuration & Logging: loads config and initializes logging.
3) Curses Wrapper: initializes curses and enters scoped raw mode, both of
   which are undone on every exit path.
4) Application Run: opens the file named on the command line, if any, and
   runs the editor loop until the user quits.
"""

from __future__ import annotations

import curses
import locale
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv

from svim.core.Editor import Editor
from svim.ui.KeyBinder import KeyBinder
from svim.ui.Terminal import FatalIOError, Terminal
from svim.ui.TerminalAppMode import TerminalAppMode
from svim.utils.logging_config import setup_logging
from svim.utils.utils import get_config_dir, load_config


logger = logging.getLogger("svim")

EXIT_NOTICE = "Exit."


def main_app_runner(stdscr: Any, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`. Runs the editor inside scoped raw mode.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path.
    """
    with TerminalAppMode(stdscr):
        terminal = Terminal(stdscr, KeyBinder(config), config)
        editor = Editor(terminal, config)
        if file_to_open:
            editor.open_document(file_to_open)
        editor.run()


def start(argv: Optional[list[str]] = None) -> None:
    """
    Loads configuration, runs the curses application and exits the process.

    Exit status is 0 after a normal quit and 1 when the terminal failed or an
    unexpected error escaped the editor; in both cases the terminal has been
    restored before anything is printed.
    """
    if argv is None:
        argv = sys.argv

    load_dotenv(dotenv_path=get_config_dir() / ".env")
    config = load_config()
    setup_logging(config)
    logger.info("svim editor starting up...")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = argv[1] if len(argv) > 1 and argv[1].strip() else None

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
    except FatalIOError as e:
        logger.critical("Terminal input failed: %s", e, exc_info=True)
        print(f"svim: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        print(f"svim: unexpected error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("svim editor shut down gracefully.")
    if sys.stdout.isatty():
        print("\033c", end="")
    print(EXIT_NOTICE)
    sys.exit(0)


if __name__ == "__main__":
    start()
