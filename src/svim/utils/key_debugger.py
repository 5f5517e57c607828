# svim/utils/key_debugger.py
"""Raw key inspector.

Shows what the terminal sends for each key press and how svim decodes it:
the raw value, its binary and hex forms, the decoded key and the action
bound to it. Useful when a terminal emits sequences the editor does not
understand. Press Ctrl-Q to quit.
"""

import curses
from typing import Any

from svim.core.Keys import Key
from svim.ui.KeyBinder import KeyBinder
from svim.ui.TerminalAppMode import TerminalAppMode
from svim.utils.utils import load_config

KEY_NAMES = {
    code: name
    for name, code in vars(curses).items()
    if name.startswith("KEY_") and isinstance(code, int)
}


def to_ctrl_byte(c: str) -> int:
    """Byte a terminal sends for Ctrl plus the letter `c`."""
    return ord(c) & 0b0001_1111


def describe_input(raw: Any, key: Key, keybinder: KeyBinder) -> list[str]:
    """Lines describing one raw `get_wch()` value and its decoded key."""
    lines = [f"{'Value (raw):':<16} {raw!r}"]
    code = ord(raw) if isinstance(raw, str) and len(raw) == 1 else raw
    if isinstance(code, int):
        lines.append(f"{'Binary:':<16} {code:#b}")
        lines.append(f"{'Hex:':<16} {code:#x}")
        if not isinstance(raw, str):
            lines.append(f"{'curses.KEY_*:':<16} {KEY_NAMES.get(code, 'N/A')}")
    lines.append(f"{'Decoded key:':<16} {key}")
    lines.append(f"{'Action:':<16} {keybinder.action_for(key) or '-'}")
    return lines


def main(stdscr: Any) -> None:
    keybinder = KeyBinder(load_config())
    quit_char = chr(to_ctrl_byte("q"))
    last_info: list[str] = []

    with TerminalAppMode(stdscr):
        while True:
            stdscr.erase()
            height, width = stdscr.getmaxyx()
            title = "svim key debugger -- press Ctrl-Q to quit"
            stdscr.addstr(1, max((width - len(title)) // 2, 0), title[:width], curses.A_BOLD)
            for i, line in enumerate(last_info):
                if 3 + i < height:
                    stdscr.addstr(3 + i, 2, line[: max(width - 3, 0)])
            stdscr.refresh()

            raw = stdscr.get_wch()
            if raw == quit_char:
                break
            if raw == curses.KEY_RESIZE:
                continue
            last_info = describe_input(raw, keybinder.decode(raw), keybinder)


def run() -> None:
    curses.wrapper(main)
    print("Debugger finished.")


if __name__ == "__main__":
    run()
