# svim/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class translates raw terminal input into `svim.core.Keys.Key`
events and maps keys to editor actions according to the `[keybindings]`
section of the configuration.

Key Features:
- Reads one key with `get_wch()`, so multi-byte UTF-8 input arrives as a
  single character.
- Resolves curses key codes (arrows, paging, Home/End, Backspace, Delete).
- Parses ESC-prefixed CSI/SS3 sequences that curses did not decode itself.
- Loads action bindings such as ``save_file = "ctrl+s"`` with user overrides.

Main Methods:
1. get_key_input: Reads and decodes a single key from a curses window.
2. decode: Classifies a raw `get_wch()` result.
3. action_for / lookup: Find the action bound to a key or key string.
4. describe: Human-readable name of an action's first binding ("Ctrl-S").
"""

from __future__ import annotations

import curses
import logging
import re
from typing import Any, Optional

from svim.core.Keys import Key, KeyKind


DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "save_file": ["ctrl+s"],
    "quit": ["ctrl+q"],
}


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Decodes terminal input and resolves action bindings.

    Attributes:
        config (dict[str, Any]): Application configuration.
        keybindings (dict[str, list[str]]): Action name to key strings.
        action_map (dict[Key, str]): Decoded key to action name.
    """
    # Escape sequences without the leading ESC, which get_key_input()
    # has already consumed.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        # Arrows (CSI and SS3)
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",

        # Home/End (CSI/SS3 and tilde variants used by rxvt and the Linux console)
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",

        # Delete/PageUp/PageDown
        "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",
    }

    NAMED_KEYS: dict[str, KeyKind] = {
        "up": KeyKind.UP,
        "down": KeyKind.DOWN,
        "left": KeyKind.LEFT,
        "right": KeyKind.RIGHT,
        "pageup": KeyKind.PAGE_UP,
        "pgup": KeyKind.PAGE_UP,
        "pagedown": KeyKind.PAGE_DOWN,
        "pgdn": KeyKind.PAGE_DOWN,
        "home": KeyKind.HOME,
        "end": KeyKind.END,
        "backspace": KeyKind.BACKSPACE,
        "delete": KeyKind.DELETE,
        "del": KeyKind.DELETE,
        "enter": KeyKind.ENTER,
        "return": KeyKind.ENTER,
        "esc": KeyKind.ESCAPE,
        "escape": KeyKind.ESCAPE,
    }

    CURSES_KEYS: dict[int, KeyKind] = {
        curses.KEY_UP: KeyKind.UP,
        curses.KEY_DOWN: KeyKind.DOWN,
        curses.KEY_LEFT: KeyKind.LEFT,
        curses.KEY_RIGHT: KeyKind.RIGHT,
        curses.KEY_PPAGE: KeyKind.PAGE_UP,
        curses.KEY_NPAGE: KeyKind.PAGE_DOWN,
        curses.KEY_HOME: KeyKind.HOME,
        curses.KEY_END: KeyKind.END,
        curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
        curses.KEY_DC: KeyKind.DELETE,
        curses.KEY_ENTER: KeyKind.ENTER,
    }

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()
        logging.debug("KeyBinder initialized with %d bindings.", len(self.action_map))

    def _load_keybindings(self) -> dict[str, list[str]]:
        """Returns the bindings per action, user configuration first.

        Each configured value may be a single key string or a list of them.
        """
        user_bindings = self.config.get("keybindings", {})
        bindings: dict[str, list[str]] = {}
        for action, defaults in DEFAULT_KEYBINDINGS.items():
            value = user_bindings.get(action, defaults)
            if isinstance(value, str):
                value = [value]
            bindings[action] = [str(v) for v in value]
        return bindings

    def _decode_keystring(self, key_input: str) -> Key:
        """Decodes a key specification such as "ctrl+s", "pagedown" or "x".

        Args:
            key_input (str): The key string from the configuration.

        Returns:
            Key: The corresponding key event.

        Raises:
            ValueError: If the string is empty or uses an unknown key or
                modifier.
        """
        if not isinstance(key_input, str):
            raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str.")

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        if s in self.NAMED_KEYS:
            return Key(self.NAMED_KEYS[s])

        parts = s.split("+")
        base_key = parts[-1]
        modifiers = {p.strip() for p in parts[:-1]}

        if not modifiers and len(base_key) == 1:
            return Key.char(key_input.strip())

        if modifiers == {"ctrl"} and len(base_key) == 1 and "a" <= base_key <= "z":
            return Key.ctrl(base_key)

        raise ValueError(f"Unknown key or modifiers in '{key_input}'")

    def _setup_action_map(self) -> dict[Key, str]:
        action_map: dict[Key, str] = {}
        for action, key_strings in self.keybindings.items():
            for key_string in key_strings:
                try:
                    key = self._decode_keystring(key_string)
                except ValueError as e:
                    logging.warning("Skipping keybinding %r for '%s': %s", key_string, action, e)
                    continue
                if key in action_map and action_map[key] != action:
                    logging.warning(
                        "Key %s bound to both '%s' and '%s'; keeping '%s'.",
                        key, action_map[key], action, action,
                    )
                action_map[key] = action
        logging.debug("Final constructed action map: %s", {str(k): v for k, v in action_map.items()})
        return action_map

    def action_for(self, key: Key) -> Optional[str]:
        return self.action_map.get(key)

    def lookup(self, key_spec: str) -> Optional[str]:
        """Finds the action bound to a key string, e.g. "ctrl+s" -> "save_file"."""
        try:
            key = self._decode_keystring(key_spec)
        except ValueError:
            return None
        return self.action_map.get(key)

    def describe(self, action: str) -> str:
        """Display name of the first key bound to `action`, e.g. "Ctrl-Q"."""
        for key, bound_action in self.action_map.items():
            if bound_action == action:
                return str(key) if key.kind is not KeyKind.CHAR else key.value
        return "<unbound>"

    def decode(self, raw: str | int) -> Key:
        """Classifies one value returned by `get_wch()`.

        Args:
            raw (str | int): A character, or a curses key code.

        Returns:
            Key: The decoded key; unknown input yields KeyKind.UNKNOWN.
        """
        if isinstance(raw, int):
            if raw == curses.KEY_RESIZE:
                return Key(KeyKind.UNKNOWN, "resize")
            kind = self.CURSES_KEYS.get(raw)
            if kind is not None:
                return Key(kind)
            return Key(KeyKind.UNKNOWN, str(raw))

        if len(raw) != 1:
            return Key(KeyKind.UNKNOWN, repr(raw))

        code = ord(raw)
        if code == 27:
            return Key(KeyKind.ESCAPE)
        if raw in ("\r", "\n"):
            return Key(KeyKind.ENTER)
        if code in (8, 127):
            return Key(KeyKind.BACKSPACE)
        if raw == "\t":
            return Key.char(raw)
        if 1 <= code <= 26:
            return Key.ctrl(chr(code + ord("a") - 1))
        if raw.isprintable():
            return Key.char(raw)
        return Key(KeyKind.UNKNOWN, f"{code:#x}")

    def _decode_escape_sequence(self, seq: str) -> Key:
        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            # Drop anything that is not part of a CSI/SS3 sequence and retry.
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
        if mapped:
            logging.debug("get_key_input: ESC %r -> %r", seq, mapped)
            return Key(self.NAMED_KEYS[mapped])
        logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return Key(KeyKind.UNKNOWN, f"ESC {seq!r}")

    def get_key_input(self, window: Any) -> Key:
        """Reads one key or ESC sequence from `window`, blocking.

        A lone ESC is returned as KeyKind.ESCAPE; ESC followed by pending
        input is decoded through `ESCAPE_SEQUENCE_MAP`.

        Raises:
            curses.error: If the blocking read fails.
        """
        raw = window.get_wch()
        if raw != "\x1b":
            return self.decode(raw)

        seq = ""
        window.nodelay(True)
        try:
            while True:
                try:
                    nx = window.get_wch()
                except curses.error:
                    break
                seq += nx if isinstance(nx, str) else f"<{nx}>"
        finally:
            window.nodelay(False)

        if not seq:
            return Key(KeyKind.ESCAPE)
        if seq[0] == "\x1b":
            seq = seq[1:]
        return self._decode_escape_sequence(seq)
