# svim/core/Editor.py
"""Editor Module for the svim editor
===================================
This module provides the `Editor` class, the interaction state machine that
sits between the terminal and the buffer. Every key press read from the
terminal is dispatched according to the current `EditorMode`:

- NORMAL: navigation keys move the cursor, printable keys and Enter insert,
  Backspace/Delete remove, and the bound actions (save, quit) run.
- PROMPTING: keys edit the one-line prompt shown in the message bar until
  Enter submits it or Escape cancels it.
- QUIT_CONFIRM: the quit key was pressed with unsaved changes; further quit
  presses count down, any other key cancels the countdown.
- QUITTING: terminal state; the main loop stops.

After each key the scroll offset is recomputed and the screen repainted by
`svim.ui.DrawScreen`.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from svim.core.Document import Document, OpenError, SaveError
from svim.core.Keys import NAVIGATION_KINDS, Key, KeyKind
from svim.core.Viewport import Position, Size, move_cursor, scroll
from svim.ui.DrawScreen import DrawScreen
from svim.utils.logging_config import KEY_LOGGER
from svim.utils.utils import get_string_width


if TYPE_CHECKING:
    from svim.ui.Terminal import Terminal


logger = logging.getLogger("svim")

SAVE_AS_TIP = "Save as: "
DEFAULT_QUIT_TIMES = 3


class EditorMode(Enum):
    NORMAL = "normal"
    PROMPTING = "prompting"
    QUIT_CONFIRM = "quit_confirm"
    QUITTING = "quitting"


class StatusMessage:
    """A message for the message bar, stamped with its creation time."""

    def __init__(self, text: str, created: Optional[float] = None) -> None:
        self.text = text
        self.created = time.monotonic() if created is None else created

    def is_expired(self, timeout: float, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.monotonic()
        return now - self.created >= timeout


class Prompt:
    """Free-text input collected in the message bar.

    Attributes:
        tip (str): Text shown before the input, e.g. "Save as: ".
        buffer (str): Characters typed so far.
        on_done (Callable): Receives the submitted text, or None when the
            prompt was cancelled.
    """

    def __init__(self, tip: str, on_done: Callable[[Optional[str]], None]) -> None:
        self.tip = tip
        self.buffer = ""
        self.on_done = on_done


## ==================== Editor Class ====================
class Editor:
    """Class Editor
    ===================
    Owns the document, the cursor and the scroll offset, and turns key
    events into cursor moves and document mutations.

    Attributes:
        terminal (Terminal): Screen and keyboard collaborator.
        config (dict[str, Any]): Application configuration.
        keybinder (KeyBinder): Key decoding and action bindings, shared with
            the terminal.
        document (Document): The buffer being edited.
        cursor (Position): Logical cursor in buffer coordinates.
        offset (Position): Buffer coordinate shown at the top-left text cell.
        mode (EditorMode): Current state of the interaction state machine.
        quit_times (int): Quit presses needed to leave with unsaved changes.
        quit_remaining (int): Presses still needed in the current countdown.
        status_message (StatusMessage): Last message for the message bar.
        prompt (Optional[Prompt]): Active prompt while PROMPTING.
        drawer (DrawScreen): Renderer.
    """

    def __init__(
        self,
        terminal: "Terminal",
        config: dict[str, Any],
        document: Optional[Document] = None,
    ) -> None:
        self.terminal = terminal
        self.config = config
        self.keybinder = terminal.keybinder
        self.document = document if document is not None else Document.default()
        self.cursor = Position()
        self.offset = Position()
        self.mode = EditorMode.NORMAL

        editor_config = config.get("editor", {})
        try:
            self.quit_times = max(1, int(editor_config.get("quit_times", DEFAULT_QUIT_TIMES)))
        except (TypeError, ValueError):
            logger.warning(
                "Invalid editor.quit_times %r, using %d.",
                editor_config.get("quit_times"), DEFAULT_QUIT_TIMES,
            )
            self.quit_times = DEFAULT_QUIT_TIMES
        self.quit_remaining = self.quit_times
        self.prompt: Optional[Prompt] = None
        self.status_message = StatusMessage(self.help_text())

        self.action_map = self._setup_action_map()
        self.drawer = DrawScreen(self, config)
        logger.debug("Editor initialized (quit_times=%d).", self.quit_times)

    def _setup_action_map(self) -> dict[str, Callable[[], None]]:
        return {
            "save_file": self.save_file,
            "quit": self.exit_editor,
        }

    # --- Status message ---
    def help_text(self) -> str:
        return (
            f"HELP: {self.keybinder.describe('save_file')} = save | "
            f"{self.keybinder.describe('quit')} = quit"
        )

    def _set_status_message(self, text: str) -> None:
        self.status_message = StatusMessage(text)
        logger.debug("Status message set to: '%s'", text)

    # --- Document lifecycle ---
    def open_document(self, path: str) -> bool:
        """Loads `path` into the editor.

        A file that cannot be opened is not fatal: the editor keeps an empty
        untitled document and reports the failure in the message bar.

        Args:
            path (str): File to open.

        Returns:
            bool: True if the file was loaded.
        """
        self.cursor = Position()
        self.offset = Position()
        try:
            self.document = Document.open(path)
            return True
        except OpenError as e:
            logger.warning("Could not open '%s': %s", path, e.reason)
            self.document = Document.default()
            self._set_status_message(f"Err: Could not open file: {path}")
            return False

    def save_file(self) -> None:
        """Saves to the current file name, or asks for one first."""
        if not self.document.file_name:
            logger.debug("save_file: no file name, prompting for one.")
            self.start_prompt(SAVE_AS_TIP, self._finish_save_as)
            return
        try:
            self.document.save()
        except SaveError as e:
            logger.error("Failed to save '%s': %s", e.path, e.reason)
            self._set_status_message(f"Error writing file: {e.reason}")
            return
        self._set_status_message("File saved successfully.")

    def _finish_save_as(self, file_name: Optional[str]) -> None:
        if file_name is None:
            self._set_status_message("Save aborted.")
            return
        try:
            self.document.save_as(file_name)
        except SaveError as e:
            logger.error("Failed to save as '%s': %s", file_name, e.reason)
            self._set_status_message(f"Error writing file: {e.reason}")
            return
        self._set_status_message("File saved successfully.")

    # --- Quit protocol ---
    def exit_editor(self) -> None:
        """Quits, or counts down the confirmations needed to drop changes."""
        if not self.document.is_dirty():
            self.mode = EditorMode.QUITTING
            return

        self.quit_remaining -= 1
        if self.quit_remaining <= 0:
            logger.warning("Quitting with unsaved changes.")
            self.mode = EditorMode.QUITTING
            return

        self.mode = EditorMode.QUIT_CONFIRM
        self._set_status_message(
            "WARNING! File has unsaved changes. "
            f"Press {self.keybinder.describe('quit')} {self.quit_remaining} more times to quit."
        )

    def _reset_quit_confirmation(self) -> None:
        self.quit_remaining = self.quit_times
        self.mode = EditorMode.NORMAL

    @property
    def should_quit(self) -> bool:
        return self.mode is EditorMode.QUITTING

    # --- Prompt ---
    def start_prompt(self, tip: str, on_done: Callable[[Optional[str]], None]) -> None:
        self.prompt = Prompt(tip, on_done)
        self.mode = EditorMode.PROMPTING

    def _process_prompt_key(self, key: Key) -> None:
        prompt = self.prompt
        if prompt is None:
            self.mode = EditorMode.NORMAL
            return

        kind = key.kind
        if kind is KeyKind.ENTER:
            self._finish_prompt(prompt.buffer)
        elif kind is KeyKind.ESCAPE:
            prompt.buffer = ""
            self._finish_prompt(None)
        elif kind is KeyKind.BACKSPACE:
            prompt.buffer = prompt.buffer[:-1]
        elif kind is KeyKind.CHAR and key.value.isprintable():
            prompt.buffer += key.value

    def _finish_prompt(self, result: Optional[str]) -> None:
        prompt = self.prompt
        self.prompt = None
        self.mode = EditorMode.NORMAL
        if prompt is not None:
            prompt.on_done(result)

    # --- Cursor and editing ---
    def viewport_size(self) -> Size:
        """Text area size: the whole terminal minus status and message bars."""
        size = self.terminal.size()
        return Size(size.width, max(size.height - 2, 0))

    def move_cursor(self, key: Key) -> None:
        self.cursor = move_cursor(self.cursor, key, self.document, self.viewport_size())

    def _scroll(self) -> None:
        size = self.viewport_size()
        offset = scroll(self.cursor, self.offset, size)
        self.offset = self._fit_offset_to_cells(offset, size.width)

    def _fit_offset_to_cells(self, offset: Position, width: int) -> Position:
        """Advances `offset.x` until the cursor fits in `width` screen cells.

        `scroll` counts characters; wide glyphs take two cells, so the text
        between the offset and the cursor can still overflow the screen.
        """
        row = self.document.row(self.cursor.y)
        if row is None or width <= 0:
            return offset
        x = offset.x
        while x < self.cursor.x and get_string_width(
            row.render(x, self.cursor.x).replace("\t", " ")
        ) >= width:
            x += 1
        return offset if x == offset.x else Position(x, offset.y)

    def insert_char(self, ch: str) -> None:
        self.document.insert(self.cursor, ch)
        self.move_cursor(Key(KeyKind.RIGHT))

    def handle_backspace(self) -> None:
        if self.cursor == Position(0, 0):
            return
        self.move_cursor(Key(KeyKind.LEFT))
        self.document.delete(self.cursor)

    def handle_delete(self) -> None:
        self.document.delete(self.cursor)

    def _process_edit_key(self, key: Key) -> None:
        kind = key.kind
        if kind in NAVIGATION_KINDS:
            self.move_cursor(key)
        elif kind is KeyKind.CHAR:
            self.insert_char(key.value)
        elif kind is KeyKind.ENTER:
            self.insert_char("\n")
        elif kind is KeyKind.BACKSPACE:
            self.handle_backspace()
        elif kind is KeyKind.DELETE:
            self.handle_delete()
        else:
            logger.debug("Ignored key %s in %s mode.", key, self.mode.name)

    def process_keypress(self, key: Key) -> None:
        """Applies one key event to the editor state.

        Args:
            key (Key): The decoded key press.
        """
        KEY_LOGGER.debug("mode=%s key=%s", self.mode.name, key)
        if self.mode is EditorMode.QUITTING:
            return

        if self.mode is EditorMode.PROMPTING:
            self._process_prompt_key(key)
        else:
            action = self.keybinder.action_for(key)
            if self.mode is EditorMode.QUIT_CONFIRM and action != "quit":
                self._reset_quit_confirmation()
            handler = self.action_map.get(action) if action else None
            if handler is not None:
                handler()
            else:
                self._process_edit_key(key)

        self._scroll()

    # --- Main loop ---
    def refresh_screen(self) -> None:
        self.drawer.draw()

    def run(self) -> None:
        """The main event loop.

        Repaints, then blocks on the next key, until the editor reaches the
        QUITTING state. A `FatalIOError` raised by the key read is not
        handled here; it propagates to the entry point, which restores the
        terminal and exits.
        """
        logger.info("Editor main loop started.")
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            key = self.terminal.read_key()
            self.process_keypress(key)
        logger.info("Editor main loop finished.")
