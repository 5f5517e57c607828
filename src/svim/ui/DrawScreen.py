# svim/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders the editor state onto the terminal. Every call to
`draw()` repaints the whole screen:

- the text area: one buffer row per screen line, shifted by the scroll
  offset, with ``~`` on lines past the end of the buffer and a centred
  welcome banner when the buffer is empty,
- the status bar: file name, line count, modified flag and the current line,
- the message bar: the active prompt, or the last status message while it
  is still fresh,
- the hardware cursor.

Columns in the buffer are characters; on screen they are cells. Wide
glyphs are measured with wcwidth, and a Tab is drawn as a single space.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from svim import __version__
from svim.core.Viewport import Position
from svim.utils.utils import get_string_width, truncate_string


if TYPE_CHECKING:
    from svim.core.Editor import Editor
    from svim.core.Row import Row


logger = logging.getLogger("svim")

FILE_NAME_LIMIT = 20
DEFAULT_STATUS_MESSAGE_TIMEOUT = 5.0


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Paints the editor through its terminal collaborator.

    Attributes:
        editor (Editor): The editor whose state is drawn.
        config (dict[str, Any]): Application configuration.
        terminal (Terminal): Output target.
        status_message_timeout (float): Seconds a status message stays visible.
    """

    def __init__(self, editor: "Editor", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.terminal = editor.terminal
        timeout = config.get("editor", {}).get("status_message_timeout", DEFAULT_STATUS_MESSAGE_TIMEOUT)
        try:
            self.status_message_timeout = float(timeout)
        except (TypeError, ValueError):
            logger.warning(
                "Invalid editor.status_message_timeout %r, using %s.",
                timeout, DEFAULT_STATUS_MESSAGE_TIMEOUT,
            )
            self.status_message_timeout = DEFAULT_STATUS_MESSAGE_TIMEOUT

    def draw(self) -> None:
        """Repaints the screen from the current editor state."""
        terminal = self.terminal
        terminal.cursor_hide()
        terminal.clear_screen()
        if self.editor.should_quit:
            terminal.flush()
            return

        self._draw_rows()
        self._draw_status_bar()
        self._draw_message_bar()
        self._position_cursor()
        terminal.cursor_show()
        terminal.flush()

    # --- Text area ---
    def render_row(self, row: "Row", width: int) -> str:
        """The part of `row` visible through the horizontal scroll offset."""
        start = self.editor.offset.x
        text = row.render(start, start + width).replace("\t", " ")
        return truncate_string(text, width)

    def welcome_message(self, width: int) -> str:
        message = f"svim editor -- version {__version__}"
        padding = max(width - len(message), 0) // 2
        line = "~" + " " * max(padding - 1, 0) + message
        return line[:width]

    def _draw_rows(self) -> None:
        editor = self.editor
        document = editor.document
        size = editor.viewport_size()
        for screen_y in range(size.height):
            self.terminal.clear_current_line(screen_y)
            row = document.row(screen_y + editor.offset.y)
            if row is not None:
                self.terminal.write(screen_y, 0, self.render_row(row, size.width))
            elif document.is_empty() and screen_y == size.height // 3:
                self.terminal.write(screen_y, 0, self.welcome_message(size.width))
            else:
                self.terminal.write(screen_y, 0, "~")

    # --- Bars ---
    def status_line(self, width: int) -> str:
        """Status bar text padded or clipped to exactly `width` cells.

        Left: ``<name> - <N> lines`` plus ``(modified)``; right: ``<line>/<N>``.
        """
        document = self.editor.document
        file_name = (document.file_name or "[NoName]")[:FILE_NAME_LIMIT]
        modified = " (modified)" if document.is_dirty() else ""
        left = f"{file_name} - {document.length()} lines{modified}"
        right = f"{self.editor.cursor.y + 1}/{document.length()}"

        gap = width - get_string_width(left) - get_string_width(right)
        line = left + " " * gap + right if gap > 0 else left
        line = truncate_string(line, width)
        return line + " " * max(width - get_string_width(line), 0)

    def message_line(self, width: int, now: Optional[float] = None) -> str:
        """Message bar text: the prompt while prompting, else a fresh status message."""
        editor = self.editor
        if editor.prompt is not None:
            return self.prompt_line(width)
        message = editor.status_message
        if message.is_expired(self.status_message_timeout, now):
            return ""
        return truncate_string(message.text, width)

    def prompt_line(self, width: int) -> str:
        """Prompt tip plus as much of the end of the input as fits.

        One cell is kept free after the input for the cursor.
        """
        prompt = self.editor.prompt
        tip = truncate_string(prompt.tip, width)
        room = width - get_string_width(tip) - 1
        buffer = prompt.buffer
        while buffer and get_string_width(buffer) > room:
            buffer = buffer[1:]
        return tip + buffer

    def _draw_status_bar(self) -> None:
        size = self.terminal.size()
        if size.height < 2:
            return
        self.terminal.write(size.height - 2, 0, self.status_line(size.width), self.terminal.status_attr)

    def _draw_message_bar(self) -> None:
        size = self.terminal.size()
        if size.height < 1:
            return
        y = size.height - 1
        self.terminal.clear_current_line(y)
        self.terminal.write(y, 0, self.message_line(size.width))

    # --- Cursor ---
    def cursor_screen_position(self) -> Position:
        """Screen cell of the cursor, in 0-based (column, line) coordinates."""
        editor = self.editor
        size = self.terminal.size()
        if editor.prompt is not None:
            prompt_width = get_string_width(self.prompt_line(size.width))
            return Position(min(prompt_width, max(size.width - 1, 0)), max(size.height - 1, 0))

        row = editor.document.row(editor.cursor.y)
        if row is None:
            screen_x = 0
        else:
            visible = row.render(editor.offset.x, editor.cursor.x).replace("\t", " ")
            screen_x = get_string_width(visible)
        screen_y = editor.cursor.y - editor.offset.y
        text_height = max(size.height - 2, 1)
        return Position(
            max(0, min(screen_x, size.width - 1)),
            max(0, min(screen_y, text_height - 1)),
        )

    def _position_cursor(self) -> None:
        self.terminal.cursor_position(self.cursor_screen_position())
