# tests/conftest.py
"""Pytest configuration with shared fixtures for the svim editor tests.

The fixtures build real `KeyBinder`, `Terminal` and `Editor` objects on top of
a mocked curses window, so most tests exercise the actual code paths without
a terminal.
"""

from __future__ import annotations

import copy
import curses
from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from svim.core.Document import Document
from svim.core.Editor import Editor
from svim.core.Row import Row
from svim.ui.KeyBinder import KeyBinder
from svim.ui.Terminal import Terminal
from svim.utils.utils import DEFAULT_CONFIG


# --- Automatic mocking of curses functions ---
@pytest.fixture(autouse=True)
def mock_curses_functions() -> Generator[MagicMock, None, None]:
    """Patch the curses calls that need `initscr()` to have run.

    Key code constants and `curses.error` stay real; only functions that
    talk to the terminal are replaced.

    Yields:
        MagicMock: The `curs_set` mock, for tests that check cursor visibility.
    """
    with (
        patch.object(curses, "curs_set") as curs_set,
        patch.object(curses, "has_colors", return_value=True),
        patch.object(curses, "start_color"),
        patch.object(curses, "init_pair"),
        patch.object(curses, "color_pair", side_effect=lambda n: n << 8),
        patch.object(curses, "COLORS", 256, create=True),
    ):
        yield curs_set


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the curses stdscr.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide the embedded default configuration as a private copy."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def keybinder(mock_config: dict[str, Any]) -> KeyBinder:
    return KeyBinder(mock_config)


@pytest.fixture
def terminal(mock_stdscr: MagicMock, keybinder: KeyBinder, mock_config: dict[str, Any]) -> Terminal:
    return Terminal(mock_stdscr, keybinder, mock_config)


@pytest.fixture
def editor(terminal: Terminal, mock_config: dict[str, Any]) -> Editor:
    """A real `Editor` on an empty untitled document and a 80x24 mock screen."""
    return Editor(terminal, mock_config)


@pytest.fixture
def make_editor(terminal: Terminal, mock_config: dict[str, Any]):
    """Factory for an `Editor` preloaded with lines of text.

    Args:
        lines: Text of each row.
        file_name: Optional file identity for the document.
    """

    def _make(lines: list[str], file_name: str | None = None) -> Editor:
        document = Document([Row(line) for line in lines], file_name=file_name)
        return Editor(terminal, mock_config, document)

    return _make


# --- Filesystem fixtures ---
@pytest.fixture
def sample_text() -> list[str]:
    """Provide a sample of lines, including an empty one and a wide glyph."""
    return [
        "def hello_world():",
        "    print('Hello, world!')",
        "",
        "# 日本語",
    ]


@pytest.fixture
def text_file(tmp_path: Path, sample_text: list[str]) -> Path:
    """Write `sample_text` to a file, newline-terminated."""
    path = tmp_path / "sample.txt"
    path.write_text("\n".join(sample_text) + "\n", encoding="utf-8")
    return path
