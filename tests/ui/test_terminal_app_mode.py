# tests/ui/test_terminal_app_mode.py
"""Tests for `TerminalAppMode`, the scoped raw-mode context manager."""

import curses
from typing import Generator
from unittest.mock import DEFAULT, MagicMock, call, patch

import pytest

from svim.ui.TerminalAppMode import TerminalAppMode


@pytest.fixture
def tty() -> Generator[dict[str, MagicMock], None, None]:
    """Patch the curses mode switches and terminfo calls."""
    with patch.multiple(
        curses,
        raw=DEFAULT,
        noraw=DEFAULT,
        cbreak=DEFAULT,
        nocbreak=DEFAULT,
        noecho=DEFAULT,
        echo=DEFAULT,
        set_escdelay=DEFAULT,
        tigetstr=DEFAULT,
        putp=DEFAULT,
    ) as mocks:
        mocks["tigetstr"].side_effect = lambda cap: f"<{cap}>".encode()
        yield mocks


def test_enter_switches_to_raw_alternate_screen(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    mode = TerminalAppMode(mock_stdscr)

    mode.enter()

    assert mode.active
    tty["putp"].assert_called_once_with(b"<smcup>")
    tty["raw"].assert_called_once()
    tty["cbreak"].assert_not_called()
    tty["noecho"].assert_called_once()
    tty["set_escdelay"].assert_called_once_with(25)
    mock_stdscr.keypad.assert_called_once_with(True)
    mock_stdscr.scrollok.assert_called_once_with(False)


def test_enter_falls_back_to_cbreak(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    tty["raw"].side_effect = curses.error("raw unsupported")

    TerminalAppMode(mock_stdscr).enter()

    tty["cbreak"].assert_called_once()


def test_exit_restores_modes(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    mode = TerminalAppMode(mock_stdscr)
    mode.enter()

    mode.exit()

    assert not mode.active
    mock_stdscr.keypad.assert_called_with(False)
    tty["noraw"].assert_called_once()
    tty["echo"].assert_called_once()
    assert tty["putp"].call_args_list == [call(b"<smcup>"), call(b"<rmcup>")]


def test_exit_without_enter_is_a_noop(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    TerminalAppMode(mock_stdscr).exit()

    tty["noraw"].assert_not_called()
    tty["putp"].assert_not_called()


def test_exit_falls_back_to_nocbreak(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    tty["noraw"].side_effect = curses.error("noraw failed")
    mode = TerminalAppMode(mock_stdscr)
    mode.enter()

    mode.exit()

    tty["nocbreak"].assert_called_once()
    assert not mode.active


def test_context_manager_restores_on_exception(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    with pytest.raises(RuntimeError):
        with TerminalAppMode(mock_stdscr) as mode:
            assert mode.active
            raise RuntimeError("boom")

    assert not mode.active
    tty["noraw"].assert_called_once()
    tty["echo"].assert_called_once()


def test_missing_terminfo_capability_is_skipped(tty: dict[str, MagicMock], mock_stdscr: MagicMock) -> None:
    tty["tigetstr"].side_effect = curses.error("setupterm not called")

    with TerminalAppMode(mock_stdscr):
        pass

    tty["putp"].assert_not_called()
