# tests/test_app.py
"""Tests for the `svim` entry point.

`curses.wrapper` is replaced throughout, so no terminal is touched; the
tests check startup wiring, exit statuses and what gets printed after the
terminal has been restored.
"""

from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from svim import app
from svim.ui.Terminal import FatalIOError


@pytest.fixture
def startup(mock_config: dict[str, Any]) -> Generator[dict[str, MagicMock], None, None]:
    with (
        patch.object(app, "load_dotenv") as load_dotenv,
        patch.object(app, "load_config", return_value=mock_config) as load_config,
        patch.object(app, "setup_logging") as setup_logging,
        patch.object(app.locale, "setlocale") as setlocale,
        patch.object(app.curses, "wrapper") as wrapper,
    ):
        yield {
            "load_dotenv": load_dotenv,
            "load_config": load_config,
            "setup_logging": setup_logging,
            "setlocale": setlocale,
            "wrapper": wrapper,
        }


def test_normal_quit_exits_zero(startup: dict[str, MagicMock], mock_config, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.start(["svim"])

    assert excinfo.value.code == 0
    startup["wrapper"].assert_called_once_with(app.main_app_runner, mock_config, None)
    startup["setup_logging"].assert_called_once_with(mock_config)
    startup["load_dotenv"].assert_called_once()
    assert capsys.readouterr().out.endswith(app.EXIT_NOTICE + "\n")


def test_file_argument_is_passed_to_runner(startup: dict[str, MagicMock], mock_config) -> None:
    with pytest.raises(SystemExit):
        app.start(["svim", "notes.txt"])

    startup["wrapper"].assert_called_once_with(app.main_app_runner, mock_config, "notes.txt")


def test_blank_file_argument_is_ignored(startup: dict[str, MagicMock], mock_config) -> None:
    with pytest.raises(SystemExit):
        app.start(["svim", "   "])

    startup["wrapper"].assert_called_once_with(app.main_app_runner, mock_config, None)


def test_terminal_failure_exits_one(startup: dict[str, MagicMock], capsys) -> None:
    startup["wrapper"].side_effect = FatalIOError("could not read key: EIO")

    with pytest.raises(SystemExit) as excinfo:
        app.start(["svim"])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "svim: could not read key: EIO" in captured.err
    assert app.EXIT_NOTICE not in captured.out


def test_unexpected_error_exits_one(startup: dict[str, MagicMock], capsys) -> None:
    startup["wrapper"].side_effect = RuntimeError("boom")

    with pytest.raises(SystemExit) as excinfo:
        app.start(["svim"])

    assert excinfo.value.code == 1
    assert "svim: unexpected error: boom" in capsys.readouterr().err


def test_main_app_runner_opens_file_and_runs(mock_stdscr: MagicMock, mock_config) -> None:
    with (
        patch.object(app, "TerminalAppMode") as app_mode,
        patch.object(app, "Editor") as editor_cls,
    ):
        app.main_app_runner(mock_stdscr, mock_config, "notes.txt")

    app_mode.assert_called_once_with(mock_stdscr)
    terminal = editor_cls.call_args.args[0]
    assert terminal.stdscr is mock_stdscr
    editor = editor_cls.return_value
    editor.open_document.assert_called_once_with("notes.txt")
    editor.run.assert_called_once()


def test_main_app_runner_without_file(mock_stdscr: MagicMock, mock_config) -> None:
    with (
        patch.object(app, "TerminalAppMode"),
        patch.object(app, "Editor") as editor_cls,
    ):
        app.main_app_runner(mock_stdscr, mock_config, None)

    editor_cls.return_value.open_document.assert_not_called()
    editor_cls.return_value.run.assert_called_once()
