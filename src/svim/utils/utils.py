# svim/utils/utils.py
"""
svim.utils.utils.py
===================

This module provides the core utility functions for the svim editor.

Key functionalities include:
- Automatic User Configuration: creates `config.toml` and `.env` in
  `~/.config/svim` on first run.
- Robust Configuration Loading: starts from the embedded default
  configuration and recursively merges the user's `config.toml` over it.
- Display Width: wcwidth-based helpers that measure and clip text in
  terminal cells rather than characters.
- Colour conversion from hex strings to xterm-256 indices.

The editor always starts, even if the user configuration is missing or
corrupted, by falling back to the embedded defaults.
"""

import logging
import unicodedata
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from wcwidth import wcswidth, wcwidth

logger = logging.getLogger("svim")

# --- Constants ---
WHITE_FG_IDX = 255

ENV_TEMPLATE = """# Environment overrides for svim.
# Set to 1 to record every key press in keytrace.log.
SVIM_KEYTRACE=
"""

# Embedded defaults; the ultimate fallback so the editor can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "quit_times": 3,
        "status_message_timeout": 5,
    },
    "keybindings": {
        "save_file": "ctrl+s",
        "quit": "ctrl+q",
    },
    "colors": {
        "status_fg": "#3f3f3f",
        "status_bg": "#efefef",
    },
    "logging": {
        "log_file": "svim.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "error_log_file": "svim-error.log",
    },
}


# --- Helper Functions ---

def get_config_dir() -> Path:
    return Path.home() / ".config" / "svim"


def ensure_user_config_exists(config_dir: Optional[Path] = None) -> None:
    """Checks for user config files and creates them if missing."""
    try:
        config_dir = config_dir or get_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            user_config_path.write_text(toml.dumps(DEFAULT_CONFIG), encoding="utf-8")
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.error(f"Could not create user configuration files: {e}", exc_info=True)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's config.toml over them.

    Args:
        config_path: Explicit configuration file. When omitted, the user file
            in `~/.config/svim` is used and created on first run.

    Returns:
        The merged configuration dictionary.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if config_path is None:
        ensure_user_config_exists()
        config_path = get_config_dir() / "config.toml"

    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_char_width(char: str) -> int:
    """Display width of one character.

    Control and format characters count as 0, except Tab which the editor
    draws as a single cell. Characters wcwidth cannot measure count as 1.
    """
    if char == "\t":
        return 1
    if unicodedata.category(char) in ("Cc", "Cf"):
        return 0
    if unicodedata.combining(char):
        return 0
    width = wcwidth(char)
    return width if width >= 0 else 1


def get_string_width(text: str) -> int:
    """Display width of a string, falling back to per-character widths."""
    width = wcswidth(text)
    if width != -1:
        return width
    return sum(get_char_width(ch) for ch in text)


def truncate_string(s: str, max_width: int) -> str:
    """Return `s` clipped to visual width `max_width`.

    A wide character that would straddle the limit is dropped entirely.
    """
    result: list[str] = []
    consumed = 0

    for ch in s:
        w = get_char_width(ch)
        if consumed + w > max_width:
            break
        result.append(ch)
        consumed += w

    return "".join(result)


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
