# svim/utils/logging_config.py
"""svim.utils.logging_config
===========================

Logging configuration for the svim editor. It defines the global logger
objects and a single function, `setup_logging`, which attaches handlers to
the root logger according to the ``[logging]`` section of the configuration.

Features:
    - Rotating file logging for general application events (svim.log).
    - Optional console logging to stderr. Off by default: the editor owns the
      whole screen, so console output would corrupt the display.
    - Optional separate error log for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the
      SVIM_KEYTRACE environment variable.
    - Falls back to the system temp directory when the log directory cannot
      be created.
    - Safe reconfiguration: existing handlers are cleared first.
    - Never raises; setup problems are reported on stderr.

Globals:
    logger: Main application logger ("svim").
    KEY_LOGGER: Logger for raw key-press trace events ("svim.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Unconfigured until ``setup_logging()`` attaches handlers.
logger = logging.getLogger("svim")
KEY_LOGGER = logging.getLogger("svim.keyevents")

KEYTRACE_ENV = "SVIM_KEYTRACE"
FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _ensure_log_dir(filename: str) -> str:
    """Creates the directory of `filename`, or returns a temp-dir fallback path."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename))
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int, level: int, formatter: logging.Formatter
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            _ensure_log_dir(filename), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e_fh:
        print(f"Error setting up file logger for '{filename}': {e_fh}. File logging may be impaired.", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating ``log_file`` (default svim.log) from
       ``file_level`` (default DEBUG) upward.
    2. Console handler: optional stderr output at ``console_level``
       (default WARNING), only when ``log_to_console`` is true.
    3. Error-file handler: optional rotating ``error_log_file`` storing
       only ERROR and CRITICAL events (``separate_error_log``).
    4. Key-event handler: rotating keytrace.log attached to
       ``svim.keyevents`` when ``SVIM_KEYTRACE`` is ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = logging_config.get("log_file", "svim.log")
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(FILE_FORMAT)
    file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, log_file_level, file_formatter)

    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_file_handler = _rotating_handler(
            logging_config.get("error_log_file", "svim-error.log"),
            1024 * 1024, 3, logging.ERROR, file_formatter,
        )

    root_logger = logging.getLogger()
    root_logger.handlers = []
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Key events go to their own file and never into svim.log.
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}:
        key_trace_handler = _rotating_handler(
            "keytrace.log", 1024 * 1024, 3, logging.DEBUG, logging.Formatter("%(asctime)s - %(message)s")
        )
        if key_trace_handler:
            KEY_LOGGER.addHandler(key_trace_handler)
            logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
        else:
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info("File logging to '%s' at level: %s.", log_filename, logging.getLevelName(file_handler.level))
