# logger.py
import logging
import sys
import os

import colorlog

from .. import constants

CONSOLE_FORMAT = '[%(levelname).4s] %(name)s: %(message)s'
COLOR_FORMAT = '%(log_color)s[%(levelname).4s]%(reset)s %(cyan)s%(name)s%(reset)s: %(message)s'
FILE_FORMAT = '%(asctime)s %(threadName)s [%(levelname).4s] %(name)s: %(message)s'
LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def setup_logger(debug: bool = False, module_levels: dict | None = None, log_file: str | None = None):
    """
    Configures the root logger for the application.

    Calling it again only changes the root level and the per-module levels,
    the handlers installed by the first call are kept.

    Args:
        debug: Enable debug logging level
        module_levels: Per-module log levels, e.g. {"io": "DEBUG"}
        log_file: Optional path of a file receiving a copy of every record
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not root.handlers:
        root.addHandler(_console_handler())
        if log_file:
            _add_file_handler(root, log_file)

    _apply_module_levels(module_levels)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    # Respect NO_COLOR env var (https://no-color.org/)
    if sys.stderr.isatty() and not os.environ.get("NO_COLOR"):
        handler.setFormatter(colorlog.ColoredFormatter(COLOR_FORMAT, log_colors=LOG_COLORS, reset=True))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _add_file_handler(root: logging.Logger, log_file: str):
    try:
        handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    except OSError as e:
        logging.error(f"Failed to create log file handler for '{log_file}': {e}")
        return
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)
    logging.info(f"Logging to file: {log_file}")


def parse_module_levels(spec: str | None) -> dict:
    """Parse 'io=DEBUG,cli=INFO' into a mapping, skipping malformed pairs."""
    levels = {}
    for pair in (spec or "").split(','):
        name, sep, lvl = pair.partition('=')
        if sep and name.strip():
            levels[name.strip()] = lvl.strip().upper()
    return levels


def _apply_module_levels(module_levels: dict | None):
    """Apply per-module logger levels from mapping or env var TETHERIO_LOG_LEVELS."""
    if module_levels is None:
        module_levels = parse_module_levels(os.environ.get(constants.LOG_LEVELS_ENV))

    for name, lvl_str in module_levels.items():
        lvl = logging.getLevelName(str(lvl_str).upper())
        if not isinstance(lvl, int):
            logging.warning(f"Ignoring unknown log level '{lvl_str}' for '{name}'")
            continue
        logging.getLogger(_normalize_module_name(name)).setLevel(lvl)


def _normalize_module_name(name: str) -> str:
    """
    Map a short module name to its logger name.

    - aliases expand to the full module path ('be' => 'tetherio.io.backends')
    - a trailing '.*' is dropped ('io.*' => 'tetherio.io')
    - known top modules get the 'tetherio.' prefix
    """
    name = constants.LOG_ALIAS_MAP.get(name, name)
    name = name.removesuffix('.*')
    if name.split('.', 1)[0] in constants.KNOWN_TOP_MODULES:
        name = f'tetherio.{name}'
    return name
