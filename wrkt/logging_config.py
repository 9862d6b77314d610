"""Logging configuration for wrkt"""
import logging
import sys
from pathlib import Path

DEBUG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Prefixes dropped from logger names, applied in order
LOGGER_PREFIXES = ('wrkt.', 'services.')

RESET = '\033[0m'
LEVEL_COLORS = {
    logging.DEBUG: '\033[2m',      # Dim
    logging.INFO: '\033[34m',      # Blue
    logging.WARNING: '\033[33m',   # Yellow
    logging.ERROR: '\033[31m',     # Red
    logging.CRITICAL: '\033[1;31m',
}


class ColoredFormatter(logging.Formatter):
    """Colors the level name when the handler writes to a terminal."""

    def __init__(self, fmt: str, stream=None, datefmt: str = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        stream = stream if stream is not None else sys.stderr
        self.use_color = hasattr(stream, 'isatty') and stream.isatty()

    def formatMessage(self, record):
        color = LEVEL_COLORS.get(record.levelno)
        if not (self.use_color and color):
            return super().formatMessage(record)
        # Records are shared between handlers; color a copy of the fields only
        fields = dict(record.__dict__, levelname=f"{color}{record.levelname}{RESET}")
        return self._style._fmt % fields


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / '.wrkt' / 'wrkt.log'


def _console_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure the root logger for one wrkt run.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages with timestamps and also write them to get_log_file()
    """
    level = _console_level(verbose, debug)
    stream = sys.stderr

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(
        DEBUG_FORMAT if debug else CONSOLE_FORMAT, stream=stream, datefmt=DATE_FORMAT
    ))
    handlers = [console_handler]

    if debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setFormatter(logging.Formatter(DEBUG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # GitPython logs every executed command at DEBUG
    logging.getLogger('git').setLevel(logging.DEBUG if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a wrkt module, named without the package prefixes."""
    for prefix in LOGGER_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
