import logging

from rich.console import Console
from rich.logging import RichHandler

_logger = logging.getLogger("whenmock")


def _create_rich_handler():
    console = Console(stderr=True)
    h = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    h.setFormatter(logging.Formatter("%(message)s"))
    return h


_handler = _create_rich_handler()
_logger.setLevel(logging.WARNING)
_logger.propagate = False
_logger.addHandler(_handler)


def debug(msg, *args):
    _logger.debug(msg, *args)


def info(msg, *args):
    _logger.info(msg, *args)


def warning(msg, *args):
    _logger.warning(msg, *args)


def error(msg, *args):
    _logger.error(msg, *args)


def is_debug_enabled():
    return _logger.isEnabledFor(logging.DEBUG)


def set_default_level(level):
    if isinstance(level, str):
        level = level.upper()
    _logger.setLevel(level)


def get_level():
    return _logger.level
