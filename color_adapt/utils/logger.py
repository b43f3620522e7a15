"""
Package logging.

One stdout handler sits on the ``color_adapt`` logger; module loggers are its
children and propagate to it, so ``set_level`` (the CLI's ``--verbose``)
affects all of them at once.
"""
import logging
import sys

from color_adapt.config import settings

PACKAGE_LOGGER = "color_adapt"

_handler = None


def _level_from_name(level_name):
    level = logging.getLevelName(str(level_name).upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.INFO


def _package_logger():
    global _handler
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(settings.LOGGING_FORMAT))
        package_logger.addHandler(_handler)
        package_logger.setLevel(_level_from_name(settings.LOGGING_LEVEL))
        package_logger.propagate = False
    return package_logger


def get_logger(name):
    """Logger for `name`, placed under the package logger if it is not already."""
    package_logger = _package_logger()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return package_logger.getChild(name)


def set_level(level_name):
    """Set the package log level by name; unknown names mean INFO."""
    _package_logger().setLevel(_level_from_name(level_name))
