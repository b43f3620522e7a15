# Error types and fallback helpers for the layers around the engine
"""
The adaptation stages are total functions and do not raise for valid input.
Errors come from the boundaries: decoding and writing files, malformed pixel
data, bad configuration. A missing screen-brightness reading is not an error
at all; it is replaced by the fallback percentage and logged.
"""

import functools
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from .logger import get_logger

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    """Where a failure or fallback came from."""
    FILE_IO = "file_io"                      # image could not be read or written
    PIXEL_DATA = "pixel_data"                # array cannot form a PixelBuffer
    CONFIGURATION = "configuration"          # screen white point and other settings
    SCREEN_BRIGHTNESS = "screen_brightness"  # reading missing or unusable, fallback used


class AppError(Exception):
    """Base exception; `user_message` is what the CLI prints."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class FileIOError(AppError):
    """An image file could not be loaded or saved."""

    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)
        self.file_path = file_path


class InvalidBufferError(AppError):
    """Pixel data that cannot form a buffer (wrong shape, dtype or size)."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.PIXEL_DATA, **kwargs)


class ConfigurationError(AppError):
    """A setting the engine cannot work with, such as a non-positive screen white point."""

    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.setting_name = setting_name


def handle_errors(fallback_value: Any, category: ErrorCategory) -> Callable[[F], F]:
    """
    Return `fallback_value` when the wrapped boundary function raises.

    AppError subclasses propagate unchanged. Anything else is logged as a
    warning tagged with `category`.

    Example:
        @handle_errors(fallback_value=Orientation.UNDEFINED, category=ErrorCategory.FILE_IO)
        def read_orientation(source):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                logger.warning(
                    "[%s] %s failed: %s; using %r",
                    category.value,
                    func.__name__,
                    e,
                    fallback_value,
                )
                return fallback_value

        return wrapper  # type: ignore
    return decorator


def log_fallback(message: str, category: ErrorCategory = ErrorCategory.SCREEN_BRIGHTNESS) -> None:
    """Record that a default replaced an unusable value."""
    logger.warning("[%s] %s", category.value, message)
