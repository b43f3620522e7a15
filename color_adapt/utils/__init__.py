# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    FileIOError,
    InvalidBufferError,
    ConfigurationError,
    ErrorCategory,
    handle_errors,
    log_fallback,
)

__all__ = [
    'AppError',
    'FileIOError',
    'InvalidBufferError',
    'ConfigurationError',
    'ErrorCategory',
    'handle_errors',
    'log_fallback',
]
