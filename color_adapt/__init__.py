"""Screen-brightness adaptation of photos for display."""

__version__ = "0.1.0"
