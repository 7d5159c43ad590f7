"""Input components for textquote.

This package reads the plain text strings that feed the calculator.
"""

from .sources import InputReadError, TextSource

__all__ = ["InputReadError", "TextSource"]
