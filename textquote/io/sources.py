"""Plain text input sources.

Responsibilities:
- Read UTF-8 text from files or standard input for the calculator.
- Report unreadable inputs with one domain error type.

Document formats (docx, pdf, markdown) are not extracted here; callers pass
plain text.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

STDIN_MARKER = "-"


class InputReadError(RuntimeError):
    """Raised when an input text cannot be read."""


class TextSource:
    """Reader for plain text inputs given as paths or `-` for stdin."""

    def __init__(self, stdin: TextIO | None = None) -> None:
        """Initialize with an optional stdin override."""

        self._stdin = stdin

    def read(self, path: Path) -> str:
        """Read one text input."""

        if str(path) == STDIN_MARKER:
            stream = self._stdin or sys.stdin
            return stream.read()

        if not path.exists():
            raise InputReadError(f"Input file not found: {path}")
        if path.is_dir():
            raise InputReadError(f"Input path is a directory: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InputReadError(f"Input file is not valid UTF-8 text: {path}") from exc
        except OSError as exc:
            raise InputReadError(f"Failed to read input file {path}: {exc}") from exc

    def read_many(self, paths: list[Path]) -> list[str]:
        """Read several text inputs in order."""

        if sum(1 for path in paths if str(path) == STDIN_MARKER) > 1:
            raise InputReadError("Standard input (`-`) can be used only once.")
        return [self.read(path) for path in paths]
