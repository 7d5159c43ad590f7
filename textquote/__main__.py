"""Module entrypoint for running textquote as ``python -m textquote``."""

from __future__ import annotations

from textquote.cli import main


if __name__ == "__main__":
    main()
