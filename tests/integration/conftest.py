"""Integration-test fixtures for CLI runs over real text files."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def text_files(tmp_path: Path) -> dict[str, Path]:
    """Write a full text and two reused blocks and return their paths."""

    full = tmp_path / "full.txt"
    full.write_text("hello world", encoding="utf-8")
    reused = tmp_path / "reused.txt"
    reused.write_text("hello\n", encoding="utf-8")
    oversized = tmp_path / "oversized.txt"
    oversized.write_text("this reused block is longer than the full text", encoding="utf-8")
    return {"full": full, "reused": reused, "oversized": oversized}
