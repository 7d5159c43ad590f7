"""Shared pytest fixtures for the full textquote test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from textquote.config import CONFIG_PATH_ENV, COUNT_SPACES_ENV, LABELS_ENV, TARIFF_ENV


@pytest.fixture(autouse=True)
def _isolate_textquote_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient TEXTQUOTE_* variables from leaking into settings resolution."""

    for key in (CONFIG_PATH_ENV, COUNT_SPACES_ENV, LABELS_ENV, TARIFF_ENV):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Write a settings file with two tariffs and return its path."""

    path = tmp_path / "textquote.yml"
    path.write_text(
        """
count_spaces: true
normalization:
  collapse_spaces: true
  trim: true
tariffs:
  - id: basic
    label: Basic
    chars_per_sheet: 10
    new_text_price: 100
    reused_text_price: 50
  - id: en-uk
    label: English to Ukrainian
    chars_per_sheet: 1800
    new_text_price: "120.5"
    reused_text_price: 30
""".strip(),
        encoding="utf-8",
    )
    return path
