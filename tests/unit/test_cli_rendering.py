"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

import json

import pytest
import typer

from textquote.cli_rendering import (
    echo_calculation,
    echo_calculation_json,
    echo_tariff_list,
    exit_with_command_error,
    format_count,
    format_money,
)
from textquote.errors import CommandStageError
from textquote.models.datatypes import (
    PRICING_LABEL_PRESETS,
    CalculationResult,
    PriceBreakdown,
    Tariff,
)

TARIFF = Tariff(
    id="basic",
    label="Basic",
    chars_per_sheet=10,
    new_text_price=100,
    reused_text_price=50,
)


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = CommandStageError(
        stage="input",
        detail="Input file not found: missing.txt",
        hint="Pass readable UTF-8 plain text files.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("calculate", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "calculate failed at stage `input`" in captured.err
    assert "Hint: Pass readable UTF-8 plain text files." in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit):
        exit_with_command_error("normalize", RuntimeError("unexpected failure"))

    assert "normalize failed: unexpected failure" in capsys.readouterr().err


def test_format_helpers() -> None:
    """Counts get thousands separators and money two decimals."""

    assert format_count(1234567) == "1,234,567"
    assert format_money(1234.5) == "1,234.50"


def test_echo_calculation_with_tariff_and_translation_labels(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Priced output should use the selected labels and two-decimal amounts."""

    result = CalculationResult(
        total_chars=11,
        new_text_chars=6,
        reused_chars=5,
        price=PriceBreakdown(new_text=60.0, reused=25.0, total=85.0),
    )

    echo_calculation(result, PRICING_LABEL_PRESETS["translation"], TARIFF)

    assert capsys.readouterr().out.splitlines() == [
        "Tariff: Basic (basic)",
        "Translated: 6",
        "Original (retyped): 5",
        "Total characters: 11",
        "Translation cost: 60.00",
        "Retyping cost: 25.00",
        "Total cost: 85.00",
    ]


def test_echo_calculation_warns_when_reused_exceeds_total(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Count-only output should warn about oversized reused text and missing tariff."""

    result = CalculationResult(total_chars=3, new_text_chars=0, reused_chars=10)

    echo_calculation(result, PRICING_LABEL_PRESETS["reuse"], None)

    captured = capsys.readouterr()
    assert "New text: 0" in captured.out
    assert "Reused text: 10" in captured.out
    assert "cost" not in captured.out
    assert "Select a tariff (--tariff) to calculate prices." in captured.out
    assert "Warning: reused text exceeds total. Check your input." in captured.err


def test_echo_calculation_json_rounds_price(capsys: pytest.CaptureFixture[str]) -> None:
    """JSON output should be stable and carry rounded amounts."""

    result = CalculationResult(
        total_chars=4,
        new_text_chars=4,
        reused_chars=0,
        price=PriceBreakdown(new_text=4 / 3, reused=0.0, total=4 / 3),
    )

    echo_calculation_json(result, TARIFF)

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "new_text_chars": 4,
        "price": {"new_text": 1.33, "reused": 0.0, "total": 1.33},
        "reused_chars": 0,
        "reused_exceeds_total": False,
        "tariff": "basic",
        "total_chars": 4,
    }


def test_echo_tariff_list(capsys: pytest.CaptureFixture[str]) -> None:
    """Tariff rows should mark the default tariff; an empty list prints a notice."""

    echo_tariff_list((TARIFF,), "basic")
    echo_tariff_list((), None)

    assert capsys.readouterr().out.splitlines() == [
        "basic (default): Basic | 10 chars/sheet | new 100.00 | reused 50.00",
        "No tariffs configured.",
    ]
