"""Unit tests for shared value parsing helpers."""

from __future__ import annotations

import pytest

from textquote.parsing import (
    normalize_optional_string,
    parse_non_negative_number,
    parse_permissive_boolean,
    parse_positive_int,
)


def test_normalize_optional_string_strips_and_drops_blanks() -> None:
    """Blank strings and `None` should normalize to `None`."""

    assert normalize_optional_string("  value ") == "value"
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string(None) is None
    assert normalize_optional_string(12) == "12"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        (" YES ", True),
        ("on", True),
        ("0", False),
        ("Off", False),
        ("maybe", None),
        ("", None),
    ],
)
def test_parse_permissive_boolean(value: object, expected: bool | None) -> None:
    """Accepted boolean tokens should parse, others return `None`."""

    assert parse_permissive_boolean(value) is expected


def test_parse_non_negative_number_accepts_numbers_and_numeric_strings() -> None:
    """Prices may be given as ints, floats, or numeric strings."""

    assert parse_non_negative_number(3, "price") == 3.0
    assert parse_non_negative_number(" 2.50 ", "price") == 2.5
    assert parse_non_negative_number(0, "price") == 0.0


@pytest.mark.parametrize("value", [-1, "-0.5", "abc", "", True, float("nan"), "inf"])
def test_parse_non_negative_number_rejects_invalid_values(value: object) -> None:
    """Negative, non-numeric, boolean, and non-finite values should be rejected."""

    with pytest.raises(ValueError, match="`price` must be a non-negative number"):
        parse_non_negative_number(value, "price")


def test_parse_positive_int() -> None:
    """Positive integers parse; zero, negatives, and fractions are rejected."""

    assert parse_positive_int(" 1800 ", "chars_per_sheet") == 1800
    assert parse_positive_int(1, "chars_per_sheet") == 1
    for invalid in (0, -5, "1.5", False, None):
        with pytest.raises(ValueError, match="must be a positive integer"):
            parse_positive_int(invalid, "chars_per_sheet")
