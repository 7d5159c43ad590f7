"""Character accounting and price calculation.

Responsibilities:
- Count normalized characters of the full text and of each reused block.
- Derive the new-text count by subtraction, floored at zero.
- Convert counts into fractional sheets and prices when a tariff is selected.

Reused blocks are subtracted by length only; no text matching is performed,
so reused text that does not appear in the full text is still subtracted.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models.datatypes import (
    CalculationResult,
    NormalizationOptions,
    PriceBreakdown,
    Settings,
    Tariff,
)
from .text.normalizer import TextNormalizer


def calculate(
    text: str,
    reused_texts: Sequence[str],
    options: NormalizationOptions,
    count_spaces: bool,
    tariff: Tariff | None = None,
) -> CalculationResult:
    """Count characters of `text` and `reused_texts` and price them against `tariff`.

    Args:
        text: Full text to be billed.
        reused_texts: Reused blocks, each normalized independently.
        options: Normalization rule toggles.
        count_spaces: Whether whitespace counts as characters.
        tariff: Optional tariff; without it the result carries no price.

    Returns:
        Counts plus a price breakdown when `tariff` is given.
    """

    normalizer = TextNormalizer(options, count_spaces)
    total_chars = len(normalizer.normalize(text))
    reused_chars = sum(len(normalizer.normalize(block)) for block in reused_texts)
    new_text_chars = max(0, total_chars - reused_chars)

    if tariff is None:
        return CalculationResult(
            total_chars=total_chars,
            new_text_chars=new_text_chars,
            reused_chars=reused_chars,
            price=None,
        )

    new_text_sheets = new_text_chars / tariff.chars_per_sheet
    reused_sheets = reused_chars / tariff.chars_per_sheet
    new_text_cost = new_text_sheets * tariff.new_text_price
    reused_cost = reused_sheets * tariff.reused_text_price

    return CalculationResult(
        total_chars=total_chars,
        new_text_chars=new_text_chars,
        reused_chars=reused_chars,
        price=PriceBreakdown(
            new_text=new_text_cost,
            reused=reused_cost,
            total=new_text_cost + reused_cost,
        ),
    )


def calculate_with_settings(
    text: str,
    reused_texts: Sequence[str],
    settings: Settings,
    tariff_id: str | None = None,
) -> CalculationResult:
    """Resolve the selected tariff from settings and run `calculate`.

    An absent or unknown `tariff_id` yields a count-only result.
    """

    return calculate(
        text,
        reused_texts,
        settings.normalization,
        settings.count_spaces,
        settings.find_tariff(tariff_id),
    )


def rounded_price_summary(price: PriceBreakdown, digits: int = 2) -> dict[str, float]:
    """Return a price breakdown rounded for stable JSON and CLI display."""

    new_text = round(price.new_text, digits)
    reused = round(price.reused, digits)
    return {
        "new_text": new_text,
        "reused": reused,
        "total": round(price.total, digits),
    }
