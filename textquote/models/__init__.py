"""Shared typed data models for textquote.

This package contains dataclasses exchanged between the normalizer, the
calculator, configuration loading, and CLI rendering.
"""

from .datatypes import (
    CalculationResult,
    NormalizationOptions,
    PriceBreakdown,
    PricingLabels,
    Settings,
    Tariff,
)

__all__ = [
    "CalculationResult",
    "NormalizationOptions",
    "PriceBreakdown",
    "PricingLabels",
    "Settings",
    "Tariff",
]
