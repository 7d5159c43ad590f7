"""Core datatypes shared across textquote modules.

Responsibilities:
- Represent immutable records exchanged between normalization, calculation,
  configuration, and rendering.
- Provide explicit typing and JSON-ready mappings for CLI output.

Key types:
- `NormalizationOptions`, `Tariff`, `PriceBreakdown`, `CalculationResult`,
  `PricingLabels`, and `Settings`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True, slots=True)
class NormalizationOptions:
    """Independent toggles for the ordered normalization rules.

    Attributes:
        collapse_spaces: Collapse whitespace runs into one space.
        collapse_newlines: Collapse line-break runs into one newline.
        tabs_to_spaces: Replace each tab with one space.
        trim_repeated_chars: Shorten decorative runs (`----`) to three characters.
        remove_zero_width: Strip invisible Unicode code points.
        trim: Strip leading and trailing whitespace.
    """

    collapse_spaces: bool = True
    collapse_newlines: bool = True
    tabs_to_spaces: bool = True
    trim_repeated_chars: bool = True
    remove_zero_width: bool = True
    trim: bool = True

    @classmethod
    def disabled(cls) -> NormalizationOptions:
        """Return options with every rule turned off."""

        return cls(
            collapse_spaces=False,
            collapse_newlines=False,
            tabs_to_spaces=False,
            trim_repeated_chars=False,
            remove_zero_width=False,
            trim=False,
        )

    def as_dict(self) -> dict[str, bool]:
        """Return the flag mapping keyed by option name."""

        return asdict(self)


@dataclass(frozen=True, slots=True)
class Tariff:
    """A pricing unit selectable for one calculation.

    Attributes:
        id: Stable tariff identifier used for selection.
        label: Human-readable name.
        chars_per_sheet: Number of characters in one billing sheet.
        new_text_price: Price per sheet of new (derived) text.
        reused_text_price: Price per sheet of reused (subtracted) text.
    """

    id: str
    label: str
    chars_per_sheet: int
    new_text_price: float
    reused_text_price: float

    def validate(self) -> None:
        """Validate tariff values before they are handed to the calculator."""

        if not self.id.strip():
            raise ValueError("Tariff `id` must be a non-empty string.")
        if isinstance(self.chars_per_sheet, bool) or self.chars_per_sheet < 1:
            raise ValueError(
                f"Tariff `{self.id}` field `chars_per_sheet` must be a positive integer."
            )
        if self.new_text_price < 0:
            raise ValueError(
                f"Tariff `{self.id}` field `new_text_price` must be non-negative."
            )
        if self.reused_text_price < 0:
            raise ValueError(
                f"Tariff `{self.id}` field `reused_text_price` must be non-negative."
            )


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    """Monetary amounts derived from character counts and a tariff."""

    new_text: float
    reused: float
    total: float


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Character counts and optional price for one calculation.

    Attributes:
        total_chars: Length of the normalized full text.
        new_text_chars: `max(0, total_chars - reused_chars)`.
        reused_chars: Sum of independently normalized reused block lengths.
        price: Price breakdown, present only when a tariff was supplied.
    """

    total_chars: int
    new_text_chars: int
    reused_chars: int
    price: PriceBreakdown | None = None

    @property
    def reused_exceeds_total(self) -> bool:
        """Return whether reused text is longer than the full text."""

        return self.reused_chars > self.total_chars

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-ready mapping of counts and price."""

        return {
            "total_chars": self.total_chars,
            "new_text_chars": self.new_text_chars,
            "reused_chars": self.reused_chars,
            "price": asdict(self.price) if self.price is not None else None,
        }


@dataclass(frozen=True, slots=True)
class PricingLabels:
    """Display labels for the subtracted and derived text categories."""

    new_text: str
    reused: str
    new_text_cost: str
    reused_cost: str


PRICING_LABEL_PRESETS: dict[str, PricingLabels] = {
    "reuse": PricingLabels(
        new_text="New text",
        reused="Reused text",
        new_text_cost="New text cost",
        reused_cost="Reused text cost",
    ),
    "translation": PricingLabels(
        new_text="Translated",
        reused="Original (retyped)",
        new_text_cost="Translation cost",
        reused_cost="Retyping cost",
    ),
}


@dataclass(frozen=True, slots=True)
class Settings:
    """Externally owned calculation settings passed by value into the core.

    Attributes:
        tariffs: Configured tariffs in declaration order.
        normalization: Normalization rule toggles.
        count_spaces: Whether whitespace counts as characters.
        labels: Name of the label preset used for rendering.
        default_tariff_id: Tariff selected when none is given explicitly.
    """

    tariffs: tuple[Tariff, ...] = field(default_factory=tuple)
    normalization: NormalizationOptions = field(default_factory=NormalizationOptions)
    count_spaces: bool = True
    labels: str = "reuse"
    default_tariff_id: str | None = None

    def find_tariff(self, tariff_id: str | None) -> Tariff | None:
        """Return the tariff with the given id, or `None` when absent."""

        if tariff_id is None:
            return None
        return next((tariff for tariff in self.tariffs if tariff.id == tariff_id), None)

    def pricing_labels(self) -> PricingLabels:
        """Return the label preset selected by `labels`."""

        return PRICING_LABEL_PRESETS[self.labels]
