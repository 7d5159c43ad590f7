"""Text normalization components.

This package provides the ordered, toggleable rules used to canonicalize text
before characters are counted.
"""

from .normalizer import (
    CollapseNewlines,
    CollapseSpaces,
    RemoveZeroWidth,
    StripWhitespace,
    TabsToSpaces,
    TextNormalizer,
    Trim,
    TrimRepeatedChars,
    normalize,
)

__all__ = [
    "TextNormalizer",
    "normalize",
    "RemoveZeroWidth",
    "TabsToSpaces",
    "CollapseSpaces",
    "CollapseNewlines",
    "TrimRepeatedChars",
    "Trim",
    "StripWhitespace",
]
