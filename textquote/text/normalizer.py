"""Text normalization rules for character accounting.

Responsibilities:
- Provide composable, independently toggleable canonicalization rules.
- Apply enabled rules in a fixed order; the rules are not commutative.
- Optionally strip all whitespace for counting purposes only.
"""

from __future__ import annotations

import re
from typing import Protocol

from ..models.datatypes import NormalizationOptions


DECORATIVE_CHARS = "-=_*.~"

ZERO_WIDTH_CHARS = "\u200b\u200c\u200d\u200e\u200f\ufeff\u00ad\u2060\u180e"

# Whitespace as browsers define it for `\s` and `String.prototype.trim`:
# includes the BOM, excludes U+001C..U+001F and U+0085.
WHITESPACE_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_ZERO_WIDTH_RE = re.compile(f"[{ZERO_WIDTH_CHARS}]")
_DECORATIVE_GAP_RE = re.compile(f"([-=_*.~])[{WHITESPACE_CHARS}]+([-=_*.~])")
_WHITESPACE_RUN_RE = re.compile(f"[{WHITESPACE_CHARS}]+")
_NEWLINE_RUN_RE = re.compile(r"[\r\n]+")
_DECORATIVE_REPEAT_RE = re.compile(r"([-=_*.~])\1{3,}")
_ANY_WHITESPACE_RE = re.compile(f"[{WHITESPACE_CHARS}]")


class NormalizerRule(Protocol):
    """Protocol for one normalization step."""

    def apply(self, text: str) -> str:
        """Apply a single normalization transformation."""


class RemoveZeroWidth:
    """Strip invisible code points that would inflate character counts."""

    def apply(self, text: str) -> str:
        """Remove zero-width spaces, joiners, direction marks, BOM, and soft hyphens."""

        return _ZERO_WIDTH_RE.sub("", text)


class TabsToSpaces:
    """Replace every horizontal tab with a single space."""

    def apply(self, text: str) -> str:
        return text.replace("\t", " ")


class CollapseSpaces:
    """Close gaps in decorative divider lines, then collapse whitespace runs."""

    def apply(self, text: str) -> str:
        """Join `- -` style gaps once, then turn any whitespace run into one space.

        The gap pass does not overlap, so `- - -` becomes `-- -` before the
        second pass reduces the remaining run to a single space.
        """

        text = _DECORATIVE_GAP_RE.sub(r"\1\2", text)
        return _WHITESPACE_RUN_RE.sub(" ", text)


class CollapseNewlines:
    """Collapse carriage-return/line-feed runs into one newline."""

    def apply(self, text: str) -> str:
        return _NEWLINE_RUN_RE.sub("\n", text)


class TrimRepeatedChars:
    """Shorten runs of four or more identical decorative characters to three."""

    def apply(self, text: str) -> str:
        return _DECORATIVE_REPEAT_RE.sub(r"\1\1\1", text)


class Trim:
    """Strip leading and trailing whitespace."""

    def apply(self, text: str) -> str:
        return text.strip(WHITESPACE_CHARS)


class StripWhitespace:
    """Remove every whitespace character; used only for counting."""

    def apply(self, text: str) -> str:
        return _ANY_WHITESPACE_RE.sub("", text)


class TextNormalizer:
    """Apply the enabled normalization rules in their fixed order."""

    def __init__(self, options: NormalizationOptions, count_spaces: bool = True) -> None:
        """Build the rule sequence from options and the space-counting flag."""

        self.options = options
        self.count_spaces = count_spaces
        self.rules = self._build_rules(options, count_spaces)

    @staticmethod
    def _build_rules(options: NormalizationOptions, count_spaces: bool) -> list[NormalizerRule]:
        ordered: list[tuple[bool, NormalizerRule]] = [
            (options.remove_zero_width, RemoveZeroWidth()),
            (options.tabs_to_spaces, TabsToSpaces()),
            (options.collapse_spaces, CollapseSpaces()),
            (options.collapse_newlines, CollapseNewlines()),
            (options.trim_repeated_chars, TrimRepeatedChars()),
            (options.trim, Trim()),
            (not count_spaces, StripWhitespace()),
        ]
        return [rule for enabled, rule in ordered if enabled]

    def normalize(self, text: str) -> str:
        """Return the canonical form of `text`."""

        current = text
        for rule in self.rules:
            current = rule.apply(current)
        return current


def normalize(text: str, options: NormalizationOptions, count_spaces: bool) -> str:
    """Normalize `text` with the given options and space-counting flag."""

    return TextNormalizer(options, count_spaces).normalize(text)
