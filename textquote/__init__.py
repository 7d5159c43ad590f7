"""Top-level package for textquote.

This package counts characters of new and reused text after configurable
normalization and prices them against a selectable tariff. The core entry
points are `normalize` and `calculate`.
"""

from .calculator import calculate
from .text.normalizer import normalize

__all__ = ["calculate", "normalize", "__version__"]

__version__ = "0.1.0"
