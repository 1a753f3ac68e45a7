"""Smallest free number.

Linear-time search for the smallest natural number absent from a finite
collection of non-negative integers, plus a small case-suite runner.
"""

from __future__ import annotations

from .finder import find_smallest_free as find
from .finder import find_smallest_free, search

__all__ = [
    "__version__",
    "find",
    "find_smallest_free",
    "search",
]

__version__ = "0.1.0"
