"""Smallest free number search.

Finds the smallest natural number absent from a finite collection of
non-negative integers in linear time, without sorting the input
(Bird, *Pearls of Functional Algorithm Design*, chapter 1).

The search keeps a window ``[start, start + length)`` that is known to hold
the answer. Each step splits the working values around the partition value
``pv = start + 1 + length // 2``: if every integer in ``[start, pv)`` is
present the answer lies at or above ``pv``, otherwise below it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchStep:
    start: int
    length: int
    pv: int
    left_len: int
    in_right: bool


@dataclass(frozen=True)
class SearchResult:
    value: int
    steps: tuple[SearchStep, ...]


_INT64_MAX = int(np.iinfo(np.int64).max)


def _negative_error(n_neg: int) -> ValueError:
    return ValueError(f"numbers must be non-negative; found {n_neg} negative values")


def _naturals_from_items(items: Sequence[object]) -> np.ndarray:
    # Values above int64 max can never be the answer nor change it (the
    # answer is at most len(items)), so they are dropped rather than cast.
    kept: list[int] = []
    n_neg = 0
    for i, x in enumerate(items):
        if isinstance(x, (list, tuple, np.ndarray)):
            raise ValueError(f"numbers must be 1D, got a sequence at position {i}")
        if isinstance(x, (bool, np.bool_)) or not isinstance(x, (int, np.integer)):
            raise TypeError(f"numbers must be integers, got {x!r} at position {i}")
        if x < 0:
            n_neg += 1
        elif x <= _INT64_MAX:
            kept.append(int(x))

    if n_neg:
        raise _negative_error(n_neg)
    return np.asarray(kept, dtype=np.int64)


def _as_naturals(numbers: Sequence[int] | np.ndarray) -> np.ndarray:
    if not isinstance(numbers, np.ndarray):
        return _naturals_from_items(numbers)

    arr = numbers
    if arr.ndim != 1:
        raise ValueError(f"numbers must be 1D, got {arr.ndim} dimensions")
    if arr.size == 0:
        return np.empty(0, dtype=np.int64)
    if arr.dtype == np.object_:
        return _naturals_from_items(arr.tolist())

    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"numbers must be integers, got dtype {arr.dtype}")

    if np.issubdtype(arr.dtype, np.unsignedinteger):
        arr = arr[arr <= np.uint64(_INT64_MAX)]

    arr_int = arr.astype(np.int64, copy=False)
    n_neg = int(np.sum(arr_int < 0))
    if n_neg:
        raise _negative_error(n_neg)

    return arr_int


def partition_value(start: int, length: int) -> int:
    """Midpoint used to split the window ``[start, start + length)``."""

    return start + 1 + length // 2


def partition(values: np.ndarray, pv: int) -> tuple[np.ndarray, np.ndarray]:
    """Split ``values`` into (``< pv``, ``>= pv``), keeping input order."""

    below = values < pv
    return values[below], values[~below]


def search(
    numbers: Sequence[int] | np.ndarray, *, record_steps: bool = True
) -> SearchResult:
    # The window arithmetic counts values, so the working set must be
    # distinct. pd.unique is hash based and does not sort.
    values = pd.unique(_as_naturals(numbers))
    start = 0
    length = int(values.size)
    steps: list[SearchStep] = []

    while length > 0:
        pv = partition_value(start, length)
        left, right = partition(values, pv)
        left_len = int(left.size)
        in_right = start + left_len == pv

        step = SearchStep(
            start=start, length=length, pv=pv, left_len=left_len, in_right=in_right
        )
        logger.debug("search step %s", step)
        if record_steps:
            steps.append(step)

        if in_right:
            values, start, length = right, pv, length - left_len
        else:
            values, length = left, left_len

    return SearchResult(value=int(start), steps=tuple(steps))


def find_smallest_free(numbers: Sequence[int] | np.ndarray) -> int:
    """Return the smallest non-negative integer not present in ``numbers``.

    ``numbers`` may be any 1D sequence or NumPy array of non-negative
    integers, in any order, with duplicates. An empty collection yields 0.

    >>> find_smallest_free([0, 1, 2, 3, 5, 7, 9])
    4
    """

    return search(numbers, record_steps=False).value
