from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FreeNumberCase:
    """A labelled input together with its expected smallest free number."""

    label: str
    numbers: tuple[int, ...]
    expected: int
    group: str = "cases"


def generate_list(n: int, e: int) -> list[int]:
    """All naturals ``0..n`` (inclusive) except ``e``."""

    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    if not (0 <= e <= n):
        raise ValueError(f"e must be in [0, {n}], got {e}")
    return [x for x in range(n + 1) if x != e]


def missing_single_case(
    n: int, e: int, *, group: str = "missing_single"
) -> FreeNumberCase:
    return FreeNumberCase(
        label=f"Missing {e}",
        numbers=tuple(generate_list(n, e)),
        expected=e,
        group=group,
    )


def missing_each_cases(n: int) -> list[FreeNumberCase]:
    """One case per value in ``0..n``, each missing exactly that value."""

    return [missing_single_case(n, x, group="missing_each") for x in range(n + 1)]


def default_cases() -> list[FreeNumberCase]:
    explicit = [
        FreeNumberCase("Empty", (), 0),
        FreeNumberCase("Single", (1,), 0),
        FreeNumberCase("Basic", (0, 1, 2, 3, 5, 7, 9), 4),
        FreeNumberCase("Basic Left", (0, 2, 3, 4, 5, 6, 7, 8, 9), 1),
        FreeNumberCase("Unsorted", (9, 0, 4, 6, 1, 3, 5, 2, 8), 7),
    ]
    singles = [
        missing_single_case(1000, 756),
        missing_single_case(1000, 666),
        missing_single_case(1000000, 456789),
    ]
    return explicit + singles + missing_each_cases(100)
