from __future__ import annotations

import numpy as np
import pytest

from minfree import find
from minfree.finder import (
    SearchStep,
    find_smallest_free,
    partition,
    partition_value,
    search,
)


def _oracle(xs: list[int]) -> int:
    present = set(xs)
    k = 0
    while k in present:
        k += 1
    return k


@pytest.mark.parametrize(
    ("numbers", "expected"),
    [
        ([], 0),
        ([1], 0),
        ([0, 1, 2, 3, 5, 7, 9], 4),
        ([0, 2, 3, 4, 5, 6, 7, 8, 9], 1),
        ([9, 0, 4, 6, 1, 3, 5, 2, 8], 7),
        ([0], 1),
        ([5, 6, 7], 0),
    ],
)
def test_find_known_scenarios(numbers: list[int], expected: int) -> None:
    assert find_smallest_free(numbers) == expected


def test_find_is_exported_at_package_level() -> None:
    assert find([0, 1, 2, 4]) == 3


def test_find_large_list_missing_one_value() -> None:
    xs = [x for x in range(1000) if x != 756]
    assert find_smallest_free(xs) == 756


def test_no_gaps_returns_length() -> None:
    for n in (1, 2, 7, 64, 1000):
        assert find_smallest_free(list(range(n))) == n


def test_single_removal_for_every_position() -> None:
    n = 60
    for e in range(n + 1):
        xs = [x for x in range(n + 1) if x != e]
        assert find_smallest_free(xs) == e


def test_order_independence() -> None:
    rng = np.random.default_rng(7)
    xs = [x for x in range(200) if x not in (13, 150)]
    for _ in range(5):
        shuffled = rng.permutation(xs).tolist()
        assert find_smallest_free(shuffled) == 13


def test_duplicates_do_not_change_answer() -> None:
    assert find_smallest_free([0, 0]) == 1
    assert find_smallest_free([0, 1, 1, 2, 2, 2, 4]) == 3
    assert find_smallest_free([1, 1, 1]) == 0

    xs = [3, 0, 1, 5]
    assert find_smallest_free(xs + xs + [0, 0]) == find_smallest_free(xs) == 2


def test_values_far_outside_window_are_allowed() -> None:
    assert find_smallest_free([10**12, 0, 2**40]) == 1
    assert find_smallest_free([0, 1, 2, 1000, 999]) == 3


def test_matches_set_oracle_on_random_inputs() -> None:
    rng = np.random.default_rng(42)
    for _ in range(300):
        n = int(rng.integers(0, 40))
        hi = int(rng.integers(1, 60))
        xs = rng.integers(0, hi, size=n).tolist()
        result = find_smallest_free(xs)
        assert result == _oracle(xs)
        assert result not in xs
        assert all(k in xs for k in range(result))


def test_accepts_numpy_integer_arrays() -> None:
    arr = np.array([3, 0, 1], dtype=np.uint8)
    assert find_smallest_free(arr) == 2
    assert find_smallest_free(np.arange(10, dtype=np.int32)) == 10


def test_input_is_not_mutated() -> None:
    xs = [4, 2, 0, 1]
    arr = np.array(xs)
    find_smallest_free(xs)
    find_smallest_free(arr)
    assert xs == [4, 2, 0, 1]
    assert arr.tolist() == [4, 2, 0, 1]


def test_partition_value_is_window_midpoint() -> None:
    assert partition_value(0, 6) == 4
    assert partition_value(0, 3) == 2
    assert partition_value(2, 1) == 3
    assert partition_value(3, 0) == 4


def test_partition_keeps_order() -> None:
    left, right = partition(np.array([9, 0, 4, 6, 1, 3]), 4)
    assert left.tolist() == [0, 1, 3]
    assert right.tolist() == [9, 4, 6]


def test_search_records_steps_of_worked_example() -> None:
    result = search([0, 1, 2, 4, 5, 6])
    assert result.value == 3
    assert result.steps == (
        SearchStep(start=0, length=6, pv=4, left_len=3, in_right=False),
        SearchStep(start=0, length=3, pv=2, left_len=2, in_right=True),
        SearchStep(start=2, length=1, pv=3, left_len=1, in_right=True),
    )


def test_search_window_shrinks_every_step() -> None:
    result = search(list(range(1000)))
    assert result.value == 1000
    lengths = [s.length for s in result.steps]
    assert all(a > b for a, b in zip(lengths, lengths[1:]))
    assert len(result.steps) <= 12


def test_search_without_steps() -> None:
    result = search([1, 0], record_steps=False)
    assert result.value == 2
    assert result.steps == ()


def test_empty_input_has_no_steps() -> None:
    assert search([]).value == 0
    assert search([]).steps == ()


def test_rejects_negative_values() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        find_smallest_free([0, -1, 2])


@pytest.mark.parametrize(
    "bad",
    [[1.5, 2.0], [True, False], ["a"], [0, True, 2], [0, np.bool_(True)]],
)
def test_rejects_non_integers(bad: list) -> None:
    with pytest.raises(TypeError):
        find_smallest_free(bad)


def test_rejects_nested_input() -> None:
    with pytest.raises(ValueError, match="1D"):
        find_smallest_free([[0, 1], [2, 3]])


def test_rejects_non_integer_numpy_arrays() -> None:
    with pytest.raises(TypeError):
        find_smallest_free(np.array([0.0, 1.0]))
    with pytest.raises(TypeError):
        find_smallest_free(np.array([True, False]))
    with pytest.raises(ValueError, match="1D"):
        find_smallest_free(np.zeros((2, 2), dtype=np.int64))


def test_values_beyond_int64_are_ignored() -> None:
    assert find_smallest_free([0, 2**63]) == 1
    assert find_smallest_free([1, 0, 2**70, 2]) == 3
    assert find_smallest_free([2**64]) == 0


def test_unsigned_values_beyond_int64_are_ignored() -> None:
    arr = np.array([0, 2**63, 1, 2**64 - 1], dtype=np.uint64)
    assert find_smallest_free(arr) == 2


def test_object_arrays_are_checked_per_element() -> None:
    assert find_smallest_free(np.array([0, 2**65, 1], dtype=object)) == 2
    with pytest.raises(TypeError):
        find_smallest_free(np.array([0, True], dtype=object))
    with pytest.raises(ValueError, match="non-negative"):
        find_smallest_free(np.array([0, -(2**65)], dtype=object))
