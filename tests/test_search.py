"""
Correctness tests for the searchers against the bisect oracle.

Targets:
    searchsort.search.linear
    searchsort.search.binary
    searchsort.search.binary_first
    searchsort.search.jump_step / jump
    searchsort.search.exponential

What we check:
- Present targets: the returned index holds the target
- binary_first (and linear) return the lowest such index
- Absent targets, including below/above every element: None
- Empty sequences: None without touching any element
- Searchers never mutate their input
"""

from __future__ import annotations

import pathlib
import sys
from typing import List

import pytest
from hypothesis import given, settings, strategies as st

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from searchsort import search, sort
from searchsort.validate import assert_no_mutation, is_valid_match, oracle_first_index

SEARCHERS = [
    search.linear,
    search.binary,
    search.binary_first,
    search.jump,
    search.exponential,
]
searcher_param = pytest.mark.parametrize("searcher", SEARCHERS, ids=lambda f: f.__name__)


class Untouchable(list):
    """A list whose elements must not be read."""

    def __getitem__(self, i):
        raise AssertionError(f"element {i!r} was read")


# ------------------------- unit tests (deterministic) ------------------------- #

def test_spec_example() -> None:
    s = [5, 1, 91, -45, 11, 5]
    sort.quick(s)
    assert s == [-45, 1, 5, 5, 11, 91]
    assert search.binary_first(s, 5) == 2
    assert search.binary_first(s, 42) is None


@searcher_param
@pytest.mark.parametrize("target", [0, 5, -1, 10**9])
def test_empty_sequence_returns_none(searcher, target: int) -> None:
    assert searcher([], target) is None


@searcher_param
def test_empty_sequence_is_never_read(searcher) -> None:
    assert searcher(Untouchable(), 3) is None


@searcher_param
def test_single_element(searcher) -> None:
    assert searcher([4], 4) == 0
    assert searcher([4], 3) is None
    assert searcher([4], 5) is None


@searcher_param
def test_targets_outside_the_range(searcher) -> None:
    primes = [1, 2, 3, 5, 7, 11, 13, 17]
    assert searcher(primes, 0) is None
    assert searcher(primes, 18) is None
    assert searcher(primes, 8) is None
    assert searcher(primes, 1) == 0
    assert searcher(primes, 17) == 7


def test_linear_unsorted() -> None:
    assert search.linear([0, 5, -7, 100, 67, -23], -7) == 2
    assert search.linear([11, -25, 12, 85, -8], 6) is None
    assert search.linear([3, 1, 3], 3) == 0


def test_binary_finds_a_match() -> None:
    fib = [1, 1, 2, 3, 5, 8, 13, 21]
    assert search.binary(fib, 5) == 4
    assert search.binary(fib, 21) == 7
    assert search.binary(fib, 1) in (0, 1)


@pytest.mark.parametrize(
    "seq, target, expected",
    [
        ([1, 3, 3, 3, 7], 3, 1),
        ([1, 1, 2, 3], 1, 0),
        ([2, 2, 2, 2, 2, 2, 2], 2, 0),
        ([0, 1, 2, 4, 4, 4, 4, 4, 9], 4, 3),
        ([1, 2, 3], 3, 2),
    ],
)
def test_binary_first_returns_leftmost(seq: List[int], target: int, expected: int) -> None:
    assert search.binary_first(seq, target) == expected


def test_jump_example() -> None:
    squares = [1, 4, 9, 16, 25, 36, 49]
    assert search.jump(squares, 36) == 5
    assert search.jump(squares, 5) is None
    assert search.jump([1, 5, 7, 15, 31, 32, 45], 15) == 3


@pytest.mark.parametrize("step", [1, 2, 3, 4, 7, 8, 100])
def test_jump_step_any_block_size(step: int) -> None:
    seq = [1, 4, 9, 16, 25, 36, 49]
    for i, value in enumerate(seq):
        assert search.jump_step(seq, value, step) == i
    for missing in (0, 2, 10, 37, 50):
        assert search.jump_step(seq, missing, step) is None


@pytest.mark.parametrize("step", [0, -1])
def test_jump_step_rejects_non_positive_step(step: int) -> None:
    with pytest.raises(ValueError, match="step"):
        search.jump_step([1, 2, 3], 2, step)


def test_jump_finds_target_on_block_boundary() -> None:
    seq = list(range(0, 100, 3))  # 34 elements, block size 5
    for boundary in range(0, len(seq), 5):
        assert search.jump(seq, seq[boundary]) == boundary


def test_exponential_bracket_edges() -> None:
    seq = list(range(0, 40, 2))  # 20 elements
    for i, value in enumerate(seq):
        assert search.exponential(seq, value) == i
    assert search.exponential(seq, -2) is None
    assert search.exponential(seq, 41) is None
    assert search.exponential(seq, 17) is None


@searcher_param
def test_strings(searcher) -> None:
    words = ["apple", "banana", "cherry", "fig", "pear"]
    assert searcher(words, "fig") == 3
    assert searcher(words, "grape") is None


@searcher_param
def test_tuple_input(searcher) -> None:
    assert searcher((1, 2, 4, 8, 16, 32), 8) == 3
    assert searcher((1, 2, 4, 8, 16, 32), 3) is None


# ------------------------- property-based tests (randomized) ------------------------- #

sorted_lists = st.lists(st.integers(min_value=-50, max_value=50), max_size=200).map(sorted)


@settings(deadline=None, max_examples=150)
@given(sorted_lists, st.data())
def test_property_present_targets(s: List[int], data) -> None:
    if not s:
        return
    target = data.draw(st.sampled_from(s))
    before = list(s)
    for searcher in SEARCHERS:
        result = searcher(s, target)
        assert result is not None and s[result] == target, searcher.__name__
    assert search.binary_first(s, target) == oracle_first_index(s, target)
    assert search.linear(s, target) == oracle_first_index(s, target)
    assert_no_mutation(before, s)


@settings(deadline=None, max_examples=150)
@given(sorted_lists, st.integers(min_value=-60, max_value=60))
def test_property_any_target(s: List[int], target: int) -> None:
    for searcher in SEARCHERS:
        assert is_valid_match(s, target, searcher(s, target)), searcher.__name__


@settings(deadline=None, max_examples=100)
@given(sorted_lists, st.integers(min_value=-60, max_value=60), st.integers(min_value=1, max_value=30))
def test_property_jump_step(s: List[int], target: int, step: int) -> None:
    assert is_valid_match(s, target, search.jump_step(s, target, step))


@settings(deadline=None, max_examples=100)
@given(st.lists(st.integers(min_value=-50, max_value=50), max_size=100), st.integers(min_value=-60, max_value=60))
def test_property_linear_matches_list_index(s: List[int], target: int) -> None:
    expected = s.index(target) if target in s else None
    assert search.linear(s, target) == expected
