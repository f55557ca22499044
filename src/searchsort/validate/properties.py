"""
Property helpers for validating sorting and searching results.

Used by the tests and by the benchmark runner's optional sanity check.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None
    is_valid_match(seq, target, result) -> bool

Notes
-----
- Elements only need `<=`/`>` and, for the permutation checks, hashing.
- Stability cannot be inferred from values alone when equal keys are
  indistinguishable. Checking it would need (key, id) pairs; the sorters here
  make no stability promise, so it is not checked.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "is_valid_match",
]


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> Optional[int]:
    """
    Return the first index i where xs[i] > xs[i+1], or None if nondecreasing.

    Handy for error messages:
        i = first_nondecreasing_violation_index(out)
        assert i is None, f"out of order at {i}: {out[i]} > {out[i + 1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for every adjacent pair."""
    return first_nondecreasing_violation_index(xs) is None


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Map each value to count_in_a - count_in_b, keeping only nonzero entries.

    An empty dict means `a` and `b` are the same multiset.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {value: d for value, d in diff.items() if d != 0}


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True iff `a` and `b` hold exactly the same multiset of values."""
    return len(a) == len(b) and not permutation_counter_diff(a, b)


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Raise AssertionError if a read-only operation changed its input.

    The message names the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x!r}, after={y!r}")


def is_valid_match(seq: Sequence[Any], target: Any, result: Optional[int]) -> bool:
    """
    Check a search result against `seq`.

    None is valid only when `target` does not occur; an index is valid when it
    is in range and holds an element equal to `target`.
    """
    if result is None:
        return all(x != target for x in seq)
    return 0 <= result < len(seq) and seq[result] == target
