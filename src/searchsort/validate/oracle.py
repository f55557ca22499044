"""
Oracles for sorting and searching correctness.

Sorting: Python's built-in `sorted()` is the ground truth. It is deterministic,
never mutates its input and returns a new list.

Searching: `bisect.bisect_left` on a sorted sequence gives the leftmost slot
for a target, which is the reference for `binary_first` and the membership
reference for every other searcher.

Public API (stable):
    oracle_sort(seq) -> list
    equals_oracle(seq, out) -> bool
    oracle_first_index(seq, target) -> int | None
    oracle_contains(seq, target) -> bool
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Any, List, Optional, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "oracle_first_index",
    "oracle_contains",
]


def oracle_sort(seq: Sequence[Any]) -> List[Any]:
    """Return a new list with the elements of `seq` in nondecreasing order."""
    return sorted(seq)


def equals_oracle(seq: Sequence[Any], out: Sequence[Any]) -> bool:
    """True iff `out` equals `oracle_sort(seq)` element-wise."""
    return list(out) == oracle_sort(seq)


def oracle_first_index(seq: Sequence[Any], target: Any) -> Optional[int]:
    """
    Return the lowest index of `target` in the sorted sequence `seq`, or None.

    `seq` must already be sorted; this is the caller's responsibility.
    """
    i = bisect_left(seq, target)
    if i < len(seq) and seq[i] == target:
        return i
    return None


def oracle_contains(seq: Sequence[Any], target: Any) -> bool:
    """Membership test for a sorted sequence in O(log n)."""
    return oracle_first_index(seq, target) is not None
