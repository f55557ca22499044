"""
Searching algorithms over read-only sequences.

Public API (stable):
    linear(seq, target) -> int | None
    binary(seq, target) -> int | None
    binary_first(seq, target) -> int | None
    jump_step(seq, target, step) -> int | None
    jump(seq, target) -> int | None
    exponential(seq, target) -> int | None

Conventions:
- The result is the index of an element equal to `target`, or None.
- Everything except `linear` requires `seq` to be sorted in nondecreasing
  order. This is never checked (that would cost O(n)); on unsorted input the
  result is unspecified but no index outside the sequence is ever read.
- An empty sequence returns None without any comparison.
- `seq` is never mutated, so concurrent searches over the same sequence are safe.
"""

from __future__ import annotations

from math import isqrt
from typing import Optional, Sequence

from ._ordering import T

__all__ = [
    "linear",
    "binary",
    "binary_first",
    "jump_step",
    "jump",
    "exponential",
]


def linear(seq: Sequence[T], target: T) -> Optional[int]:
    """Return the index of the first element equal to `target`, scanning from 0."""
    for i, value in enumerate(seq):
        if value == target:
            return i
    return None


def binary(seq: Sequence[T], target: T) -> Optional[int]:
    """
    Binary search returning the first match it lands on.

    With duplicates this is *a* matching index, not necessarily the first one;
    use `binary_first` for that.
    """
    low, high = 0, len(seq)
    while low < high:
        mid = (low + high) // 2
        value = seq[mid]
        if value == target:
            return mid
        if target < value:
            high = mid
        else:
            low = mid + 1
    return None


def _leftmost(seq: Sequence[T], target: T, low: int, high: int) -> Optional[int]:
    # Narrow [low, high) and keep going left after every hit.
    found = None
    while low < high:
        mid = (low + high) // 2
        value = seq[mid]
        if value == target:
            found = mid
            high = mid
        elif target < value:
            high = mid
        else:
            low = mid + 1
    return found


def binary_first(seq: Sequence[T], target: T) -> Optional[int]:
    """
    Return the lowest index holding `target` in a sorted sequence, or None.

    >>> binary_first([1, 3, 3, 3, 7], 3)
    1
    """
    if not seq:
        return None
    return _leftmost(seq, target, 0, len(seq))


def jump_step(seq: Sequence[T], target: T, step: int) -> Optional[int]:
    """
    Jump search with an explicit block size.

    Jumps over block boundaries step, 2*step, ... while the boundary element
    is less than `target`, then scans the last block linearly. The scan covers
    [previous boundary, current boundary] inclusively and stops at the first
    element greater than `target`.

    Raises
    ------
    ValueError
        If `step` is smaller than 1.
    """
    if step < 1:
        raise ValueError(f"step must be >= 1; got {step!r}")

    n = len(seq)
    if n == 0:
        return None

    prev, boundary = 0, step
    while boundary < n and seq[boundary] < target:
        prev, boundary = boundary, boundary + step

    for i in range(prev, min(boundary, n - 1) + 1):
        value = seq[i]
        if value == target:
            return i
        if target < value:
            break
    return None


def jump(seq: Sequence[T], target: T) -> Optional[int]:
    """
    Jump search with block size floor(sqrt(n)) (at least 1).

    >>> jump([1, 4, 9, 16, 25, 36, 49], 36)
    5
    """
    return jump_step(seq, target, max(1, isqrt(len(seq))))


def exponential(seq: Sequence[T], target: T) -> Optional[int]:
    """
    Exponential search: double an index from 1 to bracket `target`, then
    binary-search the bracket [bound // 2, min(bound, n - 1)].
    """
    n = len(seq)
    if n == 0:
        return None
    if seq[0] == target:
        return 0

    bound = 1
    while bound < n and seq[bound] < target:
        bound *= 2

    return _leftmost(seq, target, bound // 2, min(bound, n - 1) + 1)
