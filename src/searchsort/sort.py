"""
In-place sorting algorithms.

Public API (stable):
    bubble(seq: MutableSequence[T]) -> None
    quick(seq: MutableSequence[T]) -> None
    quick_partition(seq: MutableSequence[T], low: int, high: int) -> int

Conventions:
- Every sorter reorders `seq` in place into nondecreasing order and returns None.
  Callers that need the original order must copy it first.
- Only `<` and `>` are used on elements.
- Neither sorter is stable. Tests must not assume the relative order of
  equal elements is preserved.
"""

from __future__ import annotations

from typing import List, MutableSequence, Tuple

from ._ordering import T

__all__ = ["bubble", "quick", "quick_partition"]


def bubble(seq: MutableSequence[T]) -> None:
    """
    Sort `seq` in place by repeated passes of adjacent swaps.

    Each pass compares neighbours left to right and swaps pairs where the left
    element is strictly greater. Everything after the last swap of a pass is
    already in its final position, so the next pass stops there. A pass with
    no swaps ends the sort; at most len(seq) - 1 passes run.
    """
    end = len(seq)
    while end > 1:
        last_swap = 0
        for i in range(1, end):
            if seq[i - 1] > seq[i]:
                seq[i - 1], seq[i] = seq[i], seq[i - 1]
                last_swap = i
        end = last_swap


def quick_partition(seq: MutableSequence[T], low: int, high: int) -> int:
    """
    Hoare partition of the inclusive range seq[low..high] around its middle element.

    Parameters
    ----------
    seq : MutableSequence
        Sequence being sorted; modified in place.
    low, high : int
        Inclusive bounds with low < high.

    Returns
    -------
    int
        Split index p with low <= p < high such that every element of
        seq[low..p] is <= pivot and every element of seq[p+1..high] is >= pivot.
        The pivot itself is not necessarily at p.
    """
    pivot = seq[low + (high - low) // 2]
    i = low - 1
    j = high + 1
    while True:
        i += 1
        while seq[i] < pivot:
            i += 1
        j -= 1
        while seq[j] > pivot:
            j -= 1
        if i >= j:
            return j
        seq[i], seq[j] = seq[j], seq[i]


def quick(seq: MutableSequence[T]) -> None:
    """
    Sort `seq` in place with quicksort (middle pivot, Hoare partitioning).

    Pending ranges live on an explicit stack instead of the call stack. The
    larger side of every split is pushed first so the smaller side is sorted
    next, which keeps the stack at O(log n) ranges.
    """
    if len(seq) < 2:
        return

    stack: List[Tuple[int, int]] = [(0, len(seq) - 1)]
    while stack:
        low, high = stack.pop()
        if low >= high:
            continue
        p = quick_partition(seq, low, high)
        left = (low, p)
        right = (p + 1, high)
        if p - low < high - p - 1:
            stack.append(right)
            stack.append(left)
        else:
            stack.append(left)
            stack.append(right)
