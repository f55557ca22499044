"""
searchsort: classical searching and sorting algorithms over in-memory sequences.

Modules:
    searchsort.sort    -> bubble, quick (in place)
    searchsort.search  -> linear, binary, binary_first, jump_step, jump, exponential

Quick example:
    >>> from searchsort import search, sort
    >>> s = [5, 1, 91, -45, 11, 5]
    >>> sort.quick(s)
    >>> s
    [-45, 1, 5, 5, 11, 91]
    >>> search.binary_first(s, 5)
    2
    >>> search.binary_first(s, 42) is None
    True
"""

from . import search, sort

__version__ = "0.1.0"

__all__ = ["search", "sort", "__version__"]
