"""
Benchmark harness public API.

Re-exports:
    time_sort_call, time_search_calls   (searchsort.bench.measure)

The experiment runner lives in searchsort.bench.runner and is not imported
here, so importing the timing helpers does not pull in pandas or rich.
"""

from .measure import time_search_calls, time_sort_call

__all__ = ["time_sort_call", "time_search_calls"]
