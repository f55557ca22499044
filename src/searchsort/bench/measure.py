"""
Timing harness for the sorting and searching algorithms.

Sorters work in place, so every sample sorts a fresh copy of the input; the
copy is made outside the timed block. A search sample is one pass of the
searcher over all queries against the same (read-only) sorted sequence.
Timing uses a monotonic high-resolution clock.

Public API (stable):
    time_sort_call(...) -> dict
    time_search_calls(...) -> dict

Returned dict schema (both functions):
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each finished sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index of the timeout
        "output": list | None,              # sorted copy / search results of the last sample
    }
"""

from __future__ import annotations

import gc
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

__all__ = ["time_sort_call", "time_search_calls"]


def _new_result(algo_name: str, repeats: int, timeout_seconds: float) -> Dict[str, Any]:
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")
    return {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
        "output": None,
    }


@contextmanager
def _gc_paused(disable_gc: bool) -> Iterator[None]:
    """Collect and disable the GC for the block; re-enable only if it was enabled."""
    was_enabled = gc.isenabled()
    if disable_gc:
        gc.collect()
        gc.disable()
    try:
        yield
    finally:
        if disable_gc and was_enabled:
            gc.enable()


def _run_samples(
    result: Dict[str, Any],
    one_sample: Callable[[], Any],
    *,
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    # `one_sample` returns (elapsed_ns, output) and does any copying itself
    # outside the timed region.
    if warmup and repeats > 0:
        try:
            one_sample()
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    threshold_ns = int(timeout_seconds * 1e9)
    with _gc_paused(disable_gc):
        for r in range(repeats):
            try:
                elapsed, output = one_sample()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            result["samples_ns"].append(int(elapsed))
            result["output"] = output
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break

    return result


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[[List[Any]], None],
    a: Sequence[Any],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated calls to the in-place sorter `algo_fn(copy_of_a)`.

    Parameters
    ----------
    algo_name : str
        Logical name used in records.
    algo_fn : Callable[[list], None]
        In-place sorter, e.g. `searchsort.sort.quick`.
    a : Sequence
        Input data. Never passed to `algo_fn` directly, so it is not mutated.
    repeats : int
        Number of timed samples.
    warmup : bool
        Make one untimed call first.
    disable_gc : bool
        Collect and disable the GC around the timed loop; restore afterwards.
    timeout_seconds : float
        If one sample exceeds this, record status="timeout" and stop sampling.
    """
    result = _new_result(algo_name, repeats, timeout_seconds)

    def one_sample():
        arg = list(a)
        t0 = time.perf_counter_ns()
        algo_fn(arg)
        t1 = time.perf_counter_ns()
        return t1 - t0, arg

    return _run_samples(
        result,
        one_sample,
        repeats=repeats,
        warmup=warmup,
        disable_gc=disable_gc,
        timeout_seconds=timeout_seconds,
    )


def time_search_calls(
    *,
    algo_name: str,
    algo_fn: Callable[[Sequence[Any], Any], Optional[int]],
    data: Sequence[Any],
    queries: Sequence[Any],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated passes of `algo_fn(data, q)` over every query `q`.

    `data` must already be sorted for every searcher except `linear`. The
    output of a sample is the list of results in query order.
    """
    result = _new_result(algo_name, repeats, timeout_seconds)

    def one_sample():
        out: List[Optional[int]] = [None] * len(queries)
        t0 = time.perf_counter_ns()
        for i, q in enumerate(queries):
            out[i] = algo_fn(data, q)
        t1 = time.perf_counter_ns()
        return t1 - t0, out

    return _run_samples(
        result,
        one_sample,
        repeats=repeats,
        warmup=warmup,
        disable_gc=disable_gc,
        timeout_seconds=timeout_seconds,
    )
