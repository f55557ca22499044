"""
Dataset and query generators for the benchmark harness and tests.

Distributions (spec["dist"]):
- "random":        uniform integers from an inclusive params["range"] (required).
- "sorted":        like "random", then sorted; duplicates allowed. The input
                   the searchers expect, and a classic quicksort stress case.
- "nearly_sorted": [0, 1, ..., n-1] followed by ceil(swap_frac * n) random
                   index swaps (params["swap_frac"] in [0, 1], default 0.05).
- "few_uniques":   at most k distinct values (params["k"] >= 1) drawn from an
                   optional inclusive range (default [0, 2**32 - 1]), then
                   sampled to fill n positions.
- "reversed":      [n-1, ..., 0]; params and rng are ignored.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    make_queries(data: list[int], count: int, hit_ratio: float, rng) -> list[int]

Conventions:
- Ranges are inclusive on both ends.
- Results are plain Python lists of ints; the algorithms never see NumPy types.
- The caller owns and seeds the RNG so runs are reproducible.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "nearly_sorted",
    "few_uniques",
    "reversed",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset", "make_queries"]

_FEW_UNIQUES_DEFAULT_RANGE = (0, 4294967295)


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`.

    Parameters
    ----------
    n : int
        Number of elements (>= 0).
    spec : dict
        {"dist": <name>, "params": {...}}; see the module docstring.
    rng : numpy.random.Generator
        Caller-owned generator. Unused by "reversed".

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If `n` or `spec` is invalid or the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params") or {}

    if dist in ("random", "sorted"):
        lo, hi = _parse_range(params, dist, default=None)
        if n == 0:
            return []
        # Generator.integers is half-open; +1 makes hi inclusive.
        arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)
        if dist == "sorted":
            arr.sort()
        return arr.tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        out = list(range(n))
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps == 0:
            return out
        idxs = rng.integers(0, n, size=(num_swaps, 2))
        for i, j in idxs.tolist():
            out[i], out[j] = out[j], out[i]
        return out

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_range(params, dist, default=_FEW_UNIQUES_DEFAULT_RANGE)
        if n == 0:
            return []
        values = _draw_distinct(min(k, n, hi - lo + 1), lo, hi, rng)
        picks = rng.integers(0, len(values), size=n)
        return [values[int(t)] for t in picks]

    # "reversed"
    return list(range(n - 1, -1, -1))


def make_queries(
    data: Sequence[int], count: int, hit_ratio: float, rng: np.random.Generator
) -> List[int]:
    """
    Build `count` search targets for `data`.

    About `hit_ratio * count` targets are drawn from `data` (hits); the rest
    are values guaranteed not to occur in `data` (misses). Misses alternate
    between values below the minimum, above the maximum and, when possible,
    gaps inside the range, so all boundary paths get exercised. The result is
    shuffled.

    Raises
    ------
    ValueError
        If `count` is negative or `hit_ratio` is outside [0, 1].
    """
    if not isinstance(count, int) or count < 0:
        raise ValueError(f"queries.count must be a nonnegative int; got {count!r}")
    try:
        ratio = float(hit_ratio)
    except (TypeError, ValueError) as e:
        raise ValueError(f"queries.hit_ratio must be a float in [0.0, 1.0]; got {hit_ratio!r}") from e
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"queries.hit_ratio must be in [0.0, 1.0]; got {ratio}")

    if count == 0:
        return []
    if len(data) == 0:
        return rng.integers(-1000, 1000, size=count).tolist()

    num_hits = int(round(ratio * count))
    hits = rng.choice(np.asarray(data, dtype=np.int64), size=num_hits).tolist()

    present = set(data)
    lo, hi = min(data), max(data)
    gaps = [v for v in range(lo, min(hi, lo + 4 * count) + 1) if v not in present]
    misses: List[int] = []
    for q in range(count - num_hits):
        kind = q % 3
        if kind == 0:
            misses.append(lo - 1 - int(rng.integers(0, 1000)))
        elif kind == 1:
            misses.append(hi + 1 + int(rng.integers(0, 1000)))
        elif gaps:
            misses.append(gaps[int(rng.integers(0, len(gaps)))])
        else:
            misses.append(hi + 1)

    queries = hits + misses
    order = rng.permutation(len(queries))
    return [int(queries[i]) for i in order]


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _is_int_like(x: Any) -> bool:
    # NumPy integers come back from YAML-free callers building specs in code.
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)


def _parse_range(
    params: Dict[str, Any], dist: str, default: Tuple[int, int] | None
) -> Tuple[int, int]:
    """Parse params["range"] == [min, max] (inclusive); required when default is None."""
    if "range" not in params:
        if default is None:
            raise ValueError(f"{dist}.params.range must be provided as [min, max] (inclusive)")
        return default

    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not _is_int_like(k) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _draw_distinct(count: int, lo: int, hi: int, rng: np.random.Generator) -> List[int]:
    # Draw from `rng` (not the random module) so the result depends on the seed only.
    chosen: List[int] = []
    seen = set()
    while len(chosen) < count:
        batch = rng.integers(lo, hi + 1, size=2 * (count - len(chosen)))
        for v in batch.tolist():
            if v not in seen:
                seen.add(v)
                chosen.append(v)
                if len(chosen) == count:
                    break
    return chosen
