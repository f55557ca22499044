"""
Tests for dataset and query generation.

Every generator is driven by a seeded numpy Generator, so the same seed must
give the same data.
"""

from __future__ import annotations

import pathlib
import sys

import numpy as np
import pytest

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from searchsort.datasets import SUPPORTED_DISTS, make_dataset, make_queries
from searchsort.validate import is_nondecreasing

SPECS = {
    "random": {"dist": "random", "params": {"range": [-50, 50]}},
    "sorted": {"dist": "sorted", "params": {"range": [0, 10]}},
    "nearly_sorted": {"dist": "nearly_sorted", "params": {"swap_frac": 0.1}},
    "few_uniques": {"dist": "few_uniques", "params": {"k": 3, "range": [0, 1000]}},
    "reversed": {"dist": "reversed"},
}


def test_every_supported_dist_has_a_spec_here() -> None:
    assert set(SPECS) == SUPPORTED_DISTS


@pytest.mark.parametrize("name", sorted(SPECS))
@pytest.mark.parametrize("n", [0, 1, 57])
def test_length_type_and_determinism(name: str, n: int) -> None:
    a = make_dataset(n, SPECS[name], np.random.default_rng(123))
    b = make_dataset(n, SPECS[name], np.random.default_rng(123))
    assert len(a) == n
    assert all(type(x) is int for x in a)
    assert a == b


def test_random_respects_inclusive_range() -> None:
    out = make_dataset(2000, SPECS["random"], np.random.default_rng(0))
    assert min(out) >= -50 and max(out) <= 50
    assert -50 in out and 50 in out


def test_sorted_is_nondecreasing() -> None:
    out = make_dataset(500, SPECS["sorted"], np.random.default_rng(1))
    assert is_nondecreasing(out)


def test_nearly_sorted_is_a_permutation_of_range() -> None:
    out = make_dataset(100, SPECS["nearly_sorted"], np.random.default_rng(2))
    assert sorted(out) == list(range(100))
    zero = make_dataset(10, {"dist": "nearly_sorted", "params": {"swap_frac": 0.0}}, np.random.default_rng(2))
    assert zero == list(range(10))


def test_few_uniques_limits_distinct_values() -> None:
    out = make_dataset(1000, SPECS["few_uniques"], np.random.default_rng(3))
    assert 1 <= len(set(out)) <= 3
    assert all(0 <= x <= 1000 for x in out)


def test_reversed() -> None:
    assert make_dataset(5, SPECS["reversed"], np.random.default_rng(0)) == [4, 3, 2, 1, 0]


@pytest.mark.parametrize(
    "n, spec, match",
    [
        (-1, SPECS["random"], "nonnegative"),
        (1.5, SPECS["random"], "int"),
        (3, "random", "dict"),
        (3, {"dist": "zipf"}, "Unsupported"),
        (3, {"dist": "random"}, "range must be provided"),
        (3, {"dist": "random", "params": {"range": [5, 1]}}, "min > max"),
        (3, {"dist": "random", "params": {"range": [0]}}, "2-element"),
        (3, {"dist": "nearly_sorted", "params": {"swap_frac": 2}}, "swap_frac"),
        (3, {"dist": "few_uniques", "params": {}}, "k must be provided"),
        (3, {"dist": "few_uniques", "params": {"k": 0}}, "k must be an integer"),
    ],
)
def test_invalid_specs(n, spec, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        make_dataset(n, spec, np.random.default_rng(0))


# ------------------------- queries ------------------------- #

def test_queries_hit_ratio_and_misses_are_absent() -> None:
    data = sorted(make_dataset(300, {"dist": "random", "params": {"range": [0, 10_000]}}, np.random.default_rng(4)))
    queries = make_queries(data, 200, 0.25, np.random.default_rng(5))
    present = set(data)
    hits = [q for q in queries if q in present]
    assert len(queries) == 200
    assert len(hits) == 50
    assert all(type(q) is int for q in queries)


def test_queries_cover_both_ends() -> None:
    data = list(range(10, 20))
    queries = make_queries(data, 30, 0.0, np.random.default_rng(6))
    assert any(q < 10 for q in queries)
    assert any(q > 19 for q in queries)
    assert not set(queries) & set(data)


def test_queries_for_empty_data() -> None:
    assert len(make_queries([], 10, 0.5, np.random.default_rng(0))) == 10
    assert make_queries([1, 2], 0, 0.5, np.random.default_rng(0)) == []


@pytest.mark.parametrize("count, ratio", [(-1, 0.5), (10, 1.5), (10, "half")])
def test_queries_invalid(count, ratio) -> None:
    with pytest.raises(ValueError):
        make_queries([1, 2, 3], count, ratio, np.random.default_rng(0))
