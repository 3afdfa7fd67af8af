"""Aggregation library entrypoint."""

from __future__ import annotations

from . import aggregate
from .aggregate import collect_values, count, length, top
from .extremum import (
    SENTINEL_GROUP_KEY,
    ExtremumAccumulator,
    ExtremumCombineFn,
    ExtremumFn,
    fold_extremum,
)
from .sample import SampleFn, sample
from .sort import sort
from .top_k import (
    COMBINER_STAGING_KEY,
    BoundedPriorityQueue,
    TopKAccumulator,
    TopKCombineFn,
    TopKFn,
    UnwrapStagingKeyFn,
)

__all__ = [
    "aggregate",
    "count",
    "length",
    "top",
    "collect_values",
    "SENTINEL_GROUP_KEY",
    "ExtremumAccumulator",
    "ExtremumCombineFn",
    "ExtremumFn",
    "fold_extremum",
    "SampleFn",
    "sample",
    "sort",
    "COMBINER_STAGING_KEY",
    "BoundedPriorityQueue",
    "TopKAccumulator",
    "TopKCombineFn",
    "TopKFn",
    "UnwrapStagingKeyFn",
]
