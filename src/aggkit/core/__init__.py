"""Entry point for the core collection contracts and shared utilities."""

from __future__ import annotations

from .collection import PCollection, PGroupedTable, PTable
from .exceptions import (
    AggregationError,
    EmptyAggregationError,
    PipelineError,
    StaleValueError,
    UnsupportedTypeError,
)
from .functions import (
    Accumulator,
    AccumulatingCombineFn,
    AccumulatingDoFn,
    CombineFn,
    DoFn,
    Emitter,
    ExtractKeyFn,
    FilterFn,
    MapFn,
    MapValuesFn,
    SumCombineFn,
    sum_floats,
    sum_longs,
)
from .ordering import Ordering, PairValueComparator, resolve_ordering
from .pobject import CollectionPObject, FirstElementPObject, PObject
from .types import (
    Pair,
    PTableType,
    PType,
    booleans,
    collections,
    floats,
    infer_ptype,
    ints,
    longs,
    pairs,
    records,
    strings,
    table_of,
    mixed,
    unknown,
)
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    configure,
    get_config,
    get_logger,
)

__all__ = [
    "PCollection",
    "PTable",
    "PGroupedTable",
    "AggregationError",
    "EmptyAggregationError",
    "PipelineError",
    "StaleValueError",
    "UnsupportedTypeError",
    "Accumulator",
    "AccumulatingCombineFn",
    "AccumulatingDoFn",
    "CombineFn",
    "DoFn",
    "Emitter",
    "ExtractKeyFn",
    "FilterFn",
    "MapFn",
    "MapValuesFn",
    "SumCombineFn",
    "sum_floats",
    "sum_longs",
    "Ordering",
    "PairValueComparator",
    "resolve_ordering",
    "PObject",
    "FirstElementPObject",
    "CollectionPObject",
    "Pair",
    "PType",
    "PTableType",
    "booleans",
    "collections",
    "floats",
    "infer_ptype",
    "ints",
    "longs",
    "pairs",
    "records",
    "strings",
    "table_of",
    "mixed",
    "unknown",
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "get_config",
    "get_logger",
]
