"""aggkit: distributive aggregations over lazy, partitioned collections."""

from __future__ import annotations

from .core import (
    EmptyAggregationError,
    Ordering,
    Pair,
    PCollection,
    PGroupedTable,
    PObject,
    PTable,
    UnsupportedTypeError,
    configure,
    get_config,
)
from .mem import MemPipeline, collection_of, table_of

__version__ = "0.1.0"

__all__ = [
    "EmptyAggregationError",
    "Ordering",
    "Pair",
    "PCollection",
    "PGroupedTable",
    "PObject",
    "PTable",
    "UnsupportedTypeError",
    "configure",
    "get_config",
    "MemPipeline",
    "collection_of",
    "table_of",
    "__version__",
]
