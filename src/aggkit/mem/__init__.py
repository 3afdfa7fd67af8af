"""In-memory reference executor."""

from __future__ import annotations

from .collection import MemCollection, run_do_fn, split_partitions
from .emitter import InMemoryEmitter
from .pipeline import MemPipeline, collection_of, table_of
from .table import MemGroupedTable, MemTable, group_pairs, shuffle

__all__ = [
    "MemCollection",
    "MemTable",
    "MemGroupedTable",
    "MemPipeline",
    "InMemoryEmitter",
    "collection_of",
    "table_of",
    "run_do_fn",
    "split_partitions",
    "group_pairs",
    "shuffle",
]
