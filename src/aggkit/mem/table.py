"""
Eager in-memory tables and groupings.

Responsibilities
  - MemTable: PTable contract over partitions of ``Pair`` elements.
  - MemGroupedTable: shuffle by key into reducer partitions and run combine
    functions.

Usage Context
  - With a single source partition the combine function runs exactly once per
    key. With several source partitions it runs map-side on each partition and
    then again reduce-side over the shuffled partial results, the way a
    distributed engine applies a combiner.

Limitations
  - Keys must be hashable; grouping an unhashable key raises PipelineError.
  - Reducer partitions are assigned round-robin by first appearance of a key.
"""
# 说明：内存执行器中的键值表与分组表实现。
# 职责：
# - group_pairs：按键首次出现顺序分组，values 保持到达顺序
# - shuffle：把分组按首次出现序号轮转分配到各 reducer 分区
# - MemTable：实现 group_by_key / keys / values 等 PTable 契约
# - MemGroupedTable：实现 combine_values（单分区时单次调用，多分区时 map 端 + reduce 端两级调用）与 ungroup
# 约定：
# - 分组表的元素为 Pair(key, values)，values 为元组

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from aggkit.core.collection import PCollection, PGroupedTable, PTable
from aggkit.core.exceptions import PipelineError
from aggkit.core.functions import CombineFn, MapFn
from aggkit.core.types import Pair, PTableType, PType, collections, table_of, unknown
from aggkit.core.utils.config import get_config
from aggkit.core.utils.logging import get_logger
from aggkit.core.utils.param_validation import positive_int

from .collection import MemCollection, Partitions, run_do_fn, to_pairs

logger = get_logger(__name__)

_validate_partitions = positive_int("num_partitions")


def group_pairs(pairs: Iterable[Any]) -> List[Pair]:
    """Group pairs by key in order of first appearance."""
    grouped: Dict[Any, List[Any]] = {}
    for key, value in pairs:
        try:
            bucket = grouped.setdefault(key, [])
        except TypeError as exc:
            raise PipelineError(
                f"grouping requires hashable keys; got {type(key).__name__} key {key!r}"
            ) from exc
        bucket.append(value)
    return [Pair(key, tuple(values)) for key, values in grouped.items()]


def shuffle(partitions: Iterable[Iterable[Any]], num_partitions: int) -> Partitions:
    """Route every pair to one reducer partition per key, grouping the values."""
    groups = group_pairs(pair for part in partitions for pair in part)
    reducers: List[List[Pair]] = [[] for _ in range(num_partitions)]
    for index, group in enumerate(groups):
        reducers[index % num_partitions].append(group)
    return tuple(tuple(part) for part in reducers)


class _KeysFn(MapFn):
    def map(self, input: Any) -> Any:
        return input[0]


class _ValuesFn(MapFn):
    def map(self, input: Any) -> Any:
        return input[1]


class MemTable(MemCollection, PTable):
    """Table of ``Pair(key, value)`` held in memory."""

    def __init__(
        self,
        pairs: Iterable[Any] = (),
        ptype: Optional[PTableType] = None,
        name: Optional[str] = None,
        *,
        partitions: Optional[int] = None,
    ):
        super().__init__(to_pairs(pairs, name), ptype or table_of(unknown(), unknown()), name, partitions=partitions)

    def get_ptype(self) -> PTableType:
        return self._ptype

    def group_by_key(self, num_partitions: Optional[int] = None) -> "MemGroupedTable":
        num = _validate_partitions(num_partitions if num_partitions is not None else get_config().mem_partitions)
        return MemGroupedTable(self, num)

    def keys(self) -> PCollection:
        return self.parallel_do(_KeysFn(), self.get_key_type(), name="keys")

    def values(self) -> PCollection:
        return self.parallel_do(_ValuesFn(), self.get_value_type(), name="values")

    def as_dict(self) -> Dict[Any, Any]:
        """Materialize into a dict; later pairs win when keys repeat."""
        return dict(self.materialize())


class MemGroupedTable(MemCollection, PGroupedTable):
    """Result of shuffling a MemTable by key."""

    def __init__(self, source: MemTable, num_partitions: int = 1):
        self._source_partitions: Partitions = source.get_partitions()
        self._table_type = source.get_ptype()
        self._num_partitions = num_partitions
        value_type = self._table_type.value_type or unknown()
        grouped_type = table_of(self._table_type.key_type or unknown(), collections(value_type))
        self._init_partitions(shuffle(self._source_partitions, num_partitions), grouped_type, source.name)

    def get_table_type(self) -> PTableType:
        return self._table_type

    def get_ptype(self) -> PType:
        return self._ptype

    def combine_values(self, combine_fn: CombineFn) -> MemTable:
        name = f"combine({combine_fn.__class__.__name__})"
        if len(self._source_partitions) <= 1:
            reduced = run_do_fn(self._partitions, combine_fn, name)
        else:
            # map 端：每个源分区先在本地分组并组合一次
            local = [
                to_pairs(out, name)
                for out in run_do_fn(tuple(tuple(group_pairs(part)) for part in self._source_partitions), combine_fn, name)
            ]
            # reduce 端：对局部结果重新洗牌后再组合一次
            reduced = run_do_fn(shuffle(local, self._num_partitions), combine_fn, name)
        logger.debug("%s over %d source partitions", name, len(self._source_partitions))
        return MemTable.from_partitions([to_pairs(out, name) for out in reduced], self._table_type, name)

    def ungroup(self) -> MemTable:
        flattened = [
            tuple(Pair(key, value) for key, values in part for value in values)
            for part in self._partitions
        ]
        return MemTable.from_partitions(flattened, self._table_type, self._name)

    def union(self, *others: PCollection) -> PCollection:
        raise PipelineError("grouped tables cannot be unioned; ungroup() first")
