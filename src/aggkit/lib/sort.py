"""Total sort of a collection through a single sentinel group."""
# 说明：通过哨兵分组把所有元素汇入同一分组后整体排序。
# 约定：
# - 排序发生在单个分组上下文内，要求该分组可在一个执行单元内容纳
# - 排序稳定：相等元素保持到达顺序

from __future__ import annotations

from typing import Any

from aggkit.core.collection import PCollection
from aggkit.core.functions import DoFn, Emitter, MapFn
from aggkit.core.ordering import Ordering, OrderingLike, resolve_ordering
from aggkit.core.types import Pair, ints, table_of, unknown

from .extremum import SENTINEL_GROUP_KEY


class _TagSentinelFn(MapFn):
    def map(self, input: Any) -> Pair:
        return Pair(SENTINEL_GROUP_KEY, input)


class _SortGroupFn(DoFn):
    def __init__(self, ordering: Ordering, ascending: bool):
        self.ordering = ordering
        self.ascending = ascending

    def process(self, input: Any, emitter: Emitter) -> None:
        key = self.ordering.sort_key()
        ordered = sorted(input[1], key=key, reverse=not self.ascending)
        for value in ordered:
            emitter.emit(value)


def sort(collect: PCollection, ascending: bool = True, ordering: OrderingLike = None) -> PCollection:
    """Return a collection holding every element in sorted order."""
    resolved = resolve_ordering("sort", collect.get_ptype(), ordering)
    element_type = collect.get_ptype() or unknown()
    return (
        collect.parallel_do(_TagSentinelFn(), table_of(ints(), element_type), name="sort.tag")
        .group_by_key(1)
        .parallel_do(_SortGroupFn(resolved, ascending), element_type, name="sort")
    )
