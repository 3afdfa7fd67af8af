"""
Distributive aggregations over lazy collections.

Responsibilities
  - count / length: integer-sum combines keyed by element or by a sentinel key.
  - max / min: per-partition extremum folding reused as the combine function.
  - top: two-level bounded top-K with a combiner staging key.
  - collect_values: per-key realized lists of detached values.

Usage Context
  - Every function is written only against ``PCollection`` / ``PTable`` /
    ``PGroupedTable``; any executor honoring those contracts may run them.
  - Ordering checks and argument validation happen here, before any stage runs;
    emptiness surfaces only when a scalar result is resolved.

Limitations
  - Scalar results take the first value of the sentinel group; executors are
    expected to deliver that group as a single combined value.
"""
# 说明：基于惰性集合契约实现的可分布式聚合函数库。
# 职责：
# - count / length：按元素或哨兵键映射为 (key, 1)，分组后以整数求和组合
# - max / min：分区内极值折叠，组合阶段复用同一折叠逻辑，结果包装为延迟标量
# - top：本地有界截断 + 组合阶段再截断 + 去除暂存键的三段式 Top-K
# - collect_values：按键物化所有值，插入前逐个 detach 防止复用缓冲区导致的静默损坏
# 约定：
# - 类型与参数错误在构建期快速失败；空集合错误延迟到标量解析时抛出

from __future__ import annotations

from typing import Any, Iterable, List

from aggkit.core.collection import PCollection, PTable
from aggkit.core.functions import MapFn, MapValuesFn, sum_longs
from aggkit.core.ordering import OrderingLike, resolve_ordering
from aggkit.core.pobject import FirstElementPObject, PObject
from aggkit.core.types import Pair, PType, collections, ints, longs, pairs, table_of, unknown
from aggkit.core.utils.logging import get_logger
from aggkit.core.utils.param_validation import ensure_type, positive_int, validate_arguments

from .extremum import SENTINEL_GROUP_KEY, ExtremumCombineFn, ExtremumFn
from .top_k import TopKCombineFn, TopKFn, UnwrapStagingKeyFn

__all__ = ["count", "length", "max", "min", "top", "collect_values"]

logger = get_logger(__name__)


class _CountFn(MapFn):
    def map(self, input: Any) -> Pair:
        return Pair(input, 1)


class _SentinelCountFn(MapFn):
    def map(self, input: Any) -> Pair:
        return Pair(SENTINEL_GROUP_KEY, 1)


class _CollectValuesFn(MapValuesFn):
    """Realizes a grouped value sequence, detaching every value before keeping it."""

    def __init__(self, value_type: PType):
        self.value_type = value_type

    def map_value(self, values: Iterable[Any]) -> List[Any]:
        return [self.value_type.detach(value) for value in values]


def _element_type(collect: PCollection) -> PType:
    ptype = collect.get_ptype() or unknown()
    # 表的元素作为普通值参与聚合时按 Pair 类型处理
    if ptype.is_table():
        return pairs(ptype.key_type or unknown(), ptype.value_type or unknown())
    return ptype


def count(collect: PCollection) -> PTable:
    """Map each distinct element to the number of its occurrences."""
    return (
        collect.parallel_do(_CountFn(), table_of(_element_type(collect), longs()), name="Aggregate.count")
        .group_by_key()
        .combine_values(sum_longs())
    )


def length(collect: PCollection) -> PObject:
    """Total number of elements, as a deferred scalar."""
    count_table = (
        collect.parallel_do(_SentinelCountFn(), table_of(ints(), longs()), name="Aggregate.length")
        .group_by_key()
        .combine_values(sum_longs())
    )
    return FirstElementPObject(count_table.values())


def _extremum(collect: PCollection, operation: str, maximize: bool, ordering: OrderingLike) -> PObject:
    resolved = resolve_ordering(operation, collect.get_ptype(), ordering)
    logger.debug("building %s over %s with %r", operation, collect.name, resolved)
    candidates = collect.parallel_do(
        ExtremumFn(resolved, maximize),
        table_of(ints(), _element_type(collect)),
        name=operation,
    )
    combined = candidates.group_by_key(1).combine_values(ExtremumCombineFn(resolved, maximize))
    return FirstElementPObject(combined.values())


def max(collect: PCollection, ordering: OrderingLike = None) -> PObject:
    """Largest element; raises UnsupportedTypeError now and EmptyAggregationError on resolution."""
    return _extremum(collect, "max", True, ordering)


def min(collect: PCollection, ordering: OrderingLike = None) -> PObject:
    """Smallest element; raises UnsupportedTypeError now and EmptyAggregationError on resolution."""
    return _extremum(collect, "min", False, ordering)


@validate_arguments({"limit": positive_int("limit")})
def top(
    ptable: PTable,
    limit: int,
    maximize: bool = True,
    ordering: OrderingLike = None,
    by_key: bool = True,
) -> PTable:
    """
    Keep the ``limit`` best values of each key, best first.

    Args:
        ptable: Table whose values are ranked.
        limit: Number of survivors per key (per table when ``by_key`` is False).
        maximize: True keeps the largest values, False the smallest.
        ordering: Optional explicit ordering of the values.
        by_key: Rank each key's values separately; False ranks the whole table
            together and keeps ``limit`` pairs overall.
    """
    ensure_type(ptable, (PTable,), label="ptable")
    resolved = resolve_ordering("top", ptable.get_value_type(), ordering)
    base = ptable.get_ptype()
    staged = table_of(ints(), pairs(ptable.get_key_type() or unknown(), ptable.get_value_type() or unknown()))
    logger.debug("building top%d (maximize=%s, by_key=%s) over %s", limit, maximize, by_key, ptable.name)
    return (
        ptable.parallel_do(TopKFn(limit, maximize, resolved, by_key), staged, name=f"top{limit}map")
        .group_by_key(1)
        .combine_values(TopKCombineFn(limit, maximize, resolved, by_key))
        .parallel_do(UnwrapStagingKeyFn(), base, name=f"top{limit}reduce")
    )


def collect_values(ptable: PTable) -> PTable:
    """Map each key to a list of all its values."""
    ensure_type(ptable, (PTable,), label="ptable")
    value_type = ptable.get_value_type() or unknown()
    result_type = table_of(ptable.get_key_type() or unknown(), collections(value_type))
    return ptable.group_by_key().parallel_do(_CollectValuesFn(value_type), result_type, name="collect")
