"""
Scalar extremum folding shared by ``max`` and ``min``.

The same accumulator runs inside each partition (through ``ExtremumFn``) and
again over the partition-local candidates after the shuffle (through
``ExtremumCombineFn``): the extremum of a union equals the extremum of the
extrema of its parts, so any number of combine levels converges to the same
value.
"""
# 说明：max/min 共用的标量极值折叠逻辑，分区内与组合阶段复用同一个累加器。
# 职责：
# - ExtremumAccumulator：以一次比较 O(1) 更新当前极值，未见任何元素时不输出
# - ExtremumFn：分区内折叠，cleanup 时输出带哨兵分组键的局部极值
# - ExtremumCombineFn：对哨兵分组内的候选值再次折叠
# - fold_extremum：直接对序列求极值，便于验证结合律
# 约定：
# - 相等元素保留先到达者

from __future__ import annotations

from typing import Any, Iterable, Optional

from aggkit.core.exceptions import EmptyAggregationError
from aggkit.core.functions import Accumulator, AccumulatingCombineFn, AccumulatingDoFn
from aggkit.core.ordering import Ordering
from aggkit.core.types import Pair

SENTINEL_GROUP_KEY = 1
# 哨兵分组键：将标量聚合的所有局部结果强制汇入同一个分组，使多级组合最终收敛到一个值


class ExtremumAccumulator(Accumulator):
    """Running maximum (or minimum) under an explicit ordering."""

    __slots__ = ("ordering", "maximize", "_value", "_seen")

    def __init__(self, ordering: Ordering, maximize: bool = True):
        self.ordering = ordering
        self.maximize = maximize
        self._value: Any = None
        self._seen = False

    def add(self, value: Any) -> None:
        if not self._seen:
            self._value = value
            self._seen = True
            return
        cmp = self.ordering.compare(self._value, value)
        if (cmp < 0) if self.maximize else (cmp > 0):
            self._value = value

    def results(self) -> Iterable[Any]:
        return (self._value,) if self._seen else ()

    @property
    def value(self) -> Optional[Any]:
        return self._value


class ExtremumFn(AccumulatingDoFn):
    """Partition-local extremum, emitted as ``Pair(SENTINEL_GROUP_KEY, value)``."""

    def __init__(self, ordering: Ordering, maximize: bool = True):
        self.ordering = ordering
        self.maximize = maximize

    def create_accumulator(self) -> Accumulator:
        return ExtremumAccumulator(self.ordering, self.maximize)

    def tag(self, result: Any) -> Pair:
        return Pair(SENTINEL_GROUP_KEY, result)


class ExtremumCombineFn(AccumulatingCombineFn):
    """Re-folds candidate extrema sharing the sentinel key."""

    def __init__(self, ordering: Ordering, maximize: bool = True):
        self.ordering = ordering
        self.maximize = maximize

    def create_accumulator(self, key: Any) -> Accumulator:
        return ExtremumAccumulator(self.ordering, self.maximize)


def fold_extremum(values: Iterable[Any], ordering: Optional[Ordering] = None, maximize: bool = True) -> Any:
    """Fold ``values`` to their extremum; raises EmptyAggregationError when empty."""
    accumulator = ExtremumAccumulator(ordering or Ordering.natural(), maximize)
    for value in values:
        accumulator.add(value)
    for result in accumulator.results():
        return result
    raise EmptyAggregationError("max" if maximize else "min")
