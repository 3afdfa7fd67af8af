"""
Function types that plug into collection stages.

Responsibilities
  - Define the element transform lifecycle (initialize -> process* -> cleanup)
    consumed by ``parallel_do``.
  - Define combine functions consumed by ``combine_values``.
  - Model partition-scoped folding as an explicit Accumulator object so the same
    reduction logic can run before and after the shuffle.

Usage Context
  - Executors clone a DoFn once per partition (``DoFn.clone``) before running
    its lifecycle, so state held between ``initialize`` and ``cleanup`` is never
    shared between partitions.
  - Combine functions may be invoked zero, one, or many times per key at any
    level of the combine tree; implementations must be associative,
    commutative, and free of side effects.

Limitations
  - Nothing here checks associativity; it is a contract on implementations.
"""
# 说明：插入集合各阶段的函数类型，包含逐元素变换、分区级累加与组合函数。
# 职责：
# - Emitter：变换函数向下游输出结果的抽象接口
# - DoFn / MapFn / FilterFn / MapValuesFn / ExtractKeyFn：parallel_do 使用的变换函数族
# - Accumulator / AccumulatingDoFn：以显式累加器对象承载分区内的部分聚合状态
# - CombineFn / AccumulatingCombineFn / SumCombineFn：combine_values 使用的可结合、可交换组合函数
# 约定：
# - 组合函数的输入为 Pair(key, values)，输出为若干 Pair(key, value)
# - 累加器仅在单个分区（或单次组合调用）的顺序执行中存活，不会逃逸出生命周期

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional

from .types import Pair


class Emitter(ABC):
    """Sink receiving the outputs of a transform."""

    @abstractmethod
    def emit(self, value: Any) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        return None


class DoFn(ABC):
    """
    Element transform with an explicit per-partition lifecycle.

    - Behavior
      - ``initialize`` runs once per partition before any ``process`` call.
      - ``process`` may emit zero, one, or many outputs per input.
      - ``cleanup`` runs once after the last ``process`` call and may emit.
      - ``configure_partition`` is called on the per-partition clone before
        ``initialize`` with the partition's index and the partition count.
    """

    partition_index: int = 0
    num_partitions: int = 1

    def configure_partition(self, index: int, count: int) -> None:
        self.partition_index = index
        self.num_partitions = count

    def initialize(self) -> None:
        return None

    @abstractmethod
    def process(self, input: Any, emitter: Emitter) -> None:
        raise NotImplementedError

    def cleanup(self, emitter: Emitter) -> None:
        return None

    def clone(self) -> "DoFn":
        # 执行器为每个分区复制一份变换函数，模拟分布式引擎向各任务下发独立副本
        return copy.deepcopy(self)


class MapFn(DoFn):
    """One-to-one transform."""

    @abstractmethod
    def map(self, input: Any) -> Any:
        raise NotImplementedError

    def process(self, input: Any, emitter: Emitter) -> None:
        emitter.emit(self.map(input))

    @staticmethod
    def of(fn: Callable[[Any], Any]) -> "MapFn":
        return _CallableMapFn(fn)


class _CallableMapFn(MapFn):
    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def map(self, input: Any) -> Any:
        return self.fn(input)


class FilterFn(DoFn):
    """Keeps the inputs for which ``accept`` returns True."""

    @abstractmethod
    def accept(self, input: Any) -> bool:
        raise NotImplementedError

    def process(self, input: Any, emitter: Emitter) -> None:
        if self.accept(input):
            emitter.emit(input)

    @staticmethod
    def of(predicate: Callable[[Any], bool]) -> "FilterFn":
        return _CallableFilterFn(predicate)


class _CallableFilterFn(FilterFn):
    def __init__(self, predicate: Callable[[Any], bool]):
        self.predicate = predicate

    def accept(self, input: Any) -> bool:
        return bool(self.predicate(input))


class MapValuesFn(MapFn):
    """Transforms the value of each pair, keeping its key."""

    @abstractmethod
    def map_value(self, value: Any) -> Any:
        raise NotImplementedError

    def map(self, input: Any) -> Pair:
        return Pair(input[0], self.map_value(input[1]))


class ExtractKeyFn(MapFn):
    """Keys each element by ``key_fn(element)``."""

    def __init__(self, key_fn: Callable[[Any], Any]):
        self.key_fn = key_fn.map if isinstance(key_fn, MapFn) else key_fn

    def map(self, input: Any) -> Pair:
        return Pair(self.key_fn(input), input)


# ------------------------------------------------------------------ Accumulation
class Accumulator(ABC):
    """Partition-scoped fold state with add and result steps."""

    @abstractmethod
    def add(self, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def results(self) -> Iterable[Any]:
        """Values to emit once every input has been added (possibly none)."""
        raise NotImplementedError


class AccumulatingDoFn(DoFn):
    """
    DoFn that folds a whole partition into one Accumulator and emits its results
    from ``cleanup``.
    """

    _accumulator: Optional[Accumulator] = None

    @abstractmethod
    def create_accumulator(self) -> Accumulator:
        raise NotImplementedError

    def tag(self, result: Any) -> Any:
        # 子类可在输出前为结果附加分组键（例如哨兵键或暂存键）
        return result

    def initialize(self) -> None:
        self._accumulator = self.create_accumulator()

    def process(self, input: Any, emitter: Emitter) -> None:
        if self._accumulator is None:
            self.initialize()
        self._accumulator.add(input)

    def cleanup(self, emitter: Emitter) -> None:
        accumulator, self._accumulator = self._accumulator, None
        if accumulator is None:
            return
        for result in accumulator.results():
            emitter.emit(self.tag(result))


class CombineFn(DoFn):
    """
    Associative, commutative reduction over the values sharing a key.

    ``process`` receives ``Pair(key, values)`` and emits ``Pair(key, value)``
    outputs. Invoking it over any sub-partitioning of a key's values and then
    again over the concatenated outputs must give the same result as a single
    invocation over all values.
    """


class AccumulatingCombineFn(CombineFn):
    """CombineFn that re-folds a key's values through a fresh Accumulator."""

    @abstractmethod
    def create_accumulator(self, key: Any) -> Accumulator:
        raise NotImplementedError

    def process(self, input: Any, emitter: Emitter) -> None:
        key, values = input
        accumulator = self.create_accumulator(key)
        for value in values:
            accumulator.add(value)
        for result in accumulator.results():
            emitter.emit(Pair(key, result))


class SumAccumulator(Accumulator):
    __slots__ = ("total",)

    def __init__(self, start: Any = 0):
        self.total = start

    def add(self, value: Any) -> None:
        self.total += value

    def results(self) -> Iterable[Any]:
        return (self.total,)


class SumCombineFn(AccumulatingCombineFn):
    """Sums the values of each key."""

    def __init__(self, start: Any = 0):
        self.start = start

    def create_accumulator(self, key: Any) -> Accumulator:
        return SumAccumulator(self.start)


def sum_longs() -> SumCombineFn:
    return SumCombineFn(0)


def sum_floats() -> SumCombineFn:
    return SumCombineFn(0.0)
