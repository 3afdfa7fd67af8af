"""
Lazy collection contracts.

Responsibilities
  - PCollection: a partitioned multiset of elements transformed by ``parallel_do``.
  - PTable: a PCollection of ``Pair(key, value)`` with ``group_by_key`` and
    key/value projections.
  - PGroupedTable: the result of a shuffle, reduced with ``combine_values``.
  - Convenience delegates to the aggregation library so pipelines read as
    method chains.

Usage Context
  - Executors (see ``aggkit.mem``) implement the abstract methods; aggregations
    in ``aggkit.lib`` are written only against these contracts.

Limitations
  - The contracts say nothing about when stages run, how many partitions exist,
    or how many times a combine function is invoked.
"""
# 说明：惰性集合抽象契约，定义 PCollection / PTable / PGroupedTable 三类接口。
# 职责：
# - 规定 parallel_do / group_by_key / combine_values / values 等执行引擎必须满足的操作语义
# - 提供 count / length / max / min / top / collect_values / sort / sample 等便捷方法，统一委托给 aggkit.lib
# 约定：
# - 所有聚合算法仅依赖本模块的抽象接口，不包含任何执行器相关代码
# - aggkit.lib 在方法内部延迟导入，避免 core 与 lib 之间的循环依赖

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

from .functions import DoFn, ExtractKeyFn, FilterFn, MapFn
from .types import PTableType, PType, table_of, unknown

if TYPE_CHECKING:
    from .functions import CombineFn
    from .ordering import OrderingLike
    from .pobject import PObject


class PCollection(ABC):
    """Lazy, partitioned multiset of elements."""

    @property
    @abstractmethod
    def name(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def get_ptype(self) -> Optional[PType]:
        raise NotImplementedError

    @abstractmethod
    def get_pipeline(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def parallel_do(
        self,
        do_fn: DoFn,
        ptype: Optional[PType] = None,
        name: Optional[str] = None,
    ) -> Union["PCollection", "PTable"]:
        """
        Apply ``do_fn`` to every element.

        Returns a PTable when ``ptype`` is a PTableType and a PCollection otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def union(self, *others: "PCollection") -> "PCollection":
        raise NotImplementedError

    @abstractmethod
    def materialize(self) -> Iterable[Any]:
        raise NotImplementedError

    @abstractmethod
    def get_size(self) -> int:
        raise NotImplementedError

    def as_collection(self) -> "PObject":
        from .pobject import CollectionPObject

        return CollectionPObject(self)

    def filter(self, filter_fn: Union[FilterFn, Callable[[Any], bool]], name: Optional[str] = None) -> "PCollection":
        if not isinstance(filter_fn, FilterFn):
            filter_fn = FilterFn.of(filter_fn)
        return self.parallel_do(filter_fn, self.get_ptype(), name=name or "filter")

    def by(
        self,
        key_fn: Union[MapFn, Callable[[Any], Any]],
        key_type: Optional[PType] = None,
        name: Optional[str] = None,
    ) -> "PTable":
        """Key every element by ``key_fn(element)``."""
        table_type = table_of(key_type or unknown(), self.get_ptype() or unknown())
        return self.parallel_do(ExtractKeyFn(key_fn), table_type, name=name or "by")

    # ------------------------------------------------------------------ Aggregations
    def count(self) -> "PTable":
        from aggkit.lib import aggregate

        return aggregate.count(self)

    def length(self) -> "PObject":
        from aggkit.lib import aggregate

        return aggregate.length(self)

    def max(self, ordering: "OrderingLike" = None) -> "PObject":
        from aggkit.lib import aggregate

        return aggregate.max(self, ordering=ordering)

    def min(self, ordering: "OrderingLike" = None) -> "PObject":
        from aggkit.lib import aggregate

        return aggregate.min(self, ordering=ordering)

    def sort(self, ascending: bool = True, ordering: "OrderingLike" = None) -> "PCollection":
        from aggkit.lib.sort import sort

        return sort(self, ascending=ascending, ordering=ordering)

    def sample(self, probability: float, seed: Optional[int] = None) -> "PCollection":
        from aggkit.lib.sample import sample

        return sample(self, probability, seed=seed)


class PTable(PCollection):
    """Lazy, partitioned collection of ``Pair(key, value)``; keys may repeat."""

    @abstractmethod
    def get_ptype(self) -> PTableType:
        raise NotImplementedError

    def get_key_type(self) -> Optional[PType]:
        return self.get_ptype().key_type

    def get_value_type(self) -> Optional[PType]:
        return self.get_ptype().value_type

    @abstractmethod
    def group_by_key(self, num_partitions: Optional[int] = None) -> "PGroupedTable":
        """Route all values sharing a key to one grouping context; no ordering or deduplication."""
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> PCollection:
        raise NotImplementedError

    @abstractmethod
    def values(self) -> PCollection:
        raise NotImplementedError

    def top(self, limit: int, maximize: bool = True, ordering: "OrderingLike" = None, by_key: bool = True) -> "PTable":
        from aggkit.lib import aggregate

        return aggregate.top(self, limit, maximize, ordering=ordering, by_key=by_key)

    def collect_values(self) -> "PTable":
        from aggkit.lib import aggregate

        return aggregate.collect_values(self)


class PGroupedTable(PCollection):
    """Shuffled table whose elements are ``Pair(key, values)`` grouped entries."""

    @abstractmethod
    def get_table_type(self) -> PTableType:
        """Type of the ungrouped table this grouping came from."""
        raise NotImplementedError

    @abstractmethod
    def combine_values(self, combine_fn: "CombineFn") -> PTable:
        """Reduce each key's values with ``combine_fn``; the executor picks how often and where."""
        raise NotImplementedError

    @abstractmethod
    def ungroup(self) -> PTable:
        raise NotImplementedError
