"""
Ordering capability for order-dependent aggregations.

Responsibilities
  - Represent a caller-supplied total order as an explicit object.
  - Provide comparators over ``Pair`` values used by top-K.
  - Resolve and validate the ordering once, when an aggregation is built.

Usage Context
  - ``max``, ``min``, ``top`` and ``sort`` accept an optional ``ordering``; when
    omitted the element type's natural order is used if it has one.

Limitations
  - Orderings are assumed to be total and consistent; this is not verified.
"""
# 说明：面向 max/min/top/sort 的显式全序能力，替代运行期的类型能力探测。
# 职责：
# - Ordering：封装三路比较函数，提供自然序、按键函数排序、反转与 sort key 适配
# - PairValueComparator：按 Pair 的 value 分量比较，供 Top-K 的有界优先队列使用
# - resolve_ordering：在构建期一次性解析并校验 ordering，失败时抛出 UnsupportedTypeError
# 约定：
# - compare(a, b) 返回负数/零/正数分别表示 a < b / a == b / a > b
# - 传入普通可调用对象时视为 key 函数（与内置 sorted 的 key 参数一致）

from __future__ import annotations

import functools
from typing import Any, Callable, Optional, Union

from .exceptions import UnsupportedTypeError
from .types import PType

Comparator = Callable[[Any, Any], int]


def _natural_compare(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


class Ordering:
    """
    Explicit total order over elements.

    - Configuration
      - comparator: Three-way comparison function.
      - name: Label used in logs and stage names.

    - Behavior
      - ``max`` / ``min`` pick extrema; ``sort_key`` adapts to ``sorted``.
    """

    __slots__ = ("_compare", "name")

    def __init__(self, comparator: Comparator, name: str = "custom"):
        self._compare = comparator
        self.name = name

    def compare(self, left: Any, right: Any) -> int:
        return self._compare(left, right)

    def reverse(self) -> "Ordering":
        compare = self._compare
        return Ordering(lambda left, right: compare(right, left), f"reverse({self.name})")

    def sort_key(self) -> Callable[[Any], Any]:
        return functools.cmp_to_key(self._compare)

    def max(self, left: Any, right: Any) -> Any:
        # 相等时保留先到达的值
        return right if self._compare(left, right) < 0 else left

    def min(self, left: Any, right: Any) -> Any:
        return right if self._compare(left, right) > 0 else left

    @classmethod
    def natural(cls) -> "Ordering":
        return cls(_natural_compare, "natural")

    @classmethod
    def by_key(cls, key_fn: Callable[[Any], Any]) -> "Ordering":
        """Order elements by the natural order of ``key_fn(element)``."""
        name = getattr(key_fn, "__name__", "key")
        return cls(lambda left, right: _natural_compare(key_fn(left), key_fn(right)), f"by_key({name})")

    @classmethod
    def from_comparator(cls, comparator: Comparator) -> "Ordering":
        return cls(comparator, getattr(comparator, "__name__", "comparator"))

    def __repr__(self) -> str:
        return f"Ordering({self.name})"


OrderingLike = Union[Ordering, Callable[[Any], Any], None]


class PairValueComparator:
    """Compares ``Pair`` objects by their value component."""

    __slots__ = ("ordering", "ascending")

    def __init__(self, ordering: Ordering, ascending: bool = True):
        self.ordering = ordering
        self.ascending = ascending

    def __call__(self, left: Any, right: Any) -> int:
        cmp = self.ordering.compare(left[1], right[1])
        return cmp if self.ascending else -cmp


def resolve_ordering(operation: str, ptype: Optional[PType], ordering: OrderingLike = None) -> Ordering:
    """
    Resolve the ordering an aggregation will use, failing fast when the element
    type cannot be ordered.
    """
    if isinstance(ordering, Ordering):
        return ordering
    if ordering is not None:
        if not callable(ordering):
            raise UnsupportedTypeError(
                operation,
                message=f"ordering for {operation} must be an Ordering or a key function",
            )
        return Ordering.by_key(ordering)
    if ptype is None:
        return Ordering.natural()
    # 异构元素（mixed）虽没有 type_class，但已显式标注为不可排序
    if ptype.type_class is None and ptype.orderable is False:
        raise UnsupportedTypeError(
            operation,
            message=f"Can only compute {operation} for orderable elements, not for: {ptype.name}",
        )
    # 类型未知时无法提前校验，退化为自然序，比较错误在物化阶段由 Python 抛出
    if ptype.type_class is None:
        return Ordering.natural()
    if not ptype.is_orderable():
        raise UnsupportedTypeError(operation, ptype.type_class)
    return Ordering.natural()
