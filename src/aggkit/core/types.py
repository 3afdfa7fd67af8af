"""
Shared type definitions for collections and tables.

Responsibilities
  - Define the immutable key-value Pair exchanged between stages.
  - Describe element types (PType) and key/value table types (PTableType).
  - Decide whether an element type carries a natural total order.
  - Detach values that may be backed by a reusable buffer before they are
    retained past one iteration step.

Usage Context
  - Passed to ``parallel_do`` to choose between a collection and a table result.
  - Consulted by ordering-dependent aggregations before any stage runs.

Limitations
  - Types describe values only; they carry no serialization format.
"""
# 说明：集合与表共享的类型描述，覆盖键值对、元素类型与表类型。
# 职责：
# - Pair：阶段之间传递的不可变 (key, value) 二元组
# - PType / PTableType：描述元素类型与键值类型，决定 parallel_do 返回集合还是表
# - has_natural_order：判断元素类是否具备自然全序，供 max/min/top/sort 在构建期校验
# - detach：对可能由执行器复用缓冲区承载的值做防御性复制
# 约定：
# - type_class 为 None 表示类型未知（unknown，不做全序校验）或元素异构（mixed，按 orderable 校验）
# - 不可变标量类型的 detach 为恒等函数，记录类型默认使用 copy.deepcopy

from __future__ import annotations

import copy
import numbers
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, NamedTuple, Optional

Detacher = Callable[[Any], Any]

# 虽然定义了比较运算，但不构成全序的内置类型
_PARTIALLY_ORDERED = (dict, complex, set, frozenset)


class Pair(NamedTuple):
    """Immutable key-value pair."""

    first: Any
    second: Any

    @classmethod
    def of(cls, first: Any, second: Any) -> "Pair":
        return cls(first, second)


def _identity(value: Any) -> Any:
    return value


def has_natural_order(type_class: Optional[type]) -> bool:
    """Return True when instances of ``type_class`` support ``<`` as a total order."""
    if type_class is None:
        return False
    if issubclass(type_class, _PARTIALLY_ORDERED):
        return False
    # 未重写 __lt__ 的类继承 object 的实现，只会返回 NotImplemented
    return getattr(type_class, "__lt__", object.__lt__) is not object.__lt__


@dataclass(frozen=True)
class PType:
    """
    Description of an element type.

    - Configuration
      - type_class: Python class of the elements, or None when unknown.
      - name: Human-readable type name used in stage names and errors.
      - detacher: Callable producing a copy safe to retain; identity when omitted.
      - orderable: Explicit override of the natural-order check.
    """

    type_class: Optional[type]
    name: str
    detacher: Optional[Detacher] = field(default=None, compare=False)
    orderable: Optional[bool] = None

    def detach(self, value: Any) -> Any:
        # 返回可安全保留到下一次迭代之后的副本
        if self.detacher is None:
            return value
        return self.detacher(value)

    def is_orderable(self) -> bool:
        if self.orderable is not None:
            return self.orderable
        return has_natural_order(self.type_class)

    def is_table(self) -> bool:
        return False


@dataclass(frozen=True)
class PTableType(PType):
    """Type of a keyed collection whose elements are ``Pair(key, value)``."""

    key_type: Optional[PType] = None
    value_type: Optional[PType] = None

    def is_table(self) -> bool:
        return True


# ------------------------------------------------------------------ Factories
def unknown() -> PType:
    # 类型未知时无法确定值是否可变，detach 一律深拷贝
    return PType(None, "unknown", copy.deepcopy)


def mixed(orderable: bool = False) -> PType:
    """Type of a collection whose elements belong to several unrelated classes."""
    # 与 unknown 不同：已知元素异构，是否可排序在推断时即已确定
    return PType(None, "mixed", copy.deepcopy, orderable)


def ints() -> PType:
    return PType(int, "int")


def longs() -> PType:
    # Python 整数无位宽区分，保留 longs() 名称以对应计数类聚合的语义
    return PType(int, "long")


def floats() -> PType:
    return PType(float, "float")


def strings() -> PType:
    return PType(str, "string")


def booleans() -> PType:
    return PType(bool, "boolean")


def records(type_class: type, *, detacher: Optional[Detacher] = None, orderable: Optional[bool] = None) -> PType:
    """Type for arbitrary (possibly mutable) objects; detached with ``copy.deepcopy`` by default."""
    return PType(type_class, type_class.__name__, detacher or copy.deepcopy, orderable)


def _joint_orderable(key_type: Optional[PType], value_type: Optional[PType]) -> Optional[bool]:
    # 任一分量不可排序则整体不可排序；分量类型未知时不做判定，交由自然序在运行时比较
    undecided = False
    for component in (key_type, value_type):
        if component is None or (component.type_class is None and component.orderable is None):
            undecided = True
        elif not component.is_orderable():
            return False
    return None if undecided else True


def pairs(key_type: PType, value_type: PType) -> PType:
    """Type of ``Pair`` elements, ordered when both components are."""

    def detach(value: Any) -> Pair:
        return Pair(key_type.detach(value[0]), value_type.detach(value[1]))

    return PType(
        Pair,
        f"pair<{key_type.name},{value_type.name}>",
        detach,
        _joint_orderable(key_type, value_type),
    )


def collections(value_type: PType) -> PType:
    """Type of eagerly realized lists of ``value_type`` elements."""

    def detach(values: Iterable[Any]) -> list:
        return [value_type.detach(v) for v in values]

    return PType(list, f"collection<{value_type.name}>", detach, False)


def table_of(key_type: PType, value_type: PType) -> PTableType:
    """Type of a keyed collection; its ``Pair`` elements order like ``pairs(key_type, value_type)``."""
    return PTableType(
        Pair,
        f"table<{key_type.name},{value_type.name}>",
        None,
        _joint_orderable(key_type, value_type),
        key_type=key_type,
        value_type=value_type,
    )


_BUILTIN_FACTORIES = {
    bool: booleans,
    int: ints,
    float: floats,
    str: strings,
}


def ptype_for_class(type_class: type) -> PType:
    # 内置不可变类型使用恒等 detach，其余类型按记录处理
    factory = _BUILTIN_FACTORIES.get(type_class)
    if factory is not None:
        return factory()
    if type_class in (tuple, bytes, frozenset):
        return PType(type_class, type_class.__name__)
    return records(type_class)


def infer_ptype(values: Iterable[Any]) -> Optional[PType]:
    """
    Infer a PType from sample values.

    Returns None for empty input and ``mixed()`` when the classes differ; mixed
    real numbers stay orderable, anything else mixed is not.
    """
    classes = {type(v) for v in values}
    if not classes:
        return None
    if len(classes) == 1:
        return ptype_for_class(classes.pop())
    if all(issubclass(c, numbers.Real) for c in classes):
        # int 与 float 混合时按浮点处理，bool 不参与数值提升但仍可比较
        if bool in classes:
            return mixed(orderable=True)
        return floats()
    return mixed()
