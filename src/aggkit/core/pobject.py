"""
Deferred scalar results.

A PObject wraps a collection whose contents are only needed at the end of a
pipeline. Its value is pulled synchronously on the first ``get_value`` call and
cached afterwards.
"""
# 说明：延迟标量结果，首次访问时同步物化底层集合并缓存结果。
# 职责：
# - PObject：一次性解析并缓存结果的抽象基类
# - FirstElementPObject：读取单例集合的首个元素，集合为空时抛出 EmptyAggregationError
# - CollectionPObject：将集合整体物化为列表

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

from .exceptions import EmptyAggregationError

if TYPE_CHECKING:
    from .collection import PCollection


class PObject(ABC):
    """One-shot, cached, non-cancellable scalar result."""

    def __init__(self, collection: "PCollection"):
        self.collection = collection
        self._resolved = False
        self._value: Any = None

    def get_value(self) -> Any:
        # 解析失败不缓存，下次访问重新尝试并再次抛出同样的错误
        if not self._resolved:
            self._value = self.process(self.collection)
            self._resolved = True
        return self._value

    @abstractmethod
    def process(self, collection: "PCollection") -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        state = repr(self._value) if self._resolved else "<unresolved>"
        return f"{self.__class__.__name__}({state})"


class FirstElementPObject(PObject):
    """Resolves to the first element of a collection built to hold exactly one."""

    def process(self, collection: "PCollection") -> Any:
        for value in collection.materialize():
            return value
        raise EmptyAggregationError(collection.name)


class CollectionPObject(PObject):
    """Resolves to every element of the collection, as a list."""

    def process(self, collection: "PCollection") -> List[Any]:
        return list(collection.materialize())
