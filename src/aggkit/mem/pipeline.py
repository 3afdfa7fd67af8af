"""
Entry point of the in-memory reference executor.
"""
# 说明：内存参考执行器的入口，提供构建集合与表的工厂方法。
# 职责：
# - MemPipeline.get_instance()：返回进程内唯一的流水线实例
# - collection_of / table_of：由 Python 可迭代对象构建 MemCollection / MemTable，未给定类型时按样本推断
# 约定：
# - 推断失败（空输入或元素类型不一致）时类型为未知，排序相关聚合不做构建期校验

from __future__ import annotations

from typing import Any, Iterable, Optional

from aggkit.core import types as ptypes
from aggkit.core.types import PTableType, PType
from aggkit.core.utils.logging import get_logger

from .collection import MemCollection
from .table import MemTable

logger = get_logger(__name__)


class MemPipeline:
    """Process-wide factory for in-memory collections."""

    _instance: Optional["MemPipeline"] = None

    @classmethod
    def get_instance(cls) -> "MemPipeline":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def collection_of(
        self,
        values: Iterable[Any],
        ptype: Optional[PType] = None,
        *,
        name: Optional[str] = None,
        partitions: Optional[int] = None,
    ) -> MemCollection:
        values = tuple(values)
        if ptype is None:
            ptype = ptypes.infer_ptype(values)
        logger.debug("collection %s of %d values typed %s", name, len(values), ptype.name if ptype else None)
        return MemCollection(values, ptype, name, partitions=partitions)

    def table_of(
        self,
        pairs: Iterable[Any],
        ptype: Optional[PTableType] = None,
        *,
        name: Optional[str] = None,
        partitions: Optional[int] = None,
    ) -> MemTable:
        pairs = tuple(pairs)
        if ptype is None:
            key_type = ptypes.infer_ptype(p[0] for p in pairs) or ptypes.unknown()
            value_type = ptypes.infer_ptype(p[1] for p in pairs) or ptypes.unknown()
            ptype = ptypes.table_of(key_type, value_type)
        logger.debug("table %s of %d pairs typed %s", name, len(pairs), ptype.name)
        return MemTable(pairs, ptype, name, partitions=partitions)


def collection_of(values: Iterable[Any], ptype: Optional[PType] = None, **kwargs: Any) -> MemCollection:
    return MemPipeline.get_instance().collection_of(values, ptype, **kwargs)


def table_of(pairs: Iterable[Any], ptype: Optional[PTableType] = None, **kwargs: Any) -> MemTable:
    return MemPipeline.get_instance().table_of(pairs, ptype, **kwargs)
