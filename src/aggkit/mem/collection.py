"""
Eager in-memory collection.

Responsibilities
  - Hold elements as an ordered sequence of partitions.
  - Run a DoFn lifecycle once per partition, each on its own clone.
  - Build tables or plain collections depending on the requested type.

Usage Context
  - Reference executor for single-process tests and small jobs; see
    ``MemPipeline`` for constructors.

Limitations
  - Every stage runs immediately when it is defined; nothing is spilled to disk.
"""
# 说明：内存参考执行器中的集合实现，元素以分区序列形式保存，各阶段在定义时立即执行。
# 职责：
# - split_partitions：把输入按顺序切分为若干连续分区
# - run_do_fn：对每个分区克隆变换函数并依次执行 initialize -> process* -> cleanup
# - MemCollection：实现 PCollection 契约（parallel_do / union / materialize 等）
# 约定：
# - 分区数默认取 RuntimeConfig.mem_partitions，可按集合单独指定
# - strict_validation 开启时，写入表的输出必须是二元组，否则抛出 PipelineError

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

from aggkit.core.collection import PCollection
from aggkit.core.exceptions import PipelineError
from aggkit.core.functions import DoFn
from aggkit.core.types import Pair, PType
from aggkit.core.utils.config import get_config
from aggkit.core.utils.logging import get_logger
from aggkit.core.utils.param_validation import positive_int

from .emitter import InMemoryEmitter

logger = get_logger(__name__)

Partitions = Tuple[Tuple[Any, ...], ...]

_validate_partitions = positive_int("partitions")


def split_partitions(values: Sequence[Any], num_partitions: int) -> Partitions:
    """Split ``values`` into ``num_partitions`` contiguous, near-equal partitions."""
    num_partitions = _validate_partitions(num_partitions)
    size, extra = divmod(len(values), num_partitions)
    parts = []
    start = 0
    for index in range(num_partitions):
        end = start + size + (1 if index < extra else 0)
        parts.append(tuple(values[start:end]))
        start = end
    return tuple(parts)


def run_do_fn(partitions: Partitions, do_fn: DoFn, name: Optional[str] = None) -> List[List[Any]]:
    """Run ``do_fn`` over each partition on a private clone; returns per-partition outputs."""
    outputs = []
    count = len(partitions)
    for index, partition in enumerate(partitions):
        fn = do_fn.clone()
        fn.configure_partition(index, count)
        emitter = InMemoryEmitter()
        fn.initialize()
        for element in partition:
            fn.process(element, emitter)
        fn.cleanup(emitter)
        emitter.flush()
        outputs.append(emitter.get_output())
    logger.debug(
        "stage %s ran %s over %d partitions, emitted %d values",
        name or "<anonymous>",
        do_fn.__class__.__name__,
        count,
        sum(len(out) for out in outputs),
        extra={"values": outputs},
    )
    return outputs


def to_pairs(values: Iterable[Any], stage: Optional[str] = None) -> Tuple[Pair, ...]:
    strict = get_config().strict_validation
    result = []
    for value in values:
        if isinstance(value, Pair):
            result.append(value)
            continue
        if strict and not (isinstance(value, (tuple, list)) and len(value) == 2):
            raise PipelineError(f"stage {stage or '<anonymous>'} emitted {value!r} into a table; expected a pair")
        result.append(Pair(value[0], value[1]))
    return tuple(result)


class MemCollection(PCollection):
    """Collection held in memory as a sequence of partitions."""

    def __init__(
        self,
        collect: Iterable[Any] = (),
        ptype: Optional[PType] = None,
        name: Optional[str] = None,
        *,
        partitions: Optional[int] = None,
    ):
        num = partitions if partitions is not None else get_config().mem_partitions
        self._partitions: Partitions = split_partitions(tuple(collect), num)
        self._ptype = ptype
        self._name = name

    @classmethod
    def from_partitions(cls, partitions: Iterable[Iterable[Any]], ptype: Optional[PType] = None, name: Optional[str] = None):
        instance = cls.__new__(cls)
        MemCollection._init_partitions(instance, partitions, ptype, name)
        return instance

    def _init_partitions(self, partitions: Iterable[Iterable[Any]], ptype: Optional[PType], name: Optional[str]) -> None:
        self._partitions = tuple(tuple(part) for part in partitions) or ((),)
        self._ptype = ptype
        self._name = name

    # ------------------------------------------------------------------ Contract
    @property
    def name(self) -> Optional[str]:
        return self._name

    def get_ptype(self) -> Optional[PType]:
        return self._ptype

    def get_pipeline(self):
        from .pipeline import MemPipeline

        return MemPipeline.get_instance()

    def get_partitions(self) -> Partitions:
        return self._partitions

    def parallel_do(self, do_fn: DoFn, ptype: Optional[PType] = None, name: Optional[str] = None):
        outputs = run_do_fn(self._partitions, do_fn, name)
        if ptype is not None and ptype.is_table():
            from .table import MemTable

            return MemTable.from_partitions([to_pairs(out, name) for out in outputs], ptype, name)
        return MemCollection.from_partitions(outputs, ptype, name)

    def union(self, *others: PCollection) -> PCollection:
        parts = list(self._partitions)
        for other in others:
            if isinstance(other, MemCollection):
                parts.extend(other.get_partitions())
            else:
                parts.append(tuple(other.materialize()))
        return self.from_partitions(parts, self._ptype, self._name)

    def materialize(self) -> Tuple[Any, ...]:
        return tuple(element for part in self._partitions for element in part)

    def get_size(self) -> int:
        return sum(len(part) for part in self._partitions)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.materialize())

    def __len__(self) -> int:
        return self.get_size()

    def __repr__(self) -> str:
        return repr(list(self.materialize()))
