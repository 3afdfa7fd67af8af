"""
Bounded top-K over keyed collections.

Responsibilities
  - BoundedPriorityQueue: keep the best ``limit`` candidates seen so far, with
    the worst survivor extractable in O(log limit).
  - TopKFn: local bound inside each partition; survivors are re-keyed under a
    constant combiner staging key so the combine stage sees them together.
  - TopKCombineFn: rebuild a bounded queue from the union of incoming
    survivors, then drain it once into rank order.
  - UnwrapStagingKeyFn: strip the staging key, restoring ``Pair(key, value)``.

Usage Context
  - Assembled by ``aggkit.lib.aggregate.top``; each level discards only
    candidates outside the top ``limit`` of what that level has seen, so any
    number of combine levels keeps every true survivor.

Limitations
  - Ties between equal values are broken by arrival order within each
    evaluation context (earlier arrivals rank higher). Across partitions the
    arrival order is whatever order the executor delivers candidates in.
"""
# 说明：键值表上的有界 Top-K，本地与组合两级复用同一个有界优先队列。
# 职责：
# - BoundedPriorityQueue：容量为 limit 的堆，堆顶始终是当前最差的幸存者，超出容量时淘汰
# - TopKAccumulator：按原始键（或全表）维护有界队列，结果按名次从好到差排序输出
# - TopKFn / TopKCombineFn：分区内局部截断与洗牌后的（可能多级的）再截断
# - UnwrapStagingKeyFn：去掉组合暂存键，恢复调用方可见的 (key, value)
# 约定：
# - 暂存键恒为 0，仅用于控制洗牌粒度，与调用方的键无关
# - 名次比较：先比较值（maximize 决定方向），值相等时先到达者名次更高

from __future__ import annotations

import heapq
from typing import Any, Dict, Iterable, List

from aggkit.core.functions import Accumulator, AccumulatingCombineFn, AccumulatingDoFn, MapFn
from aggkit.core.ordering import Ordering, PairValueComparator
from aggkit.core.types import Pair

COMBINER_STAGING_KEY = 0


class _Ranked:
    """Heap entry; ``a < b`` means ``a`` ranks worse than ``b``."""

    __slots__ = ("item", "seq", "compare")

    def __init__(self, item: Any, seq: int, compare):
        self.item = item
        self.seq = seq
        self.compare = compare

    def __lt__(self, other: "_Ranked") -> bool:
        cmp = self.compare(self.item, other.item)
        if cmp != 0:
            return cmp < 0
        return self.seq > other.seq


class BoundedPriorityQueue:
    """
    Priority queue holding at most ``limit`` items, best by ``compare``.

    - Configuration
      - limit: Capacity; must be positive.
      - compare: Three-way comparator where a larger result means a better item.

    - Behavior
      - ``offer`` inserts and evicts the worst item once size exceeds ``limit``.
      - ``drain`` empties the queue and returns items best first.
    """

    __slots__ = ("limit", "compare", "_heap", "_seq")

    def __init__(self, limit: int, compare):
        self.limit = limit
        self.compare = compare
        self._heap: List[_Ranked] = []
        self._seq = 0

    def offer(self, item: Any) -> None:
        entry = _Ranked(item, self._seq, self.compare)
        self._seq += 1
        if len(self._heap) < self.limit:
            heapq.heappush(self._heap, entry)
        else:
            # 新元素若比堆顶还差会被直接弹出
            heapq.heappushpop(self._heap, entry)

    def drain(self) -> List[Any]:
        # 堆的遍历顺序不是名次顺序，需要整体排序一次
        ranked = sorted(self._heap, reverse=True)
        self._heap = []
        return [entry.item for entry in ranked]

    def __len__(self) -> int:
        return len(self._heap)


def rank_comparator(ordering: Ordering, maximize: bool) -> PairValueComparator:
    # maximize=True 时值越大名次越高；否则值越小名次越高
    return PairValueComparator(ordering, ascending=maximize)


class TopKAccumulator(Accumulator):
    """Bounded queues over ``Pair(key, value)`` inputs, one per key when ``by_key``."""

    __slots__ = ("limit", "compare", "by_key", "_queues")

    def __init__(self, limit: int, ordering: Ordering, maximize: bool = True, by_key: bool = True):
        self.limit = limit
        self.compare = rank_comparator(ordering, maximize)
        self.by_key = by_key
        self._queues: Dict[Any, BoundedPriorityQueue] = {}

    def add(self, value: Any) -> None:
        group = value[0] if self.by_key else None
        queue = self._queues.get(group)
        if queue is None:
            queue = self._queues[group] = BoundedPriorityQueue(self.limit, self.compare)
        queue.offer(value)

    def results(self) -> Iterable[Any]:
        for queue in self._queues.values():
            yield from queue.drain()
        self._queues = {}


class TopKFn(AccumulatingDoFn):
    """Local bound; survivors are emitted as ``Pair(COMBINER_STAGING_KEY, Pair(key, value))``."""

    def __init__(self, limit: int, maximize: bool, ordering: Ordering, by_key: bool = True):
        self.limit = limit
        self.maximize = maximize
        self.ordering = ordering
        self.by_key = by_key

    def create_accumulator(self) -> Accumulator:
        return TopKAccumulator(self.limit, self.ordering, self.maximize, self.by_key)

    def tag(self, result: Any) -> Pair:
        return Pair(COMBINER_STAGING_KEY, result)


class TopKCombineFn(AccumulatingCombineFn):
    """Bounds the union of incoming survivors and emits them in rank order."""

    def __init__(self, limit: int, maximize: bool, ordering: Ordering, by_key: bool = True):
        self.limit = limit
        self.maximize = maximize
        self.ordering = ordering
        self.by_key = by_key

    def create_accumulator(self, key: Any) -> Accumulator:
        return TopKAccumulator(self.limit, self.ordering, self.maximize, self.by_key)


class UnwrapStagingKeyFn(MapFn):
    def map(self, input: Any) -> Any:
        return input[1]
