"""
Unit tests for scalar extremum aggregations.
"""
# 说明：max / min 聚合与极值累加器的单元测试。
# 覆盖：
# - ExtremumAccumulator：未见元素时不输出，相等元素保留先到达者
# - ExtremumFn 以哨兵分组键输出局部极值
# - max / min 在不同分区数下结果一致，支持显式 ordering 与 key 函数
# - 不可排序或异构的元素类型在构建期抛出 UnsupportedTypeError，空集合在解析期抛出 EmptyAggregationError
# - 键与值均可排序的表可直接求极值

import pytest

from aggkit.core.exceptions import EmptyAggregationError, UnsupportedTypeError
from aggkit.core.ordering import Ordering
from aggkit.core.types import Pair, records
from aggkit.lib import aggregate
from aggkit.lib.extremum import (
    SENTINEL_GROUP_KEY,
    ExtremumAccumulator,
    ExtremumFn,
    fold_extremum,
)
from aggkit.mem import InMemoryEmitter, collection_of, table_of


def test_accumulator_unset_emits_nothing() -> None:
    accumulator = ExtremumAccumulator(Ordering.natural())
    assert tuple(accumulator.results()) == ()
    accumulator.add(4)
    accumulator.add(9)
    accumulator.add(2)
    assert tuple(accumulator.results()) == (9,)


def test_accumulator_keeps_first_of_equal_values() -> None:
    accumulator = ExtremumAccumulator(Ordering.by_key(lambda v: v[0]), maximize=False)
    accumulator.add((1, "first"))
    accumulator.add((1, "second"))
    assert accumulator.value == (1, "first")


def test_extremum_fn_tags_sentinel_key() -> None:
    fn = ExtremumFn(Ordering.natural(), maximize=True)
    emitter = InMemoryEmitter()
    fn.initialize()
    for value in (3, 8, 5):
        fn.process(value, emitter)
    fn.cleanup(emitter)
    assert emitter.get_output() == [Pair(SENTINEL_GROUP_KEY, 8)]


def test_fold_extremum() -> None:
    assert fold_extremum([3, 7, 1]) == 7
    assert fold_extremum([3, 7, 1], maximize=False) == 1
    with pytest.raises(EmptyAggregationError):
        fold_extremum([])


@pytest.mark.parametrize("partitions", [1, 2, 4])
def test_max_min_across_partitions(partitions) -> None:
    data = collection_of([4, -2, 11, 7, 0], partitions=partitions)
    assert data.max().get_value() == 11
    assert data.min().get_value() == -2


def test_max_with_key_function() -> None:
    words = collection_of(["kiwi", "banana", "fig"])
    assert words.max(ordering=len).get_value() == "banana"
    assert aggregate.min(words, ordering=Ordering.by_key(len)).get_value() == "fig"


def test_unorderable_type_fails_at_construction() -> None:
    data = collection_of([{"a": 1}, {"a": 2}])
    assert data.get_ptype() == records(dict)
    with pytest.raises(UnsupportedTypeError):
        data.max()
    # 提供显式 ordering 后可以正常聚合
    assert data.max(ordering=lambda d: d["a"]).get_value() == {"a": 2}


def test_empty_extremum_fails_on_resolution() -> None:
    result = collection_of([], partitions=3).min()
    with pytest.raises(EmptyAggregationError):
        result.get_value()


@pytest.mark.parametrize("partitions", [1, 2])
def test_max_min_over_table(partitions) -> None:
    # 表元素为 Pair，键与值均可排序时按 (key, value) 字典序取极值
    table = table_of([("a", 1), ("b", 2), ("a", 5)], partitions=partitions)
    assert table.max().get_value() == ("b", 2)
    assert aggregate.min(table).get_value() == ("a", 1)


def test_heterogeneous_elements_fail_at_construction() -> None:
    data = collection_of([1, "a"])
    with pytest.raises(UnsupportedTypeError):
        data.max()
    with pytest.raises(UnsupportedTypeError):
        aggregate.min(data)
    assert data.max(ordering=str).get_value() == "a"
