"""
Integration tests for end-to-end aggregation pipelines.
"""
# 说明：在内存执行器上串联多个阶段的端到端测试。
# 覆盖：
# - 计数、极值、Top-K、空集合长度与按键收集五个典型场景
# - 链式组合：by -> top -> collect_values，filter -> sort -> sample
# - 配置驱动的多分区执行与单分区执行结果一致
from __future__ import annotations

import pytest

from aggkit import collection_of, table_of
from aggkit.core.exceptions import EmptyAggregationError
from aggkit.lib import aggregate


@pytest.mark.parametrize("partitions", [1, 3])
def test_count_scenario(partitions) -> None:
    # 场景一：按元素计数
    counts = aggregate.count(collection_of(list("abacba"), partitions=partitions))
    assert counts.as_dict() == {"a": 3, "b": 2, "c": 1}


@pytest.mark.parametrize("partitions", [1, 3])
def test_extremum_scenario(partitions) -> None:
    # 场景二：最大值与最小值
    data = collection_of([3, 1, 4, 1, 5, 9, 2, 6], partitions=partitions)
    assert aggregate.max(data).get_value() == 9
    assert aggregate.min(data).get_value() == 1


@pytest.mark.parametrize("partitions", [1, 2])
def test_top_scenario(partitions) -> None:
    # 场景三：单键 Top-2，按名次从高到低输出
    table = table_of([("k1", 5), ("k1", 1), ("k1", 9), ("k1", 3)], partitions=partitions)
    assert list(aggregate.top(table, 2, True).materialize()) == [("k1", 9), ("k1", 5)]


def test_empty_length_scenario() -> None:
    # 场景四：空集合长度在解析时报错
    with pytest.raises(EmptyAggregationError):
        aggregate.length(collection_of([])).get_value()


def test_collect_values_scenario() -> None:
    # 场景五：按键收集所有值（值的顺序不作保证）
    collected = aggregate.collect_values(table_of([("k", 1), ("k", 2), ("k", 3)])).as_dict()
    assert set(collected) == {"k"}
    assert sorted(collected["k"]) == [1, 2, 3]


def test_keyed_leaderboard_pipeline(runtime_config) -> None:
    # 以配置指定的分区数执行：按首字母分组，取每组最长的两个单词后再收集
    runtime_config.mem_partitions = 2
    words = collection_of(["apple", "avocado", "apricot", "banana", "blueberry", "cherry", "ant"])
    leaders = (
        words.by(lambda w: w[0])
        .top(2, ordering=len)
        .collect_values()
        .as_dict()
    )
    assert {key: sorted(values, key=len, reverse=True) for key, values in leaders.items()} == {
        "a": ["avocado", "apricot"],
        "b": ["blueberry", "banana"],
        "c": ["cherry"],
    }


def test_filter_sort_sample_pipeline() -> None:
    numbers = collection_of(range(40), partitions=4)
    evens = numbers.filter(lambda n: n % 2 == 0).sort(ascending=False)
    assert list(evens.materialize())[:3] == [38, 36, 34]
    assert evens.length().get_value() == 20
    sampled = evens.sample(1.0, seed=3)
    assert sorted(sampled.materialize()) == sorted(evens.materialize())
    assert sampled.max().get_value() == 38
