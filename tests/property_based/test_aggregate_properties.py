"""
Property-based tests for the aggregation library on the in-memory executor.
"""
# 说明：聚合函数库的属性测试，在不同分区数下验证代数性质。
# 覆盖：
# - count 各键计数之和等于多重集大小，length 等于多重集大小
# - max / min 等于上确界 / 下确界，且 min <= max
# - fold_extremum 对任意切分满足结合律
# - top 每个键保留 min(limit, n) 个值、按名次排序、且不劣于任何被丢弃的值
# - top 重复执行结果一致

from collections import Counter, defaultdict

import pytest
from hypothesis import given, strategies as st

from aggkit.core.exceptions import EmptyAggregationError
from aggkit.lib.extremum import fold_extremum
from aggkit.mem import collection_of, table_of

from .conftest import keyed_values, limits, multisets, partition_counts, split_points


# ------------------------------------------------------------------ Count / Length
@given(multisets(), partition_counts())
def test_count_sums_to_size(values, partitions):
    # 按键计数之和等于元素总数，且每个键的计数与 Counter 一致
    counts = collection_of(values, partitions=partitions).count().as_dict()
    assert sum(counts.values()) == len(values)
    assert counts == dict(Counter(values))


@given(multisets(), partition_counts())
def test_length_equals_size(values, partitions):
    result = collection_of(values, partitions=partitions).length()
    if values:
        assert result.get_value() == len(values)
    else:
        # 空多重集没有任何值可取，解析时报错而不是返回默认值
        with pytest.raises(EmptyAggregationError):
            result.get_value()


# ------------------------------------------------------------------ Extremum
@given(multisets(min_size=1), partition_counts())
def test_max_min_are_supremum_and_infimum(values, partitions):
    data = collection_of(values, partitions=partitions)
    high = data.max().get_value()
    low = data.min().get_value()
    assert high == max(values)
    assert low == min(values)
    assert low <= high


@given(st.data(), multisets(min_size=1), st.booleans())
def test_fold_extremum_is_associative(data, values, maximize):
    # 对任意切分，先局部求极值再整体求极值，与直接求极值结果相同
    parts = data.draw(split_points(values))
    partial = [fold_extremum(part, maximize=maximize) for part in parts]
    assert fold_extremum(values, maximize=maximize) == fold_extremum(partial, maximize=maximize)


# ------------------------------------------------------------------ Top-K
@given(keyed_values(), limits(), st.booleans(), partition_counts())
def test_top_bounds_orders_and_dominates(pairs, limit, maximize, partitions):
    result = table_of(pairs, partitions=partitions).top(limit, maximize=maximize)

    by_key = defaultdict(list)
    for key, value in pairs:
        by_key[key].append(value)
    kept = defaultdict(list)
    for key, value in result.materialize():
        kept[key].append(value)

    assert set(kept) == set(by_key)
    for key, values in by_key.items():
        survivors = kept[key]
        assert len(survivors) == min(limit, len(values))
        # 名次顺序：maximize 时非递增，否则非递减
        expected = sorted(values, reverse=maximize)[:limit]
        assert survivors == expected
        remaining = Counter(values) - Counter(survivors)
        for dropped in remaining.elements():
            worst = survivors[-1]
            assert (worst >= dropped) if maximize else (worst <= dropped)


@given(keyed_values(), limits(), partition_counts())
def test_top_is_idempotent(pairs, limit, partitions):
    table = table_of(pairs, partitions=partitions)
    first = list(table.top(limit).materialize())
    second = list(table.top(limit).materialize())
    assert first == second
    # 对结果再取一次 top 不会改变结果
    assert list(table_of(first).top(limit).materialize()) == first
