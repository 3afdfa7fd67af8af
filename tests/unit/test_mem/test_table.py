"""
Unit tests for in-memory tables and groupings.
"""
# 说明：MemTable / MemGroupedTable 与洗牌工具的单元测试。
# 覆盖：
# - group_pairs / shuffle：按键首次出现顺序分组，按序号轮转分配 reducer 分区
# - group_by_key：分组条目为 Pair(key, values)，分区数可配置且必须为正
# - combine_values：单源分区时每个键组合一次，多源分区时 map 端与 reduce 端各组合一次
# - keys / values / ungroup / as_dict

import pytest

from aggkit.core.exceptions import PipelineError
from aggkit.core.functions import CombineFn, sum_longs
from aggkit.core.types import Pair, ints, strings
from aggkit.core.utils import ParamValidationError
from aggkit.mem import group_pairs, shuffle, table_of

# 克隆会复制实例属性，调用记录保存在模块级列表中
_COMBINE_CALLS = []


class _RecordingSumFn(CombineFn):
    def process(self, input, emitter):
        key, values = input
        _COMBINE_CALLS.append((key, tuple(values)))
        emitter.emit(Pair(key, sum(values)))


@pytest.fixture
def combine_calls():
    _COMBINE_CALLS.clear()
    yield _COMBINE_CALLS
    _COMBINE_CALLS.clear()


def test_group_pairs_first_appearance() -> None:
    grouped = group_pairs([("b", 1), ("a", 2), ("b", 3)])
    assert grouped == [Pair("b", (1, 3)), Pair("a", (2,))]


def test_shuffle_round_robin() -> None:
    reducers = shuffle([[("a", 1), ("b", 2)], [("c", 3), ("a", 4)]], 2)
    assert reducers == (
        (Pair("a", (1, 4)), Pair("c", (3,))),
        (Pair("b", (2,)),),
    )


def test_group_by_key_entries() -> None:
    table = table_of([("x", 1), ("y", 2), ("x", 3)], partitions=2)
    grouped = table.group_by_key(1)
    assert list(grouped.materialize()) == [Pair("x", (1, 3)), Pair("y", (2,))]
    assert grouped.get_table_type() == table.get_ptype()
    assert grouped.get_ptype().name == "table<string,collection<int>>"
    assert len(table.group_by_key(2).get_partitions()) == 2
    with pytest.raises(ParamValidationError):
        table.group_by_key(0)


def test_combine_single_partition_runs_once_per_key(combine_calls) -> None:
    table = table_of([("k", 1), ("k", 2), ("j", 5)])
    combined = table.group_by_key().combine_values(_RecordingSumFn())
    assert combined.as_dict() == {"k": 3, "j": 5}
    assert combine_calls == [("k", (1, 2)), ("j", (5,))]


def test_combine_multi_partition_runs_map_and_reduce_side(combine_calls) -> None:
    table = table_of([("k", 1), ("k", 2), ("k", 3), ("k", 4)], partitions=2)
    combined = table.group_by_key(1).combine_values(_RecordingSumFn())
    assert combined.as_dict() == {"k": 10}
    # 两个 map 端局部组合 + 一次 reduce 端组合
    assert combine_calls == [("k", (1, 2)), ("k", (3, 4)), ("k", (3, 7))]


def test_combine_result_keeps_table_type() -> None:
    table = table_of([("a", 1), ("a", 1)], partitions=2)
    combined = table.group_by_key().combine_values(sum_longs())
    assert combined.get_ptype() == table.get_ptype()
    assert combined.as_dict() == {"a": 2}


def test_keys_values_and_ungroup() -> None:
    table = table_of([("a", 1), ("b", 2), ("a", 3)])
    assert list(table.keys()) == ["a", "b", "a"]
    assert table.keys().get_ptype() == strings()
    assert list(table.values()) == [1, 2, 3]
    assert table.values().get_ptype() == ints()
    ungrouped = table.group_by_key().ungroup()
    assert list(ungrouped.materialize()) == [("a", 1), ("a", 3), ("b", 2)]
    assert table.as_dict() == {"a": 3, "b": 2}


def test_grouped_table_cannot_union() -> None:
    grouped = table_of([("a", 1)]).group_by_key()
    with pytest.raises(PipelineError):
        grouped.union(grouped)
