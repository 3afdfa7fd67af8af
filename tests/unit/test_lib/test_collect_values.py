"""
Unit tests for per-key value collection.
"""
# 说明：collect_values 聚合的单元测试。
# 覆盖：
# - 每个键对应其全部值组成的列表，结果类型为 table<k,collection<v>>
# - 可变值在插入结果前被 detach，与输入对象互不影响
# - 输入不是表时在构建期失败

import pytest

from aggkit.core.utils import ParamValidationError
from aggkit.lib import aggregate
from aggkit.mem import collection_of, table_of


@pytest.mark.parametrize("partitions", [1, 2])
def test_collect_values_groups_by_key(partitions) -> None:
    table = table_of([("a", 1), ("b", 2), ("a", 3)], partitions=partitions)
    collected = table.collect_values()
    assert {key: sorted(values) for key, values in collected.as_dict().items()} == {"a": [1, 3], "b": [2]}
    assert collected.get_ptype().name == "table<string,collection<int>>"


def test_collect_values_detaches_mutable_values() -> None:
    shared = [1]
    collected = table_of([("k", shared), ("k", [2])]).collect_values().as_dict()
    assert collected == {"k": [[1], [2]]}
    # 修改原始对象不会影响已收集的结果
    shared.append(99)
    assert collected["k"][0] == [1]


def test_collect_values_rejects_plain_collection() -> None:
    with pytest.raises(ParamValidationError):
        aggregate.collect_values(collection_of(["a"]))
