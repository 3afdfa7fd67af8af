"""
Shared Hypothesis strategies for property-based testing across aggkit.
"""
# 说明：属性测试中共享的 Hypothesis 策略集。
# 职责：
# - 生成有限多重集（含重复元素）作为聚合输入
# - 生成分区数，覆盖单分区与多分区两种组合路径
# - 生成键值对序列与 top 的 limit 参数
# - 将序列切分为任意的非空子分区，用于验证结合律

from hypothesis import strategies as st


# ------------------------------------------------------------------ Elements
@st.composite
def multisets(draw, min_size=0, max_size=40):
    # 取值范围较小以保证重复元素频繁出现
    return draw(st.lists(st.integers(min_value=-20, max_value=20), min_size=min_size, max_size=max_size))


@st.composite
def partition_counts(draw):
    # 覆盖单分区（组合函数只调用一次）与多分区（map 端 + reduce 端）两种路径
    return draw(st.integers(min_value=1, max_value=4))


# ------------------------------------------------------------------ Keyed data
@st.composite
def keyed_values(draw, max_keys=3, max_size=30):
    keys = [f"k{i}" for i in range(draw(st.integers(min_value=1, max_value=max_keys)))]
    return draw(
        st.lists(
            st.tuples(st.sampled_from(keys), st.integers(min_value=-50, max_value=50)),
            max_size=max_size,
        ))


@st.composite
def limits(draw):
    return draw(st.integers(min_value=1, max_value=6))


# ------------------------------------------------------------------ Partitionings
@st.composite
def split_points(draw, values):
    # 生成任意切分点，把序列拆为若干连续且非空的子序列
    if len(values) <= 1:
        return [list(values)]
    cuts = draw(st.sets(st.integers(min_value=1, max_value=len(values) - 1)))
    bounds = [0, *sorted(cuts), len(values)]
    return [list(values[lo:hi]) for lo, hi in zip(bounds, bounds[1:])]
