"""
Seeded generators for randomized transforms.

Responsibilities
  - Normalize seeds into numpy Generators.
  - Derive one independent stream per partition from a single root seed.

Limitations
  - Streams are reproducible only for a fixed seed and partition count.
"""
# 说明：随机化变换（如 sample）使用的生成器工具。
# 职责：
# - create_rng：把种子、SeedSequence 或已有 Generator 统一为 numpy Generator
# - split_rng：由根生成器派生若干互相独立的子生成器
# - partition_rng：按 (种子, 分区号, 分区数) 取得分区私有的随机流

from __future__ import annotations

from typing import List, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def create_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return ``seed`` if it is already a Generator, otherwise seed a new one."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def split_rng(rng: np.random.Generator, num: int) -> List[np.random.Generator]:
    """Spawn ``num`` child generators whose streams do not overlap."""
    if num <= 0:
        raise ValueError("num must be positive")
    return list(rng.spawn(num))


def partition_rng(seed: SeedLike, index: int, count: int) -> np.random.Generator:
    # 同一种子下，各分区的子生成器只取决于分区号与分区数
    if not 0 <= index < count:
        raise ValueError(f"partition index {index} outside [0, {count})")
    return split_rng(create_rng(seed), count)[index]
