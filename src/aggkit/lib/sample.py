"""
Bernoulli sampling of collections.

Each element is kept independently with the given probability. Every partition
draws from its own generator, split from one seeded root generator, so a seeded
sample is reproducible for a fixed partitioning.
"""
# 说明：对集合做独立伯努利采样，每个元素以给定概率保留。
# 职责：
# - SampleFn：按分区持有私有 numpy Generator，逐元素抽样
# - sample：校验概率参数并构建采样阶段
# 约定：
# - seed 未提供时回退到 RuntimeConfig.rng_seed；二者皆为空时结果不可复现

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from aggkit.core.collection import PCollection
from aggkit.core.functions import DoFn, Emitter
from aggkit.core.utils.config import get_config
from aggkit.core.utils.param_validation import probability as probability_validator
from aggkit.core.utils.param_validation import validate_arguments
from aggkit.core.utils.random import partition_rng


class SampleFn(DoFn):
    def __init__(self, acceptance_probability: float, seed: Optional[int] = None):
        self.acceptance_probability = acceptance_probability
        self.seed = seed
        self._rng: Optional[np.random.Generator] = None

    def initialize(self) -> None:
        # 从同一根生成器派生出与分区数相同的独立随机流，并取本分区对应的一条
        self._rng = partition_rng(self.seed, self.partition_index, self.num_partitions)

    def process(self, input: Any, emitter: Emitter) -> None:
        if self._rng is None:
            self.initialize()
        if self._rng.random() < self.acceptance_probability:
            emitter.emit(input)

    def cleanup(self, emitter: Emitter) -> None:
        self._rng = None


@validate_arguments({"acceptance_probability": probability_validator("acceptance_probability")})
def sample(collect: PCollection, acceptance_probability: float, seed: Optional[int] = None) -> PCollection:
    """Keep each element independently with probability ``acceptance_probability``."""
    if seed is None:
        seed = get_config().rng_seed
    return collect.parallel_do(
        SampleFn(acceptance_probability, seed),
        collect.get_ptype(),
        name=f"sample({acceptance_probability})",
    )
