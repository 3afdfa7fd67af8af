"""Shared utility helpers used across the core library."""

from .random import (
    partition_rng,
    create_rng,
    split_rng,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .logging import (
    ValueTruncationFilter,
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure,
    ensure_type,
    positive_int,
    probability,
    validate_arguments,
    ParamValidationError,
)

__all__ = [
    "create_rng",
    "split_rng",
    "partition_rng",
    "RuntimeConfig",
    "get_config",
    "configure",
    "ValueTruncationFilter",
    "get_logger",
    "configure_logging",
    "ensure",
    "ensure_type",
    "positive_int",
    "probability",
    "validate_arguments",
    "ParamValidationError",
]
