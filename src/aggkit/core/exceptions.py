"""
Error hierarchy for the aggregation layer.

Responsibilities
  - Define the aggregation error taxonomy shared by the library and executors.
  - Separate construction-time failures (type capability) from
    materialization-time failures (empty scalar results).

Usage Context
  - UnsupportedTypeError is raised while a pipeline is being built, before any
    stage runs.
  - EmptyAggregationError is raised lazily when a scalar result is resolved.

Limitations
  - StaleValueError documents a discipline rather than a detected condition;
    values are detached before being retained instead of being checked.
"""
# 说明：聚合层的异常体系，区分流水线构建期错误与物化期错误。
# 职责：
# - AggregationError：聚合子系统的统一基类异常
# - UnsupportedTypeError：元素类型不具备全序能力时在构建期快速失败
# - EmptyAggregationError：对空集合求 min/max/length 时在标量结果解析阶段抛出
# - StaleValueError：越过迭代步保留未分离的值引用属于静默数据损坏，保留该类型用于标注与显式违规报告
# - PipelineError：执行器层面的误用（如写入表的输出不是键值对）

from __future__ import annotations

from typing import Any, Optional


class AggregationError(RuntimeError):
    """
    Base error type for aggregation failures.

    - Behavior
      - Serves as the common ancestor for aggregation-specific exceptions.

    - Usage Notes
      - Catch to handle aggregation errors without mixing with argument errors.
    """


class UnsupportedTypeError(AggregationError, TypeError):
    """
    Raised when an aggregation requiring a total order is applied to elements
    that do not provide one.

    - Configuration
      - type_class: The offending element class, when known.
      - operation: Name of the aggregation that needed the ordering.
    """

    def __init__(self, operation: str, type_class: Optional[type] = None, message: Optional[str] = None):
        self.operation = operation
        self.type_class = type_class
        if message is None:
            label = type_class.__name__ if type_class is not None else "unknown"
            message = f"Can only compute {operation} for orderable elements, not for: {label}"
        super().__init__(message)


class EmptyAggregationError(AggregationError, LookupError):
    """Raised on scalar resolution when the aggregated collection produced no value."""

    def __init__(self, source: Optional[str] = None):
        self.source = source
        where = f" '{source}'" if source else ""
        super().__init__(f"scalar result{where} resolved over an empty collection")


class StaleValueError(AggregationError):
    """
    Signals that a grouped value was retained past its iteration step without
    being detached.

    The executors never raise this on their own; value types detach before
    retaining (see ``PType.detach``), and the type exists so custom executors
    can report the violation explicitly.
    """

    def __init__(self, value: Any = None):
        self.value = value
        super().__init__("grouped value retained without being detached")


class PipelineError(AggregationError):
    """Raised when a stage is used in a way the executor cannot honor."""
