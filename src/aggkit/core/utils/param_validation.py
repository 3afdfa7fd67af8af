"""
Argument checks applied while a pipeline is being built.
"""
# 说明：聚合构建期的参数检查工具，错误在任何阶段执行之前抛出。
# 职责：
# - ParamValidationError：参数不合法时抛出的 ValueError 子类
# - ensure：条件为假时抛出指定异常
# - ensure_type：要求参数属于给定类型之一（例如 top 的输入必须是 PTable）
# - validate_arguments：按参数名应用校验器，位置参数与关键字参数一视同仁
# - positive_int / probability：top 的 limit、分区数与 sample 的概率所用校验器

from __future__ import annotations

import functools
import numbers
from typing import Any, Callable, Dict, Mapping, Tuple, Type


class ParamValidationError(ValueError):
    """Raised when parameter validation fails."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParamValidationError) -> None:
    # 默认抛出 ParamValidationError
    if not condition:
        raise error(message)


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    # 错误信息带上参数名，便于定位是哪一个聚合参数不合法
    if not isinstance(value, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be instance of {names}")


def positive_int(label: str) -> Callable[[Any], int]:
    """Build a validator accepting strictly positive integers (bools rejected)."""

    def validator(value: Any) -> int:
        ensure(
            isinstance(value, numbers.Integral) and not isinstance(value, bool),
            f"{label} must be an integer",
        )
        ensure(value > 0, f"{label} must be positive, got {value}")
        return int(value)

    return validator


def probability(label: str) -> Callable[[Any], float]:
    """Build a validator accepting real numbers in the closed interval [0, 1]."""

    def validator(value: Any) -> float:
        ensure_type(value, (numbers.Real,), label=label)
        ensure(0.0 <= float(value) <= 1.0, f"{label} must lie in [0, 1], got {value}")
        return float(value)

    return validator


def validate_arguments(schema: Mapping[str, Callable[[Any], Any]]) -> Callable:
    """
    Validate (and possibly normalize) named arguments before calling ``func``.

    Each validator returns the value to pass on or raises
    ParamValidationError. Omitted arguments keep their defaults unchecked.
    """

    def decorator(func: Callable) -> Callable:
        params = func.__code__.co_varnames[: func.__code__.co_argcount]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # 复制位置参数与关键字参数，避免修改调用方实参对象
            mutable = list(args)
            kw: Dict[str, Any] = dict(kwargs)
            for name, validator in schema.items():
                if name in kw:
                    kw[name] = validator(kw[name])
                    continue
                if name not in params:
                    continue
                index = params.index(name)
                # 未显式提供的位置参数使用默认值，不强制验证
                if index >= len(mutable):
                    continue
                mutable[index] = validator(mutable[index])
            return func(*tuple(mutable), **kw)

        return wrapper

    return decorator
