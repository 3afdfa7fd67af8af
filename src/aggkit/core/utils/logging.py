"""
Lightweight logging helpers with payload-aware defaults.
"""
# 说明：轻量级日志工具，提供统一的 logger 获取入口，并避免元素载荷刷屏。
# 职责：
# - ValueTruncationFilter：按运行时配置截断日志记录上携带的 values / payload 字段
# - configure_logging(...)：初始化 logging 基本配置并为根 logger 挂载截断过滤器
# - get_logger(...)：按名称获取 logger，必要时自动完成日志系统初始化
# 约定：
# - 截断长度由 RuntimeConfig.log_value_limit 控制，<= 0 表示不截断
# - 日志级别优先级：显式参数 level > 环境变量 AGGKIT_LOG_LEVEL > 运行时配置的 log_level

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import get_config


class ValueTruncationFilter(logging.Filter):
    """Filter that abbreviates element payloads attached to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        limit = get_config().log_value_limit
        if limit <= 0:
            return True
        # 保留字段结构，仅将过长的 repr 截断并加省略号
        for attr in ("values", "payload"):
            if hasattr(record, attr):
                text = repr(getattr(record, attr))
                if len(text) > limit:
                    text = text[:limit] + "..."
                setattr(record, attr, text)
        return True


def configure_logging(level: Optional[str] = None) -> None:
    # 初始化根 logger：确定最终日志级别、设置格式，并挂载 ValueTruncationFilter
    log_level = level or os.environ.get("AGGKIT_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(name)s %(asctime)s | %(message)s",
    )
    root = logging.getLogger()
    if not any(isinstance(f, ValueTruncationFilter) for f in root.filters):
        root.addFilter(ValueTruncationFilter())


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger，若尚无 handler，则懒加载方式调用 configure_logging 进行初始化
    # 向上传播的记录不会经过根 logger 的过滤器，因此在具名 logger 上单独挂载
    logger = logging.getLogger(name)
    if not logger.handlers:
        configure_logging()
    if not any(isinstance(f, ValueTruncationFilter) for f in logger.filters):
        logger.addFilter(ValueTruncationFilter())
    return logger
