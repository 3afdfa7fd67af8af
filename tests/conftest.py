"""Shared pytest configuration and path setup for test modules."""

import dataclasses
import sys
from pathlib import Path

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from aggkit.core.utils.config import get_config  # noqa: E402


@pytest.fixture
def runtime_config():
    # 提供全局 RuntimeConfig，并在测试结束后恢复所有字段，避免测试之间相互污染
    cfg = get_config()
    snapshot = dataclasses.replace(cfg, extra=dict(cfg.extra))
    yield cfg
    for f in dataclasses.fields(cfg):
        setattr(cfg, f.name, getattr(snapshot, f.name))
