# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供 monkeypatch 相关的通用 fixtures 与默认校验器.
"""

import pytest

from fieldguard.validation import RequestValidator


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响路由级未知键策略
    - 日志级别固定, 不受 .env 影响
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("FIELDGUARD_ALLOW_UNKNOWN", raising=False)
    monkeypatch.delenv("FIELDGUARD_STRIP_UNKNOWN", raising=False)


@pytest.fixture
def validator() -> RequestValidator:
    """路由级默认策略: 允许未知键, 不剥离."""
    return RequestValidator()

