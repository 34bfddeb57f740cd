# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离环境变量与时间相关的通用 fixtures。
"""

import pytest


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部 MySQL/FTP/S3 等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("BCRYPT_LOG_ROUNDS", "4")
    monkeypatch.setenv("UPLOAD_BACKEND", "ftp")
    monkeypatch.setenv("UPLOAD_PUBLIC_BASE_URL", "https://cdn.sergas.test/uploads")
    monkeypatch.setenv("REORDER_STRICT_IDS", "false")
    monkeypatch.delenv("REORDER_BASE_OFFSET", raising=False)


class FakeClock:
    """可手动推进的单调时钟."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()
