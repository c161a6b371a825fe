"""
logscope - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest

from logscope import Clock, LogOptions, MethodDescriptor, ScopeRegistry, set_clock
from logscope.config import loader

# Set test environment
os.environ["LOGSCOPE_ENVIRONMENT"] = "test"
os.environ["LOGSCOPE_LOG_LEVEL"] = "DEBUG"


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    """Drop the cached configuration so environment changes take effect."""
    loader._config_instance = None
    yield
    loader._config_instance = None


@pytest.fixture(autouse=True)
def reset_clock() -> Generator[None, None, None]:
    """Restore the process-wide clock after each test."""
    yield
    set_clock(None)


@pytest.fixture
def logger() -> MagicMock:
    """Logger spy exposing ``log(message)``."""
    mock = MagicMock()
    mock.log = MagicMock()
    return mock


@pytest.fixture
def registry() -> ScopeRegistry:
    """Isolated registry so scopes in one test never see another test's classes."""
    return ScopeRegistry()


class HookRecorder:
    """Records hook invocations in order as ``(event, label, descriptor, result)``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, MethodDescriptor[Any], Any]] = []

    def options(self, label: str) -> LogOptions[Any, Any]:
        return LogOptions(
            on_method_start=lambda logger, method: self.calls.append(("start", label, method, None)),
            on_method_end=lambda logger, method, result: self.calls.append(("end", label, method, result)),
        )

    @property
    def events(self) -> list[tuple[str, str]]:
        return [(event, label) for event, label, _, _ in self.calls]


@pytest.fixture
def recorder() -> HookRecorder:
    return HookRecorder()


def stepping_clock(step_ms: float = 5.0, start_ms: float = 1000.0) -> Clock:
    """Deterministic clock advancing ``step_ms`` per reading."""
    monotonic: Iterator[float] = (start_ms + i * step_ms for i in range(10**6))
    base = datetime(2024, 1, 1, tzinfo=UTC)
    wall: Iterator[datetime] = (base + timedelta(milliseconds=i * step_ms) for i in range(10**6))
    return Clock(monotonic_source=monotonic.__next__, wall_clock_source=wall.__next__, high_resolution=True)


@pytest.fixture
def make_clock() -> Callable[..., Clock]:
    return stepping_clock
