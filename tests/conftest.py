"""
Shared pytest fixtures for the notification pipeline tests.

These fixtures provide isolated collaborators and reset process-wide state
between tests.
"""

import io
from typing import Optional

import pytest

from notifications.channels import Channel
from notifications.config import PipelineSettings, reset_settings
from notifications.factory import ChannelFactory
from notifications.logger import SharedLogger, reset_shared_logger
from notifications.store import NotificationStore
from notifications.strategies import LogStrategy, SaveStrategy, SendStrategy, StrategySet


@pytest.fixture(autouse=True)
def clean_singletons():
    """Start every test with default settings and no shared logger."""
    reset_settings(PipelineSettings())
    reset_shared_logger()
    yield
    reset_shared_logger()
    reset_settings(None)


@pytest.fixture
def settings() -> PipelineSettings:
    """Default pipeline settings."""
    return PipelineSettings()


@pytest.fixture
def log_sink() -> io.StringIO:
    """In-memory sink capturing shared-logger output."""
    return io.StringIO()


@pytest.fixture
def shared_logger(log_sink: io.StringIO) -> SharedLogger:
    """A standalone logger writing to log_sink, injected instead of the singleton."""
    return SharedLogger(sink=log_sink)


@pytest.fixture
def store() -> NotificationStore:
    """Fresh NotificationStore for each test."""
    return NotificationStore()


@pytest.fixture
def factory(
    store: NotificationStore,
    shared_logger: SharedLogger,
    settings: PipelineSettings,
) -> ChannelFactory:
    """Factory wired to the test store and logger."""
    return ChannelFactory(store=store, shared_logger=shared_logger, settings=settings)


# =============================================================================
# Recording strategies
# =============================================================================

class RecordingSend(SendStrategy):
    channel = Channel.EMAIL

    def __init__(self, calls: list):
        super().__init__()
        self.calls = calls

    def send(self, target: str, content: str) -> None:
        self.calls.append(("send", target, content))
        self._record(target, content)


class RecordingLog(LogStrategy):
    channel = Channel.EMAIL

    def __init__(self, calls: list):
        super().__init__()
        self.calls = calls

    def log(self, target: str, action: str) -> None:
        self.calls.append(("log", target, action))


class RecordingSave(SaveStrategy):
    channel = Channel.EMAIL

    def __init__(self, calls: list, supported: bool = True):
        self.calls = calls
        self.is_supported = supported

    def save(self, target: str, data: str) -> None:
        self.calls.append(("save", target, data))


@pytest.fixture
def recording_strategies():
    """
    Build strategies that append every call to a shared list.

    Returns a function: recording_strategies(save_supported=True, with_save=True)
    -> (StrategySet, calls)
    """
    def build(save_supported: bool = True, with_save: bool = True) -> tuple[StrategySet, list]:
        calls: list = []
        save: Optional[SaveStrategy] = RecordingSave(calls, save_supported) if with_save else None
        return StrategySet(send=RecordingSend(calls), log=RecordingLog(calls), save=save), calls

    return build
