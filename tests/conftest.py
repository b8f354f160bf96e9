"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from fluid_tracker.config import Settings
from fluid_tracker.containers import AppContainer, build_container
from fluid_tracker.services.storage import InMemoryKeyValueStore


@dataclass
class FixedClock:
    """Clock that always returns the same moment."""

    moment: datetime = field(default_factory=lambda: datetime(2024, 2, 14, 8, 30))

    def __call__(self) -> datetime:
        return self.moment


@dataclass
class RecordingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store that records every write."""

    writes: list[tuple[str, str]]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        super().__init__(values)
        self.writes = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    logger = logging.getLogger("fluid_tracker")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        store_path="",
        key_prefix="moist",
        default_goal=64.0,
        default_goal_oz=True,
        prefer_oz=True,
        use_meridiem=True,
        timezone=None,
        log_level="INFO",
        environment="test",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> RecordingKeyValueStore:
    return RecordingKeyValueStore()


@pytest.fixture
def container(settings, store, clock) -> AppContainer:
    return build_container(settings, store=store, clock=clock)
