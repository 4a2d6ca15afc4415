"""
Fixtures for engine-free unit tests.
"""

from __future__ import annotations

from typing import Generator, List

import pytest
from loguru import logger

from uitests.framework.driver_factory import DriverFactory
from uitests.framework.page_registry import PageRegistry, default_registry
from uitests.framework.settings import Settings
from uitests.unit.fakes import FakeEngine


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def driver_factory(engine: FakeEngine) -> DriverFactory:
    return DriverFactory(playwright_starter=engine.start)


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(
        browser="chromium",
        headless=True,
        base_url="https://example.com",
        timeout_ms=30000,
    )


@pytest.fixture
def registry() -> PageRegistry:
    return default_registry()


@pytest.fixture
def log_records() -> Generator[List[dict], None, None]:
    """Loguru records emitted during the test."""
    records: List[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
