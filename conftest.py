"""
================================================================================
Root Pytest Configuration
================================================================================

Process start for every test run:
  - Register command line overrides for the UI settings
  - Load the immutable Settings once, before any test setup
  - Initialize the Loguru logger at the configured level
  - Register project-wide markers

A configuration error here aborts the run instead of failing each test.

================================================================================
"""

from __future__ import annotations

from pathlib import Path

import pytest

from uitests.framework.log_setup import init_logger
from uitests.framework.settings import init_settings


def pytest_addoption(parser):
    group = parser.getgroup("uitests", "UI harness settings")
    group.addoption(
        "--config",
        action="store",
        default=None,
        help="Path to the settings file (default: config/config.yaml)",
    )
    group.addoption(
        "--ui-browser",
        action="store",
        default=None,
        help="Browser engine override: chromium, firefox or webkit",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )
    group.addoption(
        "--ui-base-url",
        action="store",
        default=None,
        help="Base URL override",
    )


def pytest_configure(config):
    """Load settings, initialize logging at the configured level, then register markers."""
    config_path = config.getoption("--config")
    settings = init_settings(
        config_path=Path(config_path) if config_path else None,
        browser=config.getoption("--ui-browser"),
        headless=False if config.getoption("--ui-headed") else None,
        base_url=config.getoption("--ui-base-url"),
    )
    init_logger(level=settings.log_level)

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: Engine-free tests using an in-memory browser fake"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests driving a real browser"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests by directory."""
    for item in items:
        path = item.path.as_posix()
        if "/uitests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        if "/uitests/tests/" in path:
            item.add_marker(pytest.mark.e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Playwright POM Harness",
        "=" * 60,
        "",
    ]

