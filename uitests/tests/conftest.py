"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures wiring page objects to tests.

Key Features:
- One LifecycleController (and browser process) per test
- Page objects resolved from the test's session
- Screenshot attached to Allure when a test body fails
- Guaranteed teardown, even when setup or the test body fails

================================================================================
"""

from __future__ import annotations

from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from uitests.framework.lifecycle import LifecycleController
from uitests.framework.page_registry import PageRegistry, default_registry
from uitests.framework.settings import Settings, get_settings
from uitests.pages.home_page import HomePage
from uitests.pages.login_page import LoginPage


# Playwright error text when browser binaries were never downloaded
MISSING_BROWSER_MARKER = "Executable doesn't exist"


# ================================================================================
# Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item (item.rep_setup, item.rep_call)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Settings / Registry Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Process settings, loaded once by the root conftest."""
    return get_settings()


@pytest.fixture(scope="session")
def page_registry() -> PageRegistry:
    """Frozen page object registry, discovered once per process."""
    return default_registry()


# ================================================================================
# Session Fixtures
# ================================================================================

async def _attach_failure_screenshot(controller: LifecycleController, name: str) -> None:
    try:
        screenshot = await controller.session.page.screenshot(full_page=True)
        allure.attach(
            screenshot,
            name=f"failure_{name}",
            attachment_type=allure.attachment_type.PNG,
        )
    except Exception as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")


@pytest.fixture
async def lifecycle(
    request: pytest.FixtureRequest,
    settings: Settings,
    page_registry: PageRegistry,
) -> AsyncGenerator[LifecycleController, None]:
    """
    Function-scoped session: fresh browser, context and page per test.

    Setup errors fail the test before its body runs; teardown always runs and
    only logs its own failures.
    """
    controller = LifecycleController(settings, registry=page_registry)
    try:
        try:
            await controller.setup()
        except PlaywrightError as e:
            if MISSING_BROWSER_MARKER in str(e):
                pytest.skip(
                    f"{settings.browser} is not installed (run `playwright install`)"
                )
            raise

        yield controller

        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed and controller.ready:
            await _attach_failure_screenshot(controller, request.node.name)
    finally:
        await controller.teardown()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(lifecycle: LifecycleController) -> HomePage:
    """HomePage bound to the current test's session."""
    return lifecycle.resolve(HomePage)


@pytest.fixture
def login_page(lifecycle: LifecycleController) -> LoginPage:
    """LoginPage bound to the current test's session."""
    return lifecycle.resolve(LoginPage)
