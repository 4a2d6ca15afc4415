"""
================================================================================
Driver Factory
================================================================================

Starts Playwright and launches one browser process per test.

Features:
    - Engine selection from settings (chromium, firefox, webkit)
    - Validation before any process is started
    - Safe, idempotent stop (also for partially failed starts)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from loguru import logger
from playwright.async_api import async_playwright, Browser, Playwright

from .exceptions import UnsupportedEngineError
from .settings import EngineVariant, Settings


PlaywrightStarter = Callable[[], Awaitable[Playwright]]


def _start_playwright() -> Awaitable[Playwright]:
    return async_playwright().start()


@dataclass
class DriverHandle:
    """
    Live browser process owned by a single test.

    Attributes:
        variant: Engine that was launched
        playwright: Running Playwright driver
        browser: Launched browser process
        stopped: Set once the handle has been released
    """

    variant: EngineVariant
    playwright: Playwright
    browser: Browser
    stopped: bool = False

    async def new_context(self, **options: Any):
        """Open an isolated browsing context (separate cookies/storage)."""
        return await self.browser.new_context(**options)


class DriverFactory:
    """
    Launches and releases browser processes.

    Usage:
        factory = DriverFactory()
        handle = await factory.start(settings)
        try:
            context = await handle.new_context()
        finally:
            await factory.stop(handle)
    """

    def __init__(self, playwright_starter: Optional[PlaywrightStarter] = None):
        """
        Initialize driver factory.

        Args:
            playwright_starter: Coroutine factory returning a started Playwright
                                instance. Defaults to async_playwright().start().
        """
        self._start_playwright = playwright_starter or _start_playwright

    @staticmethod
    def resolve_variant(browser: Any) -> EngineVariant:
        """Map a configured engine name onto a supported variant."""
        try:
            return EngineVariant(str(browser).strip().lower())
        except ValueError:
            raise UnsupportedEngineError(browser, EngineVariant.values()) from None

    async def start(self, settings: Settings) -> DriverHandle:
        """
        Start Playwright and launch the configured browser.

        Raises:
            UnsupportedEngineError: Engine name is not supported; nothing started
            playwright.async_api.Error: Launch failed (propagated unchanged)
        """
        variant = self.resolve_variant(settings.browser)

        playwright = await self._start_playwright()
        launcher = getattr(playwright, variant.value)
        try:
            browser = await launcher.launch(headless=settings.headless)
        except Exception:
            # Do not leak the driver process when the browser never came up
            await playwright.stop()
            raise

        logger.debug(
            f"Browser started: {variant.value} (headless={settings.headless})"
        )
        return DriverHandle(variant=variant, playwright=playwright, browser=browser)

    async def stop(self, handle: Optional[DriverHandle]) -> None:
        """
        Close the browser and stop Playwright.

        No-op for None or an already stopped handle. Playwright is stopped even
        when closing the browser fails; the browser error is then re-raised.
        """
        if handle is None or handle.stopped:
            return

        handle.stopped = True
        try:
            await handle.browser.close()
        finally:
            await handle.playwright.stop()

        logger.debug(f"Browser closed: {handle.variant.value}")


__all__ = [
    "DriverHandle",
    "DriverFactory",
]
