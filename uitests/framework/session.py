"""
================================================================================
Test Session
================================================================================

Per-test container: one browsing context, one page, and the page objects
resolved against that page.

Lifecycle:
    session = Session(driver, settings, registry)
    await session.open()        # context + page + default timeout
    await session.navigate()    # goto settings.base_url
    home = session.resolve(HomePage)
    ...
    await session.destroy()     # never raises

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from loguru import logger
from playwright.async_api import BrowserContext, Page

from .driver_factory import DriverHandle
from .exceptions import (
    SessionClosedError,
    SessionNotReadyError,
    UnregisteredTypeError,
)
from .page_registry import PageRegistry
from .settings import Settings


T = TypeVar("T")


class Session:
    """
    Session registry scoped to a single test.

    Owns the browsing context and page; page objects only borrow the page.
    """

    def __init__(
        self,
        driver: DriverHandle,
        settings: Settings,
        registry: PageRegistry,
    ):
        self.driver = driver
        self.settings = settings
        self.registry = registry

        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._instances: Dict[type, Any] = {}
        self._navigated = False
        self._destroyed = False

    @classmethod
    async def create(
        cls,
        driver: DriverHandle,
        settings: Settings,
        registry: PageRegistry,
    ) -> "Session":
        """
        Open and navigate a new session.

        On failure everything opened so far is closed and the error
        propagates; no partial session is returned.
        """
        session = cls(driver, settings, registry)
        try:
            await session.open()
            await session.navigate()
        except Exception:
            await session.destroy()
            raise
        return session

    # =========================================================================
    # Setup
    # =========================================================================

    async def open(self) -> None:
        """Open the browsing context and page, apply the default timeout."""
        if self._destroyed:
            raise SessionClosedError("Session was already destroyed")
        if self._context is not None:
            raise SessionNotReadyError("Session is already open")

        self._context = await self.driver.new_context()
        self._page = await self._context.new_page()
        self._page.set_default_timeout(self.settings.timeout_ms)
        logger.debug(
            f"Session opened (default timeout {self.settings.timeout_ms} ms)"
        )

    async def navigate(self) -> None:
        """Navigate the page to the configured base URL."""
        if self._page is None:
            raise SessionNotReadyError("Session must be opened before navigation")

        await self._page.goto(self.settings.base_url)
        self._navigated = True
        logger.debug(f"Navigated to: {self.settings.base_url}")

    # =========================================================================
    # Page Objects
    # =========================================================================

    @property
    def page(self) -> Page:
        if self._destroyed:
            raise SessionClosedError("Session was destroyed")
        if self._page is None:
            raise SessionNotReadyError("Session has no page yet")
        return self._page

    @property
    def ready(self) -> bool:
        return self._navigated and not self._destroyed

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def resolve(self, page_type: Type[T]) -> T:
        """
        Return the session's instance of `page_type`, building it on first use.

        Raises:
            UnregisteredTypeError: Type is not in the registry
            SessionNotReadyError: Navigation has not completed
            SessionClosedError: Session was destroyed
        """
        if self._destroyed:
            raise SessionClosedError("Session was destroyed")
        if page_type not in self.registry:
            raise UnregisteredTypeError(page_type)
        if not self._navigated:
            raise SessionNotReadyError(
                "Page objects are available only after navigation to the base URL"
            )

        instance = self._instances.get(page_type)
        if instance is None:
            instance = self.registry.construct(page_type, self._page)
            self._instances[page_type] = instance
        return instance

    # =========================================================================
    # Teardown
    # =========================================================================

    async def destroy(self) -> None:
        """
        Invalidate page objects and close the browsing context.

        Safe on a session that never opened. Failures are logged, never raised.
        """
        if self._destroyed:
            return
        self._destroyed = True

        for instance in self._instances.values():
            actions = getattr(instance, "actions", None)
            if actions is not None:
                actions.invalidate()
        self._instances.clear()

        context, self._context, self._page = self._context, None, None
        if context is None:
            return

        try:
            await context.close()
            logger.debug("Browsing context closed")
        except Exception as e:
            logger.error(f"Error during session teardown: {e!r}")


__all__ = [
    "Session",
]
