"""
================================================================================
Page Object Base
================================================================================

Foundation for the Page Object Model.

Page objects do not inherit browser state. Each one is handed a PageActions
helper that owns the shared interaction primitives:

    - interact_click / interact_fill (logged, Allure step, no retries)
    - wait_for_url for navigations triggered by an interaction
    - small read helpers (title, text_of, is_visible, url)

All page objects resolved in one session receive helpers wrapping the same
Playwright Page. Only the session may close that page.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, ClassVar

import allure
from playwright.async_api import Page

from .exceptions import SessionClosedError


# Substrings that mark an input whose value must not reach the logs
SENSITIVE_MARKERS = ("password", "passwd", "secret", "token")


def _mask(selector: str, value: str) -> str:
    if any(marker in selector.lower() for marker in SENSITIVE_MARKERS):
        return "*" * len(value)
    return value


class PageActions:
    """
    Shared interaction primitives bound to one page handle and one logger.

    Usage:
        class LoginPage(PageObject):
            async def login(self, username: str, password: str) -> None:
                await self.actions.interact_fill("#username", username)
                await self.actions.interact_fill("#password", password)
                await self.actions.interact_click("#login")
    """

    def __init__(self, page: Page, logger: Any):
        """
        Initialize page actions.

        Args:
            page: Playwright Page shared by the whole session
            logger: Loguru logger bound to the owning page object type
        """
        self._page = page
        self.log = logger
        self._closed = False

    def _require_page(self) -> Page:
        """Return the shared page, refusing once the session is torn down."""
        if self._closed:
            raise SessionClosedError(
                "Page object used after its session was torn down"
            )
        return self._page

    @property
    def closed(self) -> bool:
        return self._closed

    def invalidate(self) -> None:
        """Detach from the page handle. Called by the session on teardown."""
        self._closed = True

    @property
    def url(self) -> str:
        return self._require_page().url

    # =========================================================================
    # Interaction Primitives
    # =========================================================================

    async def interact_click(self, selector: str, **kwargs: Any) -> None:
        """
        Click element by selector.

        Engine failures (element not found, timeout) propagate unchanged.
        """
        page = self._require_page()
        self.log.bind(action="click", selector=selector).info(
            f"Clicking on element: {selector}"
        )
        with allure.step(f"Click: {selector}"):
            await page.click(selector, **kwargs)

    async def interact_fill(self, selector: str, value: str, **kwargs: Any) -> None:
        """
        Fill input element by selector.

        Values of password-like fields are masked in logs and Allure steps.
        """
        page = self._require_page()
        shown = _mask(selector, value)
        self.log.bind(action="fill", selector=selector, value=shown).info(
            f"Filling element: {selector} with value: {shown}"
        )
        with allure.step(f"Fill {selector}: {shown}"):
            await page.fill(selector, value, **kwargs)

    async def wait_for_url(self, url: str, **kwargs: Any) -> None:
        """Wait until the page has navigated to a URL matching `url` (glob)."""
        page = self._require_page()
        self.log.bind(action="wait_for_url", url=url).debug(f"Waiting for URL: {url}")
        await page.wait_for_url(url, **kwargs)

    # =========================================================================
    # Read Helpers
    # =========================================================================

    async def title(self) -> str:
        """Get the document title."""
        return await self._require_page().title()

    async def text_of(self, selector: str) -> str:
        """Get text content of the first matching element."""
        text = await self._require_page().text_content(selector)
        return (text or "").strip()

    async def is_visible(self, selector: str) -> bool:
        """Check if element is visible right now (no waiting)."""
        return await self._require_page().is_visible(selector)


class PageObject:
    """
    Base class for all page objects.

    Subclasses hold selectors and page-specific workflows and reach the
    browser only through `self.actions`. Set `abstract = True` on
    intermediate classes that must never be registered.
    """

    abstract: ClassVar[bool] = True

    def __init__(self, actions: PageActions):
        self.actions = actions

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Concrete unless a subclass opts out explicitly
        if "abstract" not in cls.__dict__:
            cls.abstract = False

    @property
    def log(self) -> Any:
        return self.actions.log


__all__ = [
    "PageActions",
    "PageObject",
]
