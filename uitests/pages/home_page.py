"""
================================================================================
Home Page Object
================================================================================

Landing page reached by every session during setup (settings.base_url).

================================================================================
"""

from __future__ import annotations

import allure

from uitests.framework.page_base import PageObject
from uitests.framework.page_registry import PAGE_REGISTRY


@PAGE_REGISTRY.register
class HomePage(PageObject):
    """Home page object (async)."""

    HEADING = "h1"
    LOGIN_LINK = "a[href*='login']"

    @allure.step("Get page title")
    async def get_title(self) -> str:
        """Return the browser tab title (the document <title>)."""
        self.log.info("Fetching page title...")
        title = await self.actions.title()
        self.log.info(f"Page title retrieved: {title}")
        return title

    @allure.step("Get main heading")
    async def get_heading(self) -> str:
        return await self.actions.text_of(self.HEADING)

    @allure.step("Open login page")
    async def go_to_login(self) -> None:
        await self.actions.interact_click(self.LOGIN_LINK)
        await self.actions.wait_for_url("**/*login*")
