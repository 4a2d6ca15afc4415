"""
================================================================================
Login Page Object
================================================================================

Username/password form built on the shared interaction primitives.

NOTE:
  Selectors are generic defaults. Applications with stable `data-testid`
  attributes should override the class constants.

================================================================================
"""

from __future__ import annotations

import allure

from uitests.framework.page_base import PageObject
from uitests.framework.page_registry import PAGE_REGISTRY


@PAGE_REGISTRY.register
class LoginPage(PageObject):
    """Login page object (async)."""

    USERNAME_INPUT = "#username"
    PASSWORD_INPUT = "#password"
    LOGIN_BUTTON = "#login"
    STATUS_MESSAGE = "#status"

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """Fill the form and submit it."""
        await self.actions.interact_fill(self.USERNAME_INPUT, username)
        await self.actions.interact_fill(self.PASSWORD_INPUT, password)
        await self.actions.interact_click(self.LOGIN_BUTTON)

    async def get_status(self) -> str:
        """Text of the status/error message shown after submitting."""
        return await self.actions.text_of(self.STATUS_MESSAGE)

    async def is_form_displayed(self) -> bool:
        for selector in (self.USERNAME_INPUT, self.PASSWORD_INPUT, self.LOGIN_BUTTON):
            if not await self.actions.is_visible(selector):
                return False
        return True
