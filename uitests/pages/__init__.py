"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Importing this package registers every page object on PAGE_REGISTRY. New
page objects must be imported here to become resolvable.

Author: Automation Team
License: MIT
================================================================================
"""

from .home_page import HomePage
from .login_page import LoginPage

__all__ = [
    "HomePage",
    "LoginPage",
]
