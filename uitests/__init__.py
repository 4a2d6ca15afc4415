"""
UI test harness package.

`framework` holds the session lifecycle and page object registry, `pages`
the application page objects, `tests` and `unit` the pytest suites.
"""

__version__ = "1.0.0"
