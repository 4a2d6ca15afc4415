"""
================================================================================
Harness Exceptions
================================================================================

Error taxonomy for the UI harness.

    - Setup errors (unsupported engine, configuration) abort a test before its
      body runs.
    - Resolution errors (unregistered page object, session not ready/closed)
      are fatal to the calling test only.
    - Interaction errors are never wrapped: Playwright's own errors propagate.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class HarnessError(Exception):
    """Base class for every error raised by the harness itself."""
    pass


class ConfigurationError(HarnessError):
    """Raised when configuration loading or access fails."""
    pass


class UnsupportedEngineError(HarnessError):
    """Raised when the configured browser engine is not supported."""

    def __init__(self, browser: Any, supported: Iterable[str] = ()):
        self.browser = browser
        self.supported = tuple(supported)
        message = f"Unsupported browser: {browser!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class UnregisteredTypeError(HarnessError):
    """Raised when a page object type was never registered."""

    def __init__(self, page_type: Any):
        self.page_type = page_type
        name = getattr(page_type, "__name__", repr(page_type))
        super().__init__(f"Page object type is not registered: {name}")


class SessionNotReadyError(HarnessError):
    """Raised when page objects are requested before navigation completed."""
    pass


class SessionClosedError(HarnessError):
    """Raised when a session (or a page object bound to it) is used after teardown."""
    pass


class RegistryFrozenError(HarnessError):
    """Raised when registering a page object into a frozen registry."""
    pass


class LifecycleError(HarnessError):
    """Raised on invalid lifecycle transitions (e.g. reusing a controller)."""

    def __init__(self, message: str, state: Optional[Any] = None):
        self.state = state
        super().__init__(message)


__all__ = [
    "HarnessError",
    "ConfigurationError",
    "UnsupportedEngineError",
    "UnregisteredTypeError",
    "SessionNotReadyError",
    "SessionClosedError",
    "RegistryFrozenError",
    "LifecycleError",
]
