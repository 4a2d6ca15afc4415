"""
================================================================================
UI Harness Framework
================================================================================

Playwright-based test session lifecycle and Page Object resolution.

Components:
    - settings: Immutable settings loaded once per process
    - driver_factory: Browser process launch/stop
    - session: Per-test context, page and page object memo
    - page_registry: Explicit page object registry
    - page_base: Shared interaction primitives for page objects
    - lifecycle: Per-test setup/teardown state machine

Author: Automation Team
License: MIT
================================================================================
"""

from .exceptions import (
    ConfigurationError,
    HarnessError,
    LifecycleError,
    RegistryFrozenError,
    SessionClosedError,
    SessionNotReadyError,
    UnregisteredTypeError,
    UnsupportedEngineError,
)
from .settings import EngineVariant, Settings, get_settings, init_settings
from .log_setup import init_logger
from .driver_factory import DriverFactory, DriverHandle
from .page_base import PageActions, PageObject
from .page_registry import PAGE_REGISTRY, PageRegistry, default_registry
from .session import Session
from .lifecycle import LifecycleController, LifecycleState

__all__ = [
    "ConfigurationError",
    "HarnessError",
    "LifecycleError",
    "RegistryFrozenError",
    "SessionClosedError",
    "SessionNotReadyError",
    "UnregisteredTypeError",
    "UnsupportedEngineError",
    "EngineVariant",
    "Settings",
    "get_settings",
    "init_settings",
    "init_logger",
    "DriverFactory",
    "DriverHandle",
    "PageActions",
    "PageObject",
    "PAGE_REGISTRY",
    "PageRegistry",
    "default_registry",
    "Session",
    "LifecycleController",
    "LifecycleState",
]
