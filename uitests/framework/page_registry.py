"""
================================================================================
Page Object Registry
================================================================================

Explicit registry of page object types.

Page object modules register themselves with a decorator:

    @PAGE_REGISTRY.register
    class HomePage(PageObject):
        ...

The registry maps each page object class to a factory
`(page, logger) -> instance`. Registration happens once per process when
`uitests.pages` is imported; `default_registry()` then freezes it. Instances
are built per session by `construct()`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Callable, Dict, FrozenSet, Optional, Type, TypeVar

from playwright.async_api import Page

from .exceptions import RegistryFrozenError, UnregisteredTypeError
from .log_setup import page_logger
from .page_base import PageActions, PageObject


T = TypeVar("T")

PageFactory = Callable[[Page, Any], Any]

# Package whose modules register the project's page objects on import
PAGES_PACKAGE = "uitests.pages"


def _default_factory(page_type: Type[PageObject]) -> PageFactory:
    def factory(page: Page, logger: Any) -> PageObject:
        return page_type(PageActions(page, logger))
    return factory


class PageRegistry:
    """
    Mapping from page object class to constructor.

    Usage:
        registry = PageRegistry()

        @registry.register
        class SearchPage(PageObject):
            ...

        registry.freeze()
        page_object = registry.construct(SearchPage, page)
    """

    def __init__(self) -> None:
        self._factories: Dict[type, PageFactory] = {}
        self._frozen = False

    def register(
        self,
        page_type: Optional[Type[T]] = None,
        *,
        factory: Optional[PageFactory] = None,
    ) -> Any:
        """
        Register a page object class. Usable as `@register` or
        `@register(factory=...)`.

        Raises:
            RegistryFrozenError: Registry was already frozen
            TypeError: Class is not a concrete PageObject
            ValueError: Class is already registered
        """
        def decorator(cls: Type[T]) -> Type[T]:
            self._add(cls, factory)
            return cls

        if page_type is None:
            return decorator
        return decorator(page_type)

    def _add(self, page_type: type, factory: Optional[PageFactory]) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {page_type.__name__}: registry is frozen"
            )
        if not inspect.isclass(page_type) or not issubclass(page_type, PageObject):
            raise TypeError(f"{page_type!r} is not a PageObject subclass")
        if page_type.abstract or inspect.isabstract(page_type):
            raise TypeError(f"{page_type.__name__} is abstract and cannot be registered")
        if page_type in self._factories:
            raise ValueError(f"{page_type.__name__} is already registered")

        self._factories[page_type] = factory or _default_factory(page_type)

    def freeze(self) -> "PageRegistry":
        """Make the registry read-only."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def discover(self) -> FrozenSet[type]:
        """Every registered (concrete) page object type."""
        return frozenset(self._factories)

    def construct(self, page_type: Type[T], page: Page, logger: Any = None) -> T:
        """
        Build one instance of `page_type` bound to `page`.

        Args:
            page_type: Registered page object class
            page: Session page handle
            logger: Logger for the instance; defaults to one bound to the
                    class name
        """
        try:
            factory = self._factories[page_type]
        except (KeyError, TypeError):
            raise UnregisteredTypeError(page_type) from None

        if logger is None:
            logger = page_logger(page_type.__name__)
        return factory(page, logger)

    def __contains__(self, page_type: object) -> bool:
        try:
            return page_type in self._factories
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._factories)


# Process-wide registry the page object modules register into
PAGE_REGISTRY = PageRegistry()


def default_registry() -> PageRegistry:
    """Import the page object package once and return the frozen registry."""
    if not PAGE_REGISTRY.frozen:
        importlib.import_module(PAGES_PACKAGE)
        PAGE_REGISTRY.freeze()
    return PAGE_REGISTRY


__all__ = [
    "PageRegistry",
    "PAGE_REGISTRY",
    "default_registry",
]
