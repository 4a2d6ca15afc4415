import abc

import pytest

from uitests.framework.exceptions import RegistryFrozenError, UnregisteredTypeError
from uitests.framework.page_base import PageActions, PageObject
from uitests.framework.page_registry import PageRegistry, default_registry
from uitests.pages import HomePage, LoginPage
from uitests.unit.fakes import FakeEngine, FakePage


class SearchPage(PageObject):
    pass


class ResultsPage(PageObject):
    pass


class SectionBase(PageObject):
    abstract = True


class AbstractPanel(PageObject, abc.ABC):
    @abc.abstractmethod
    async def open(self):
        ...


class NotAPage:
    pass


@pytest.fixture
def fresh_registry() -> PageRegistry:
    return PageRegistry()


@pytest.fixture
def page() -> FakePage:
    return FakePage(FakeEngine())


def test_discover_returns_registered_types(fresh_registry):
    fresh_registry.register(SearchPage)
    fresh_registry.register(ResultsPage)

    assert fresh_registry.discover() == frozenset({SearchPage, ResultsPage})
    assert SearchPage in fresh_registry
    assert len(fresh_registry) == 2


def test_register_works_as_decorator(fresh_registry):
    @fresh_registry.register
    class ProfilePage(PageObject):
        pass

    assert ProfilePage in fresh_registry
    assert ProfilePage.__name__ == "ProfilePage"


@pytest.mark.parametrize("page_type", [PageObject, SectionBase, AbstractPanel])
def test_abstract_types_are_rejected(fresh_registry, page_type):
    with pytest.raises(TypeError, match="abstract"):
        fresh_registry.register(page_type)


def test_subclass_of_abstract_marker_is_concrete(fresh_registry):
    class SettingsSection(SectionBase):
        pass

    fresh_registry.register(SettingsSection)

    assert SettingsSection in fresh_registry


def test_non_page_objects_are_rejected(fresh_registry):
    with pytest.raises(TypeError, match="not a PageObject"):
        fresh_registry.register(NotAPage)


def test_duplicate_registration_is_rejected(fresh_registry):
    fresh_registry.register(SearchPage)

    with pytest.raises(ValueError, match="already registered"):
        fresh_registry.register(SearchPage)


def test_frozen_registry_is_read_only(fresh_registry):
    fresh_registry.register(SearchPage)
    fresh_registry.freeze()

    with pytest.raises(RegistryFrozenError):
        fresh_registry.register(ResultsPage)
    assert fresh_registry.discover() == frozenset({SearchPage})


def test_construct_binds_page_and_type_scoped_logger(fresh_registry, page, log_records):
    fresh_registry.register(SearchPage)

    instance = fresh_registry.construct(SearchPage, page)
    instance.log.info("hello")

    assert isinstance(instance, SearchPage)
    assert isinstance(instance.actions, PageActions)
    assert instance.actions._page is page
    assert log_records[-1]["extra"]["page_object"] == "SearchPage"


def test_construct_builds_new_instance_each_call(fresh_registry, page):
    fresh_registry.register(SearchPage)

    first = fresh_registry.construct(SearchPage, page)
    second = fresh_registry.construct(SearchPage, page)

    assert first is not second
    assert type(first) is type(second)
    assert first.actions._page is second.actions._page


def test_custom_factory_is_used(fresh_registry, page):
    calls = []

    def factory(page_handle, logger):
        calls.append(page_handle)
        return ResultsPage(PageActions(page_handle, logger))

    fresh_registry.register(ResultsPage, factory=factory)
    instance = fresh_registry.construct(ResultsPage, page)

    assert isinstance(instance, ResultsPage)
    assert calls == [page]


@pytest.mark.parametrize("page_type", [SearchPage, NotAPage, "HomePage"])
def test_construct_unregistered_type_fails(fresh_registry, page, page_type):
    with pytest.raises(UnregisteredTypeError):
        fresh_registry.construct(page_type, page)


def test_default_registry_contains_project_pages():
    registry = default_registry()

    assert registry.frozen
    assert {HomePage, LoginPage} <= registry.discover()
    assert default_registry() is registry
