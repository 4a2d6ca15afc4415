"""
In-memory stand-in for the Playwright async API.

Every call is appended to `FakeEngine.events` so tests can assert ordering.
Failures are injected per call site through `FakeEngine.fail`.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class FakeEngine:
    """Shared state for one fake Playwright installation."""

    def __init__(
        self,
        title: str = "Example Domain",
        elements: Iterable[str] = ("h1", "#username", "#password", "#login", "#status"),
        texts: Optional[Dict[str, str]] = None,
    ):
        self.title = title
        self.elements = set(elements)
        self.texts = texts or {"h1": "Example Domain"}
        self.events: List[tuple] = []
        self.fail: Dict[str, BaseException] = {}
        self.playwrights: List["FakePlaywright"] = []

    def record(self, *event: Any) -> None:
        self.events.append(event)

    def check(self, point: str) -> None:
        error = self.fail.get(point)
        if error is not None:
            raise error

    def names(self) -> List[str]:
        """Event names only, in call order."""
        return [event[0] for event in self.events]

    async def start(self) -> "FakePlaywright":
        index = len(self.playwrights)
        self.record("playwright.start", index)
        playwright = FakePlaywright(self, index)
        self.playwrights.append(playwright)
        return playwright


class FakePlaywright:
    def __init__(self, engine: FakeEngine, index: int):
        self.engine = engine
        self.index = index
        self.stopped = False
        self.chromium = FakeBrowserType(self, "chromium")
        self.firefox = FakeBrowserType(self, "firefox")
        self.webkit = FakeBrowserType(self, "webkit")

    async def stop(self) -> None:
        self.engine.record("playwright.stop", self.index)
        self.engine.check("playwright.stop")
        self.stopped = True


class FakeBrowserType:
    def __init__(self, playwright: FakePlaywright, name: str):
        self.playwright = playwright
        self.name = name

    async def launch(self, **options: Any) -> "FakeBrowser":
        engine = self.playwright.engine
        engine.record("browser.launch", self.playwright.index, self.name, options)
        engine.check("launch")
        return FakeBrowser(self.playwright, self.name, options)


class FakeBrowser:
    def __init__(self, playwright: FakePlaywright, name: str, options: Dict[str, Any]):
        self.playwright = playwright
        self.name = name
        self.options = options
        self.closed = False
        self.contexts: List[FakeContext] = []

    @property
    def engine(self) -> FakeEngine:
        return self.playwright.engine

    async def new_context(self, **options: Any) -> "FakeContext":
        self.engine.record("browser.new_context", self.playwright.index)
        self.engine.check("new_context")
        context = FakeContext(self)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.engine.record("browser.close", self.playwright.index)
        self.engine.check("browser.close")
        self.closed = True


class FakeContext:
    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.closed = False
        self.pages: List[FakePage] = []

    @property
    def engine(self) -> FakeEngine:
        return self.browser.engine

    async def new_page(self) -> "FakePage":
        self.engine.record("context.new_page")
        self.engine.check("new_page")
        page = FakePage(self.engine)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.engine.record("context.close")
        self.engine.check("context.close")
        self.closed = True
        for page in self.pages:
            page.closed = True


class FakePage:
    def __init__(self, engine: FakeEngine):
        self.engine = engine
        self.url = "about:blank"
        self.default_timeout: Optional[int] = None
        self.closed = False

    def set_default_timeout(self, timeout: int) -> None:
        self.engine.record("page.set_default_timeout", timeout)
        self.default_timeout = timeout

    def _require(self, selector: str) -> None:
        if selector not in self.engine.elements:
            raise PlaywrightTimeoutError(
                f"Timeout {self.default_timeout}ms exceeded.\n"
                f"waiting for locator(\"{selector}\")"
            )

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.engine.record("page.goto", url)
        self.engine.check("goto")
        self.url = url

    async def click(self, selector: str, **kwargs: Any) -> None:
        self.engine.record("page.click", selector)
        self._require(selector)

    async def fill(self, selector: str, value: str, **kwargs: Any) -> None:
        self.engine.record("page.fill", selector, value)
        self._require(selector)

    async def wait_for_url(self, url: str, **kwargs: Any) -> None:
        self.engine.record("page.wait_for_url", url)
        self.engine.check("wait_for_url")

    async def title(self) -> str:
        return self.engine.title if self.url != "about:blank" else ""

    async def text_content(self, selector: str) -> Optional[str]:
        self._require(selector)
        return self.engine.texts.get(selector, "")

    async def is_visible(self, selector: str) -> bool:
        return selector in self.engine.elements

    async def screenshot(self, **kwargs: Any) -> bytes:
        return b"\x89PNG"
