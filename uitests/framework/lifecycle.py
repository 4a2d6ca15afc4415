"""
================================================================================
Lifecycle Controller
================================================================================

Per-test orchestration:

    IDLE -> DRIVER_STARTING -> SESSION_OPENING -> NAVIGATING -> READY -> TORN_DOWN
                          \\______________ FAILED ______________/

Setup failures propagate unchanged (the test fails before its body runs).
Teardown always runs, in reverse acquisition order, one isolated step at a
time. Step errors are logged; only a cancellation is re-raised, after the
last step.

Usage:
    async with LifecycleController(get_settings()) as ctl:
        home = ctl.resolve(HomePage)
        assert await home.get_title()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple, Type, TypeVar

from loguru import logger

from .driver_factory import DriverFactory, DriverHandle
from .exceptions import LifecycleError, SessionNotReadyError
from .page_registry import PageRegistry, default_registry
from .session import Session
from .settings import Settings


T = TypeVar("T")


class LifecycleState(str, Enum):
    IDLE = "idle"
    DRIVER_STARTING = "driver_starting"
    SESSION_OPENING = "session_opening"
    NAVIGATING = "navigating"
    READY = "ready"
    FAILED = "failed"
    TORN_DOWN = "torn_down"


class LifecycleController:
    """
    Owns the driver handle and session of exactly one test.

    A controller is single-use: after teardown a new test needs a new
    controller (and therefore a new browser process).
    """

    def __init__(
        self,
        settings: Settings,
        registry: Optional[PageRegistry] = None,
        driver_factory: Optional[DriverFactory] = None,
    ):
        """
        Initialize lifecycle controller.

        Args:
            settings: Process settings (passed explicitly, never read globally)
            registry: Page object registry; defaults to the frozen project registry
            driver_factory: Browser launcher; defaults to a Playwright-backed one
        """
        self.settings = settings
        self.registry = registry if registry is not None else default_registry()
        self.driver_factory = driver_factory or DriverFactory()

        self.state = LifecycleState.IDLE
        self.driver: Optional[DriverHandle] = None
        self.session: Optional[Session] = None

    async def __aenter__(self) -> "LifecycleController":
        try:
            await self.setup()
        except BaseException:
            await self.teardown()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.teardown()

    def _transition(self, state: LifecycleState) -> None:
        logger.debug(f"Lifecycle: {self.state.value} -> {state.value}")
        self.state = state

    # =========================================================================
    # Setup
    # =========================================================================

    async def setup(self) -> None:
        """
        Start the browser, open the session and navigate to the base URL.

        Raises:
            LifecycleError: Controller was already used
            UnsupportedEngineError / engine errors: propagated unchanged
        """
        if self.state is not LifecycleState.IDLE:
            raise LifecycleError(
                f"Controller cannot be set up from state '{self.state.value}'; "
                f"create a new controller per test",
                state=self.state,
            )

        try:
            self._transition(LifecycleState.DRIVER_STARTING)
            self.driver = await self.driver_factory.start(self.settings)

            self._transition(LifecycleState.SESSION_OPENING)
            self.session = Session(self.driver, self.settings, self.registry)
            await self.session.open()

            self._transition(LifecycleState.NAVIGATING)
            await self.session.navigate()
        except BaseException as e:
            failed_in = self.state
            self._transition(LifecycleState.FAILED)
            logger.error(f"Setup failed during {failed_in.value}: {e!r}")
            raise

        self._transition(LifecycleState.READY)

    @property
    def ready(self) -> bool:
        return self.state is LifecycleState.READY

    def resolve(self, page_type: Type[T]) -> T:
        """Return the session's page object of the given type."""
        if self.state is not LifecycleState.READY or self.session is None:
            raise SessionNotReadyError(
                f"Page objects are not available in state '{self.state.value}'"
            )
        return self.session.resolve(page_type)

    # =========================================================================
    # Teardown
    # =========================================================================

    async def teardown(self) -> None:
        """
        Release the session, then the driver.

        Runs at most once; later calls are no-ops. Step failures are logged and
        swallowed. A cancellation or interrupt hit during a step is re-raised
        only after every step has run and the state is TORN_DOWN.
        """
        if self.state is LifecycleState.TORN_DOWN:
            return

        steps: List[Tuple[str, Callable[[], Awaitable[None]]]] = [
            ("session", self._destroy_session),
            ("driver", self._stop_driver),
        ]
        interrupted: Optional[BaseException] = None
        for name, step in steps:
            try:
                await step()
            except Exception as e:
                logger.error(f"Error during teardown ({name}): {e!r}")
            except BaseException as e:
                logger.error(f"Teardown interrupted ({name}): {e!r}")
                if interrupted is None:
                    interrupted = e

        self.session = None
        self.driver = None
        self._transition(LifecycleState.TORN_DOWN)

        if interrupted is not None:
            raise interrupted

    async def _destroy_session(self) -> None:
        if self.session is not None:
            await self.session.destroy()

    async def _stop_driver(self) -> None:
        await self.driver_factory.stop(self.driver)


__all__ = [
    "LifecycleState",
    "LifecycleController",
]
