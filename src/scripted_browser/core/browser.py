"""Browser manager owning one Playwright browser, context and page."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from playwright.async_api import Page, async_playwright

from scripted_browser.exceptions import (
    AcquisitionError,
    BrowserNotInitializedError,
    SessionStateError,
)
from scripted_browser.utils.config import BrowserSettings
from scripted_browser.utils.logging import get_logger


if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Playwright

# Export Page for other modules
__all__ = ["BrowserManager", "Page", "SessionState"]

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a browser session."""

    UNINITIALIZED = "uninitialized"
    ACQUIRED = "acquired"
    RUNNING = "running"
    RELEASED = "released"


class BrowserManager:
    """
    Owns a single browser session: driver, browser process, context, page.

    Lifecycle: UNINITIALIZED -> ACQUIRED -> RUNNING -> RELEASED.
    The page is only reachable while ACQUIRED or RUNNING, and release()
    closes everything exactly once no matter how often it is called.
    """

    def __init__(
        self,
        settings: BrowserSettings | None = None,
        sink: Any | None = None,
        playwright_factory: Callable[[], Any] | None = None,
    ) -> None:
        self.settings = settings or BrowserSettings()
        self.sink = sink or logger
        self._playwright_factory = playwright_factory or async_playwright

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state in (SessionState.ACQUIRED, SessionState.RUNNING)

    @property
    def page(self) -> Page:
        """The session's page; only available between acquire and release."""
        if not self.is_active or self._page is None:
            raise BrowserNotInitializedError(
                f"Page is not available in state '{self._state.value}'"
            )
        return self._page

    async def acquire(self, settings: BrowserSettings | None = None) -> Page:
        """Start the driver, launch the browser and open one context and page."""
        if self._state is not SessionState.UNINITIALIZED:
            raise SessionStateError(
                f"Cannot acquire a session in state '{self._state.value}'"
            )
        if settings is not None:
            self.settings = settings

        self.sink.info(
            "Starting browser",
            browser_type=self.settings.browser_type,
            headless=self.settings.headless,
            viewport=self.settings.viewport,
        )

        try:
            self._playwright = await self._playwright_factory().start()
            browser_type = getattr(self._playwright, self.settings.browser_type)
            self._browser = await browser_type.launch(**self.settings.launch_options())
            self._context = await self._browser.new_context(
                **self.settings.context_options()
            )
            self._context.set_default_timeout(self.settings.timeout)
            self._context.set_default_navigation_timeout(
                self.settings.navigation_timeout
            )
            self._page = await self._context.new_page()
        except BaseException as e:
            self.sink.error("Browser acquisition failed", error=str(e))
            await self._close_resources()
            self._state = SessionState.RELEASED
            if isinstance(e, Exception):
                raise AcquisitionError(f"Could not start browser: {e}") from e
            raise

        self._state = SessionState.ACQUIRED
        self.sink.info("Browser started successfully")
        return self._page

    def mark_running(self) -> None:
        """Move an acquired session into the running state."""
        if self._state is SessionState.RUNNING:
            raise SessionStateError("Session is already running a step sequence")
        if self._state is not SessionState.ACQUIRED:
            raise BrowserNotInitializedError(
                f"Cannot run steps in state '{self._state.value}'"
            )
        self._state = SessionState.RUNNING

    async def release(self) -> None:
        """Close context, browser and driver. Idempotent; never raises."""
        if self._state is SessionState.RELEASED:
            self.sink.debug("Browser already released")
            return

        self.sink.info("Closing browser")
        self._state = SessionState.RELEASED
        await self._close_resources()
        self.sink.info("Browser closed")

    async def _close_resources(self) -> None:
        self._page = None
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        if context is not None:
            try:
                await context.close()
            except Exception as e:
                self.sink.warning("Context close failed", error=str(e))
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                self.sink.warning("Browser close failed", error=str(e))
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                self.sink.warning("Playwright driver stop failed", error=str(e))

    async def __aenter__(self) -> BrowserManager:
        """Async context manager entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.release()
