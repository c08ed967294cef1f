"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scripted_browser.utils.config import BrowserSettings


PNG_BYTES = b"\x89PNG\r\n\x1a\n"


# =============================================================================
# Fake Playwright doubles
# =============================================================================


@dataclass
class FakeElement:
    """In-memory element with text and attributes."""

    text: str = ""
    attrs: dict[str, str] = field(default_factory=dict)

    async def text_content(self) -> str:
        return self.text

    async def inner_text(self) -> str:
        return self.text

    async def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)


class FakePage:
    """Page double: elements are keyed by the exact selector string."""

    def __init__(
        self,
        title: str = "",
        elements: dict[str, FakeElement] | None = None,
        lists: dict[str, list[FakeElement]] | None = None,
    ) -> None:
        self.title_text = title
        self.elements = dict(elements or {})
        self.lists = dict(lists or {})
        self.url = "about:blank"
        self.calls: list[tuple[str, Any]] = []
        self.filled: dict[str, str] = {}
        self.checked: list[str] = []
        self.pressed: list[tuple[str, str]] = []
        self.screenshots: list[Path] = []
        self.click_handlers: dict[str, Callable[[FakePage], None]] = {}
        self.goto_error: Exception | None = None
        self.evaluate_result: Any = None
        self.screenshot_error: Exception | None = None

    def _require(self, selector: str, timeout: float | None) -> FakeElement:
        if selector not in self.elements:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for locator('{selector}')"
            )
        return self.elements[selector]

    async def goto(
        self, url: str, wait_until: str | None = None, timeout: float | None = None
    ) -> None:
        self.calls.append(("goto", url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    async def wait_for_selector(
        self, selector: str, state: str = "visible", timeout: float | None = None
    ) -> FakeElement | None:
        self.calls.append(("wait_for_selector", selector, state, timeout))
        if state in ("detached", "hidden"):
            if selector in self.elements:
                raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")
            return None
        return self._require(selector, timeout)

    async def query_selector(self, selector: str) -> FakeElement | None:
        return self.elements.get(selector)

    async def query_selector_all(self, selector: str) -> list[FakeElement]:
        if selector in self.lists:
            return list(self.lists[selector])
        return [self.elements[selector]] if selector in self.elements else []

    async def fill(
        self, selector: str, value: str, timeout: float | None = None
    ) -> None:
        self._require(selector, timeout)
        self.filled[selector] = value

    async def click(self, selector: str, timeout: float | None = None) -> None:
        self.calls.append(("click", selector, timeout))
        self._require(selector, timeout)
        handler = self.click_handlers.get(selector)
        if handler is not None:
            handler(self)

    async def select_option(
        self, selector: str, value: str | list[str], timeout: float | None = None
    ) -> list[str]:
        self._require(selector, timeout)
        return [value] if isinstance(value, str) else list(value)

    async def check(self, selector: str, timeout: float | None = None) -> None:
        self._require(selector, timeout)
        self.checked.append(selector)

    async def press(
        self, selector: str, key: str, timeout: float | None = None
    ) -> None:
        self._require(selector, timeout)
        self.pressed.append((selector, key))

    async def title(self) -> str:
        return self.title_text

    async def text_content(
        self, selector: str, timeout: float | None = None
    ) -> str | None:
        return self._require(selector, timeout).text

    async def eval_on_selector_all(
        self, selector: str, expression: str, arg: Any = None
    ) -> list[list[str | None]]:
        return [
            [element.text, element.attrs.get(arg) if arg else None]
            for element in self.lists.get(selector, [])
        ]

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.calls.append(("evaluate", expression, arg))
        if isinstance(self.evaluate_result, Exception):
            raise self.evaluate_result
        return self.evaluate_result

    async def screenshot(
        self,
        path: str | Path | None = None,
        full_page: bool = False,
        timeout: float | None = None,
    ) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        if path is not None:
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(PNG_BYTES)
            self.screenshots.append(path)
        return PNG_BYTES


class FakeContext:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closes = 0
        self.default_timeout: float | None = None
        self.default_navigation_timeout: float | None = None
        self.page_error: Exception | None = None

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        if self.page_error is not None:
            raise self.page_error
        return self.page

    async def close(self) -> None:
        self.closes += 1


class FakeBrowser:
    def __init__(self, context: FakeContext) -> None:
        self.context = context
        self.context_options: dict[str, Any] | None = None
        self.closes = 0
        self.close_error: Exception | None = None

    async def new_context(self, **options: Any) -> FakeContext:
        self.context_options = options
        return self.context

    async def close(self) -> None:
        self.closes += 1
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, browser: FakeBrowser) -> None:
        self.browser = browser
        self.launches = 0
        self.launch_options: dict[str, Any] | None = None
        self.launch_error: Exception | None = None

    async def launch(self, **options: Any) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        self.launches += 1
        self.launch_options = options
        return self.browser


class FakePlaywright:
    """Driver double counting browser acquisitions and releases."""

    def __init__(self, page: FakePage | None = None) -> None:
        self.page = page or FakePage()
        self.context = FakeContext(self.page)
        self.browser = FakeBrowser(self.context)
        self.chromium = FakeBrowserType(self.browser)
        self.firefox = FakeBrowserType(self.browser)
        self.webkit = FakeBrowserType(self.browser)
        self.starts = 0
        self.stops = 0

    @property
    def launches(self) -> int:
        return self.chromium.launches + self.firefox.launches + self.webkit.launches

    @property
    def closes(self) -> int:
        return self.browser.closes

    def factory(self) -> FakePlaywrightStarter:
        """Stand-in for async_playwright()."""
        return FakePlaywrightStarter(self)

    async def stop(self) -> None:
        self.stops += 1


class FakePlaywrightStarter:
    def __init__(self, driver: FakePlaywright) -> None:
        self.driver = driver

    async def start(self) -> FakePlaywright:
        self.driver.starts += 1
        return self.driver


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_page() -> FakePage:
    """Page with the example.com title and heading."""
    return FakePage(
        title="Example Domain",
        elements={
            "title": FakeElement("Example Domain"),
            "body": FakeElement("Example Domain\nThis domain is for use in examples."),
            "h1": FakeElement("Example Domain"),
            "a": FakeElement("More information...", {"href": "https://iana.org"}),
        },
    )


@pytest.fixture
def fake_playwright(fake_page: FakePage) -> FakePlaywright:
    return FakePlaywright(fake_page)


@pytest.fixture
def browser_settings() -> BrowserSettings:
    """Browser settings isolated from the environment."""
    return BrowserSettings(
        _env_file=None,  # type: ignore[call-arg]
        timeout=1000,
        navigation_timeout=2000,
    )


@pytest.fixture
def sink() -> MagicMock:
    """Injectable log sink recording every call."""
    return MagicMock()


@pytest.fixture
def playwright_error() -> PlaywrightError:
    return PlaywrightError("net::ERR_NAME_NOT_RESOLVED")


@pytest.fixture
def make_element() -> type[FakeElement]:
    """Element double constructor."""
    return FakeElement


@pytest.fixture
def make_page() -> type[FakePage]:
    """Page double constructor."""
    return FakePage


@pytest.fixture
def make_driver() -> type[FakePlaywright]:
    """Driver double constructor, taking the page it will open."""
    return FakePlaywright
