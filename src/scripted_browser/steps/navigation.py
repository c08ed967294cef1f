"""Navigation and waiting steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scripted_browser.exceptions import (
    InteractionError,
    NavigationError,
    StepDefinitionError,
    StepTimeoutError,
)
from scripted_browser.steps.base import Step
from scripted_browser.utils.constants import ELEMENT_STATES, WAIT_POLICIES


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page
    from scripted_browser.utils.config import BrowserSettings


@dataclass
class Navigate(Step):
    """Load a URL and wait for the given load condition. Captures the final URL."""

    url: str
    wait_until: str = "load"

    action: ClassVar[str] = "navigate"

    @property
    def target(self) -> str:
        return self.url

    def validate(self) -> None:
        if not self.url:
            raise StepDefinitionError("navigate requires a URL")
        if self.wait_until not in WAIT_POLICIES:
            raise StepDefinitionError(
                f"wait_until must be one of {', '.join(WAIT_POLICIES)}, "
                f"got {self.wait_until!r}"
            )

    def resolve_timeout(self, settings: BrowserSettings) -> int:
        return self.timeout if self.timeout is not None else settings.navigation_timeout

    async def perform(self, page: Page, timeout: int) -> str:
        try:
            await page.goto(self.url, wait_until=self.wait_until, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise StepTimeoutError(
                f"Navigation to {self.url} timed out after {timeout}ms"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {self.url} failed: {e}") from e
        return page.url


@dataclass
class WaitForElement(Step):
    """Wait until an element matching the selector reaches the given state."""

    selector: str
    state: str = "visible"

    action: ClassVar[str] = "wait_for_element"

    @property
    def target(self) -> str:
        return self.selector

    def validate(self) -> None:
        if not self.selector:
            raise StepDefinitionError("wait_for_element requires a selector")
        if self.state not in ELEMENT_STATES:
            raise StepDefinitionError(
                f"state must be one of {', '.join(ELEMENT_STATES)}, got {self.state!r}"
            )

    async def perform(self, page: Page, timeout: int) -> bool:
        try:
            await page.wait_for_selector(
                self.selector, state=self.state, timeout=timeout
            )
        except PlaywrightTimeoutError as e:
            raise StepTimeoutError(
                f"'{self.selector}' not {self.state} within {timeout}ms"
            ) from e
        except PlaywrightError as e:
            raise InteractionError(f"Waiting for '{self.selector}' failed: {e}") from e
        return True
