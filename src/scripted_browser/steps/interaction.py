"""Form and pointer interaction steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scripted_browser.exceptions import (
    InteractionError,
    OptionalElementMissing,
    StepDefinitionError,
)
from scripted_browser.steps.base import Step


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page


@dataclass
class _SelectorStep(Step):
    """Base for steps that act on a single selector."""

    selector: str

    @property
    def target(self) -> str:
        return self.selector

    def validate(self) -> None:
        if not self.selector:
            raise StepDefinitionError(f"{self.action} requires a selector")


@dataclass
class FillForm(Step):
    """
    Fill form fields in order.

    Fields map a selector to the value to type. The step fails on the
    first selector that does not resolve within the timeout; fields
    before it stay filled.
    """

    fields: dict[str, str]

    action: ClassVar[str] = "fill_form"

    @classmethod
    def by_name(cls, fields: dict[str, str], **kwargs: Any) -> FillForm:
        """Build from form field names, e.g. {"custname": "John Doe"}."""
        selectors = {f'[name="{name}"]': value for name, value in fields.items()}
        return cls(selectors, **kwargs)

    @property
    def target(self) -> str:
        return ",".join(self.fields)

    def validate(self) -> None:
        if not self.fields:
            raise StepDefinitionError("fill_form requires at least one field")

    async def perform(self, page: Page, timeout: int) -> dict[str, str]:
        for selector, value in self.fields.items():
            try:
                await page.fill(selector, value, timeout=timeout)
            except PlaywrightError as e:
                raise InteractionError(f"Could not fill '{selector}': {e}") from e
        return dict(self.fields)


@dataclass
class Click(_SelectorStep):
    """
    Click an element that may or may not be present.

    A missing element skips the step (cookie banners, A/B variants);
    a required click fails instead.
    """

    action: ClassVar[str] = "click"

    async def perform(self, page: Page, timeout: int) -> bool:
        try:
            await page.click(self.selector, timeout=timeout)
        except PlaywrightTimeoutError as e:
            message = f"'{self.selector}' did not appear within {timeout}ms"
            if self.required:
                raise InteractionError(message) from e
            raise OptionalElementMissing(message) from e
        except PlaywrightError as e:
            raise InteractionError(f"Could not click '{self.selector}': {e}") from e
        return True


@dataclass
class SelectOption(_SelectorStep):
    """Select option(s) of a <select> element by value or label."""

    value: str | list[str]

    action: ClassVar[str] = "select_option"

    async def perform(self, page: Page, timeout: int) -> list[str]:
        try:
            return await page.select_option(self.selector, self.value, timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(
                f"Could not select {self.value!r} in '{self.selector}': {e}"
            ) from e


@dataclass
class Check(_SelectorStep):
    """Check a checkbox or radio button."""

    action: ClassVar[str] = "check"

    async def perform(self, page: Page, timeout: int) -> bool:
        try:
            await page.check(self.selector, timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(f"Could not check '{self.selector}': {e}") from e
        return True


@dataclass
class Press(_SelectorStep):
    """Focus an element and press a key, e.g. "Enter"."""

    key: str

    action: ClassVar[str] = "press"

    def validate(self) -> None:
        super().validate()
        if not self.key:
            raise StepDefinitionError("press requires a key")

    async def perform(self, page: Page, timeout: int) -> bool:
        try:
            await page.press(self.selector, self.key, timeout=timeout)
        except PlaywrightError as e:
            raise InteractionError(
                f"Could not press {self.key!r} on '{self.selector}': {e}"
            ) from e
        return True
