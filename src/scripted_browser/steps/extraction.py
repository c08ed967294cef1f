"""Content extraction steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scripted_browser.exceptions import (
    ExpectationError,
    ExtractionError,
    StepDefinitionError,
)
from scripted_browser.steps.base import Step


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page


EXTRACT_KINDS = ("text", "inner_text", "attribute", "title")

# (elements, attribute) => [[text, attributeValue], ...]
_COLLECT_ELEMENTS_JS = """
(elements, attribute) => elements.map((element) => [
    (element.textContent || "").trim(),
    attribute ? element.getAttribute(attribute) : null,
])
"""


@dataclass
class Extract(Step):
    """
    Read text or an attribute from the first element matching a selector.

    Kinds:
        text: textContent, stripped
        inner_text: rendered innerText, stripped
        attribute: value of ``attribute`` (None when absent)
        title: the page title (no selector)

    No match yields an empty value instead of a failure unless the step
    is required. Without an explicit timeout the step does not wait.
    """

    selector: str = ""
    kind: str = "text"
    attribute: str | None = None

    action: ClassVar[str] = "extract"

    @classmethod
    def title(cls, **kwargs: Any) -> Extract:
        return cls(kind="title", **kwargs)

    @property
    def target(self) -> str:
        if self.kind == "title":
            return "title"
        if self.kind == "attribute":
            return f"{self.selector}@{self.attribute}"
        return self.selector

    def validate(self) -> None:
        if self.kind not in EXTRACT_KINDS:
            raise StepDefinitionError(
                f"kind must be one of {', '.join(EXTRACT_KINDS)}, got {self.kind!r}"
            )
        if self.kind != "title" and not self.selector:
            raise StepDefinitionError(f"extract of {self.kind} requires a selector")
        if self.kind == "attribute" and not self.attribute:
            raise StepDefinitionError("attribute extraction requires an attribute name")

    async def perform(self, page: Page, timeout: int) -> str | None:
        try:
            if self.kind == "title":
                return await page.title()
            return await self._read_element(page, timeout)
        except PlaywrightError as e:
            raise ExtractionError(f"Could not read {self.target}: {e}") from e

    async def _read_element(self, page: Page, timeout: int) -> str | None:
        if self.timeout is not None:
            try:
                await page.wait_for_selector(
                    self.selector, state="attached", timeout=timeout
                )
            except PlaywrightTimeoutError:
                pass  # treated as no match below

        element = await page.query_selector(self.selector)
        if element is None:
            if self.required:
                raise ExtractionError(f"No element matches '{self.selector}'")
            return None if self.kind == "attribute" else ""

        if self.kind == "attribute":
            value = await element.get_attribute(self.attribute)
            if value is None and self.required:
                raise ExtractionError(
                    f"'{self.selector}' has no attribute '{self.attribute}'"
                )
            return value
        if self.kind == "inner_text":
            return (await element.inner_text()).strip()
        return (await element.text_content() or "").strip()


@dataclass
class ExtractAll(Step):
    """
    Collect text (and optionally an attribute) of every matching element.

    Returns a list of dicts in document order, e.g. for
    ``ExtractAll(".titleline > a", attribute="href", limit=5)``:

        [{"text": "Show HN: ...", "href": "https://..."}, ...]
    """

    selector: str
    attribute: str | None = None
    limit: int | None = None

    action: ClassVar[str] = "extract_all"

    @property
    def target(self) -> str:
        return self.selector

    def validate(self) -> None:
        if not self.selector:
            raise StepDefinitionError("extract_all requires a selector")
        if self.limit is not None and self.limit <= 0:
            raise StepDefinitionError(f"limit must be positive, got {self.limit}")

    async def perform(self, page: Page, timeout: int) -> list[dict[str, str | None]]:
        try:
            rows = await page.eval_on_selector_all(
                self.selector, _COLLECT_ELEMENTS_JS, self.attribute
            )
        except PlaywrightError as e:
            raise ExtractionError(f"Could not read '{self.selector}': {e}") from e

        if not rows and self.required:
            raise ExtractionError(f"No element matches '{self.selector}'")

        items = []
        for text, value in rows[: self.limit]:
            item: dict[str, str | None] = {"text": text}
            if self.attribute:
                item[self.attribute] = value
            items.append(item)
        return items


@dataclass
class Evaluate(Step):
    """Evaluate a JavaScript expression in the page and capture the result."""

    expression: str
    arg: Any = None

    action: ClassVar[str] = "evaluate"

    @property
    def target(self) -> str:
        expression = " ".join(self.expression.split())
        return expression if len(expression) <= 40 else expression[:37] + "..."

    def validate(self) -> None:
        if not self.expression.strip():
            raise StepDefinitionError("evaluate requires an expression")

    async def perform(self, page: Page, timeout: int) -> Any:
        try:
            return await page.evaluate(self.expression, self.arg)
        except PlaywrightError as e:
            raise ExtractionError(f"Script evaluation failed: {e}") from e


@dataclass
class ExpectText(Step):
    """
    Fail unless the element text contains every expected fragment.

    ``min_length`` additionally requires that much stripped text, e.g.
    ``ExpectText("body", min_length=1)`` for a page that rendered anything.
    """

    selector: str
    contains: list[str] = field(default_factory=list)
    case_sensitive: bool = True
    min_length: int = 0

    action: ClassVar[str] = "expect_text"

    @property
    def target(self) -> str:
        return self.selector

    def validate(self) -> None:
        if not self.selector:
            raise StepDefinitionError("expect_text requires a selector")
        if isinstance(self.contains, str):
            self.contains = [self.contains]
        if self.min_length < 0:
            raise StepDefinitionError(
                f"min_length must not be negative, got {self.min_length}"
            )
        if not self.contains and not self.min_length:
            raise StepDefinitionError(
                "expect_text requires at least one fragment or a min_length"
            )

    async def perform(self, page: Page, timeout: int) -> str:
        try:
            text = await page.text_content(self.selector, timeout=timeout) or ""
        except PlaywrightTimeoutError as e:
            raise ExpectationError(
                f"'{self.selector}' not found within {timeout}ms"
            ) from e
        except PlaywrightError as e:
            raise ExpectationError(f"Could not read '{self.selector}': {e}") from e

        haystack = text if self.case_sensitive else text.lower()
        missing = [
            fragment
            for fragment in self.contains
            if (fragment if self.case_sensitive else fragment.lower()) not in haystack
        ]
        if missing:
            raise ExpectationError(
                f"'{self.selector}' text is missing: {', '.join(map(repr, missing))}"
            )
        if len(text.strip()) < self.min_length:
            raise ExpectationError(
                f"'{self.selector}' has {len(text.strip())} characters of text, "
                f"expected at least {self.min_length}"
            )
        return text


@dataclass
class ExpectCount(Step):
    """Fail unless at least ``minimum`` elements match. Captures the count."""

    selector: str
    minimum: int = 1

    action: ClassVar[str] = "expect_count"

    @property
    def target(self) -> str:
        return self.selector

    def validate(self) -> None:
        if not self.selector:
            raise StepDefinitionError("expect_count requires a selector")
        if self.minimum < 0:
            raise StepDefinitionError(
                f"minimum must not be negative, got {self.minimum}"
            )

    async def perform(self, page: Page, timeout: int) -> int:
        try:
            count = len(await page.query_selector_all(self.selector))
        except PlaywrightError as e:
            raise ExpectationError(f"Could not query '{self.selector}': {e}") from e
        if count < self.minimum:
            raise ExpectationError(
                f"'{self.selector}' matched {count} elements, "
                f"expected at least {self.minimum}"
            )
        return count
