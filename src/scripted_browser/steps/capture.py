"""Screenshot step."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from playwright.async_api import Error as PlaywrightError

from scripted_browser.exceptions import ScreenshotError, StepDefinitionError
from scripted_browser.steps.base import Step


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page


@dataclass
class Screenshot(Step):
    """
    Capture the page as a PNG at the given path.

    Any failure to capture or write the file is fatal for the run: it
    points at the filesystem, not at the page.
    """

    path: str | Path
    full_page: bool = False

    action: ClassVar[str] = "screenshot"

    @property
    def target(self) -> str:
        return str(self.path)

    def validate(self) -> None:
        if not str(self.path):
            raise StepDefinitionError("screenshot requires a path")

    async def perform(self, page: Page, timeout: int) -> str:
        path = Path(self.path)
        try:
            await page.screenshot(path=path, full_page=self.full_page, timeout=timeout)
        except OSError as e:
            raise ScreenshotError(f"Could not write screenshot to {path}: {e}") from e
        except PlaywrightError as e:
            raise ScreenshotError(f"Screenshot capture failed: {e}") from e
        return str(path)
