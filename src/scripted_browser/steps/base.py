"""Base step class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from scripted_browser.exceptions import StepDefinitionError


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page
    from scripted_browser.utils.config import BrowserSettings


@dataclass(kw_only=True)
class Step(ABC):
    """
    One named unit of work executed against the session page.

    Subclasses implement perform(), which returns the captured value or
    raises from the error taxonomy in scripted_browser.exceptions:

    - StepError subclasses are recorded as a failed step and only abort
      the run when the step is required.
    - OptionalElementMissing records the step as skipped.
    - FatalStepError subclasses always abort the run.

    Args:
        name: Unique name within a run (defaults to "<action>:<target>")
        required: Abort the run if this step fails
        timeout: Step timeout in milliseconds (defaults to settings)
    """

    name: str = ""
    required: bool = False
    timeout: int | None = None

    action: ClassVar[str] = "step"

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise StepDefinitionError(
                f"{self.action} timeout must be positive, got {self.timeout}"
            )
        self.validate()
        if not self.name:
            self.name = f"{self.action}:{self.target}" if self.target else self.action

    @property
    def target(self) -> str:
        """Short description of what the step acts on."""
        return ""

    def validate(self) -> None:
        """Check step arguments; raise StepDefinitionError if invalid."""

    def resolve_timeout(self, settings: BrowserSettings) -> int:
        """Effective timeout in milliseconds."""
        return self.timeout if self.timeout is not None else settings.timeout

    @abstractmethod
    async def perform(self, page: Page, timeout: int) -> Any:
        """Execute the step and return its captured value."""
        ...
