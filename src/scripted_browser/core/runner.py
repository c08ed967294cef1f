"""Session runner executing step sequences against one browser page."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from scripted_browser.core.browser import BrowserManager, SessionState
from scripted_browser.exceptions import (
    FatalStepError,
    OptionalElementMissing,
    StepDefinitionError,
    StepError,
)
from scripted_browser.models.result import RunResult, StepOutcome, StepResult
from scripted_browser.utils.config import get_settings
from scripted_browser.utils.logging import get_logger


if TYPE_CHECKING:
    from scripted_browser.core.browser import Page
    from scripted_browser.steps.base import Step
    from scripted_browser.utils.config import BrowserSettings

logger = get_logger(__name__)


class SessionRunner:
    """
    Runs an ordered list of steps in a single browser session.

    Usage:
        runner = SessionRunner(BrowserSettings(headless=True))
        result = await runner.execute([
            Navigate("https://example.com"),
            Extract.title(name="title"),
            Screenshot("example.png"),
        ])
        print(result["title"].value)

    Failure semantics:
    - Acquisition failure raises AcquisitionError before any step runs.
    - A failing step is recorded; the run continues unless the step is
      required, in which case the rest are recorded as not run.
    - Fatal step errors (screenshot write failures) always abort.
    - The browser is released exactly once on every exit path.
    """

    def __init__(
        self,
        settings: BrowserSettings | None = None,
        *,
        sink: Any | None = None,
        browser: BrowserManager | None = None,
        playwright_factory: Callable[[], Any] | None = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            settings: Browser settings (defaults to environment settings)
            sink: structlog-style logger receiving progress events
            browser: Pre-built browser manager (mainly for tests)
            playwright_factory: Replacement for async_playwright
        """
        self.sink = sink or logger
        if browser is None:
            browser = BrowserManager(
                settings or get_settings().browser,
                sink=self.sink,
                playwright_factory=playwright_factory,
            )
        self.browser = browser

    @property
    def settings(self) -> BrowserSettings:
        return self.browser.settings

    @property
    def state(self) -> SessionState:
        return self.browser.state

    async def acquire(self, settings: BrowserSettings | None = None) -> None:
        """Open the browser session. Raises AcquisitionError on failure."""
        await self.browser.acquire(settings)

    async def release(self) -> None:
        """Close the browser session. Safe to call more than once."""
        await self.browser.release()

    async def run(self, steps: Iterable[Step]) -> RunResult:
        """Execute steps in order on the session page and collect outcomes."""
        steps = list(steps)
        page = self.browser.page
        self._check_unique_names(steps)
        self.browser.mark_running()

        result = RunResult()
        self.sink.info("Running steps", count=len(steps))

        for index, step in enumerate(steps):
            step_result, error = await self._run_step(page, step)
            result.add(step_result)

            if step_result.fatal or (step_result.failed and step.required):
                self.sink.error(
                    "Run aborted",
                    step=step.name,
                    fatal=step_result.fatal,
                    error=step_result.error,
                )
                result.abort(step.name, error)
                for remaining in steps[index + 1 :]:
                    result.add(
                        StepResult(
                            name=remaining.name,
                            action=remaining.action,
                            outcome=StepOutcome.NOT_RUN,
                            required=remaining.required,
                        )
                    )
                break

        result.finalize()
        self.sink.info(
            "Run finished",
            ok=result.ok,
            passed=len(result.passed),
            failed=len(result.failed),
            skipped=len(result.skipped),
        )
        return result

    async def execute(self, steps: Iterable[Step]) -> RunResult:
        """Acquire, run and release; release happens even if acquire or run raise."""
        steps = list(steps)
        self._check_unique_names(steps)
        try:
            await self.acquire()
            return await self.run(steps)
        finally:
            await self.release()

    async def _run_step(
        self, page: Page, step: Step
    ) -> tuple[StepResult, BaseException | None]:
        timeout = step.resolve_timeout(self.settings)
        self.sink.debug(
            "Step started", step=step.name, action=step.action, timeout=timeout
        )

        outcome = StepOutcome.PASSED
        value: Any = None
        error: BaseException | None = None
        fatal = False
        started = time.perf_counter()

        try:
            value = await step.perform(page, timeout)
        except OptionalElementMissing as e:
            outcome, error = StepOutcome.SKIPPED, e
        except StepError as e:
            outcome, error = StepOutcome.FAILED, e
        except FatalStepError as e:
            outcome, error, fatal = StepOutcome.FAILED, e, True
        except Exception as e:
            self.sink.error("Unexpected step error", step=step.name, error=str(e))
            raise

        step_result = StepResult(
            name=step.name,
            action=step.action,
            outcome=outcome,
            required=step.required,
            value=value,
            error=str(error) if error else None,
            error_type=type(error).__name__ if error else None,
            fatal=fatal,
            duration_ms=(time.perf_counter() - started) * 1000,
        )

        if outcome is StepOutcome.PASSED:
            self.sink.info("Step passed", step=step.name, action=step.action)
        elif outcome is StepOutcome.SKIPPED:
            self.sink.info("Step skipped", step=step.name, reason=step_result.error)
        else:
            self.sink.warning(
                "Step failed",
                step=step.name,
                required=step.required,
                error_type=step_result.error_type,
                error=step_result.error,
            )
        return step_result, error

    @staticmethod
    def _check_unique_names(steps: list[Step]) -> None:
        seen: set[str] = set()
        for step in steps:
            if step.name in seen:
                raise StepDefinitionError(f"Duplicate step name: '{step.name}'")
            seen.add(step.name)

    async def __aenter__(self) -> SessionRunner:
        """Async context manager entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.release()


async def run_steps(
    steps: Iterable[Step],
    settings: BrowserSettings | None = None,
    sink: Any | None = None,
    playwright_factory: Callable[[], Any] | None = None,
) -> RunResult:
    """Run steps in a fresh, independent browser session."""
    runner = SessionRunner(settings, sink=sink, playwright_factory=playwright_factory)
    return await runner.execute(steps)
