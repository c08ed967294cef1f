"""Custom exceptions for the scripted browser runner."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from scripted_browser.models.result import RunResult


class ScriptedBrowserError(Exception):
    """Base exception for all runner errors."""

    pass


# =============================================================================
# Browser / Session Errors
# =============================================================================


class BrowserError(ScriptedBrowserError):
    """Base exception for browser-related errors."""

    pass


class AcquisitionError(BrowserError):
    """Raised when the driver, browser, context or page cannot be opened."""

    pass


class SessionStateError(BrowserError):
    """Raised when a session operation is invalid in the current state."""

    pass


class BrowserNotInitializedError(SessionStateError):
    """Raised when the page is accessed before acquisition or after release."""

    pass


# =============================================================================
# Step Errors (recorded in the run result, fatal only for required steps)
# =============================================================================


class StepError(ScriptedBrowserError):
    """Base exception for recoverable step failures."""

    pass


class StepTimeoutError(StepError, TimeoutError):
    """Raised when a navigation or selector wait exceeds its bound."""

    pass


class NavigationError(StepError):
    """Raised when page navigation fails."""

    pass


class InteractionError(StepError):
    """Raised when a fill/click/select/check/press target cannot be resolved."""

    pass


class ExtractionError(StepError):
    """Raised when required content cannot be read from the page."""

    pass


class ExpectationError(StepError):
    """Raised when page content does not contain the expected text."""

    pass


class OptionalElementMissing(StepError):
    """Raised when an optional element never appeared; the step is skipped."""

    pass


# =============================================================================
# Fatal Errors (always abort the run)
# =============================================================================


class FatalStepError(ScriptedBrowserError):
    """Base exception for step failures that abort the run."""

    pass


class ScreenshotError(FatalStepError, OSError):
    """Raised when a screenshot cannot be captured or written."""

    pass


# =============================================================================
# Run Errors
# =============================================================================


class RunFailedError(ScriptedBrowserError):
    """Raised by RunResult.raise_for_status for a failed run."""

    def __init__(self, message: str, result: RunResult) -> None:
        super().__init__(message)
        self.result = result


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ScriptedBrowserError):
    """Raised when configuration is invalid."""

    pass


class StepDefinitionError(ConfigurationError):
    """Raised when a step sequence is malformed."""

    pass
