"""Data models for run results."""

from scripted_browser.models.result import RunResult, StepOutcome, StepResult


__all__ = [
    "RunResult",
    "StepOutcome",
    "StepResult",
]
