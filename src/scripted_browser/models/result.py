"""Step and run result models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from scripted_browser.exceptions import RunFailedError


class StepOutcome(str, Enum):
    """Outcome of a single step."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    NOT_RUN = "not_run"


@dataclass
class StepResult:
    """Outcome of one step, with the value it captured or the error it hit."""

    name: str
    action: str
    outcome: StepOutcome
    required: bool = False
    value: Any = None
    error: str | None = None
    error_type: str | None = None
    fatal: bool = False
    duration_ms: float = 0.0

    @property
    def passed(self) -> bool:
        return self.outcome is StepOutcome.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome is StepOutcome.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "action": self.action,
            "outcome": self.outcome.value,
            "required": self.required,
            "value": self.value,
            "error": self.error,
            "error_type": self.error_type,
            "fatal": self.fatal,
            "duration_ms": round(self.duration_ms, 1),
        }


@dataclass
class RunResult:
    """
    Ordered step outcomes of one run.

    Built incrementally by the runner and finalized when the run ends.
    Entries are addressable by step name:

        result["title"].value
        result.as_dict()  # {"title": True, "screenshot": False, ...}
    """

    steps: list[StepResult] = field(default_factory=list)
    aborted: bool = False
    aborted_at: str | None = None
    error: BaseException | None = field(default=None, repr=False, compare=False)
    finished: bool = False

    def add(self, step_result: StepResult) -> None:
        if self.finished:
            raise RuntimeError("Cannot add steps to a finalized run result")
        self.steps.append(step_result)

    def abort(self, step_name: str, error: BaseException | None) -> None:
        """Mark the run as aborted at the given step."""
        self.aborted = True
        self.aborted_at = step_name
        self.error = error

    def finalize(self) -> None:
        self.finished = True

    def __getitem__(self, name: str) -> StepResult:
        for step_result in self.steps:
            if step_result.name == name:
                return step_result
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(step_result.name == name for step_result in self.steps)

    def __iter__(self) -> Iterator[StepResult]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def value(self, name: str, default: Any = None) -> Any:
        """Captured value of a step, or default if the step is unknown."""
        if name not in self:
            return default
        return self[name].value

    def as_dict(self) -> dict[str, bool]:
        """Map each step name to whether it passed."""
        return {step_result.name: step_result.passed for step_result in self.steps}

    def values(self) -> dict[str, Any]:
        """Map each passed step name to its captured value."""
        return {
            step_result.name: step_result.value
            for step_result in self.steps
            if step_result.passed
        }

    def by_outcome(self, outcome: StepOutcome) -> list[StepResult]:
        return [s for s in self.steps if s.outcome is outcome]

    @property
    def passed(self) -> list[StepResult]:
        return self.by_outcome(StepOutcome.PASSED)

    @property
    def failed(self) -> list[StepResult]:
        return self.by_outcome(StepOutcome.FAILED)

    @property
    def skipped(self) -> list[StepResult]:
        return self.by_outcome(StepOutcome.SKIPPED)

    @property
    def fatal(self) -> bool:
        return any(s.fatal for s in self.steps)

    @property
    def ok(self) -> bool:
        """False when a required step failed or a fatal error occurred."""
        if self.fatal:
            return False
        return not any(s.required and s.failed for s in self.steps)

    def raise_for_status(self) -> None:
        """Raise RunFailedError if the run is not ok."""
        if self.ok:
            return
        culprit = self.aborted_at or next(
            (s.name for s in self.steps if s.required and s.failed), "unknown"
        )
        raise RunFailedError(f"Run failed at step '{culprit}'", result=self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "aborted": self.aborted,
            "aborted_at": self.aborted_at,
            "passed": len(self.passed),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
            "steps": [s.to_dict() for s in self.steps],
        }
