"""
Scripted Browser - run ordered Playwright steps in one managed session.

Usage:
    from scripted_browser import Extract, Navigate, Screenshot, run_steps

    result = await run_steps([
        Navigate("https://example.com"),
        Extract.title(name="title"),
        Screenshot("example.png"),
    ])
    print(result["title"].value)
"""

__version__ = "0.1.0"

from scripted_browser.core.browser import BrowserManager, SessionState
from scripted_browser.core.runner import SessionRunner, run_steps
from scripted_browser.models.result import RunResult, StepOutcome, StepResult
from scripted_browser.steps import (
    Check,
    Click,
    Evaluate,
    ExpectCount,
    ExpectText,
    Extract,
    ExtractAll,
    FillForm,
    Navigate,
    Press,
    Screenshot,
    SelectOption,
    Step,
    WaitForElement,
)


__all__ = [
    "BrowserManager",
    "Check",
    "Click",
    "Evaluate",
    "ExpectCount",
    "ExpectText",
    "Extract",
    "ExtractAll",
    "FillForm",
    "Navigate",
    "Press",
    "RunResult",
    "Screenshot",
    "SelectOption",
    "SessionRunner",
    "SessionState",
    "Step",
    "StepOutcome",
    "StepResult",
    "WaitForElement",
    "__version__",
    "run_steps",
]
