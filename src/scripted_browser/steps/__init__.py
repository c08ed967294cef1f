"""Step definitions executed by the session runner."""

from scripted_browser.steps.base import Step
from scripted_browser.steps.capture import Screenshot
from scripted_browser.steps.extraction import (
    Evaluate,
    ExpectCount,
    ExpectText,
    Extract,
    ExtractAll,
)
from scripted_browser.steps.interaction import (
    Check,
    Click,
    FillForm,
    Press,
    SelectOption,
)
from scripted_browser.steps.navigation import Navigate, WaitForElement


__all__ = [
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
    "Screenshot",
    "SelectOption",
    "Step",
    "WaitForElement",
]
