"""Core module - Browser session ownership and step execution."""

from scripted_browser.core.browser import BrowserManager, SessionState
from scripted_browser.core.runner import SessionRunner, run_steps


__all__ = [
    "BrowserManager",
    "SessionRunner",
    "SessionState",
    "run_steps",
]
