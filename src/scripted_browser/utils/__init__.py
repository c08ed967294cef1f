"""Utility modules."""

from scripted_browser.utils.config import (
    BrowserSettings,
    Settings,
    get_settings,
    load_settings,
)
from scripted_browser.utils.constants import (
    DEFAULT_TIMEOUT,
    NAVIGATION_TIMEOUT,
    OPTIONAL_ELEMENT_TIMEOUT,
)
from scripted_browser.utils.logging import (
    get_logger,
    scenario_context,
    setup_logging,
)


__all__ = [
    "DEFAULT_TIMEOUT",
    "NAVIGATION_TIMEOUT",
    "OPTIONAL_ELEMENT_TIMEOUT",
    "BrowserSettings",
    "Settings",
    "get_logger",
    "get_settings",
    "load_settings",
    "scenario_context",
    "setup_logging",
]
