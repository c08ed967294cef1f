"""Constants used throughout the scripted browser runner."""

from __future__ import annotations


# =============================================================================
# Scenario URLs
# =============================================================================

EXAMPLE_URL = "https://example.com"
HACKER_NEWS_URL = "https://news.ycombinator.com"
HTTPBIN_FORM_URL = "https://httpbin.org/forms/post"
GOOGLE_URL = "https://www.google.com"

# =============================================================================
# Default Values
# =============================================================================

# Timeouts (in milliseconds)
DEFAULT_TIMEOUT = 30000
NAVIGATION_TIMEOUT = 60000
OPTIONAL_ELEMENT_TIMEOUT = 2000  # Cookie banners, dialogs that may not appear

DEFAULT_STORY_LIMIT = 5
DEFAULT_SEARCH_QUERY = "Deno Playwright"

# =============================================================================
# Playwright Vocabulary
# =============================================================================

BROWSER_TYPES = ("chromium", "firefox", "webkit")
WAIT_POLICIES = ("load", "domcontentloaded", "networkidle", "commit")
ELEMENT_STATES = ("attached", "detached", "visible", "hidden")
