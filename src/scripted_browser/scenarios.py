"""Ready-made step sequences for common browser chores."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from scripted_browser.exceptions import StepDefinitionError
from scripted_browser.steps import (
    Check,
    Click,
    Evaluate,
    ExpectCount,
    ExpectText,
    Extract,
    FillForm,
    Navigate,
    Press,
    Screenshot,
    Step,
    WaitForElement,
)
from scripted_browser.utils.constants import (
    DEFAULT_SEARCH_QUERY,
    DEFAULT_STORY_LIMIT,
    EXAMPLE_URL,
    GOOGLE_URL,
    HACKER_NEWS_URL,
    HTTPBIN_FORM_URL,
    OPTIONAL_ELEMENT_TIMEOUT,
)


# ({limit}) => [{title, url, score}, ...]; link.href is already absolute
COLLECT_STORIES_JS = """
({limit}) => Array.from(document.querySelectorAll("tr.athing"))
    .slice(0, limit)
    .flatMap((row) => {
        const link = row.querySelector(".titleline > a");
        if (!link) return [];
        const score = row.nextElementSibling
            ? row.nextElementSibling.querySelector(".score")
            : null;
        return [{
            title: (link.textContent || "").trim(),
            url: link.href,
            score: score ? score.textContent.trim() : "0 points",
        }];
    })
"""


def basic_steps(
    output_dir: str | Path = ".",
    url: str = EXAMPLE_URL,
    expect_title: str = "Example",
) -> list[Step]:
    """Open a page, screenshot it, then check it has a title, text and links."""
    return [
        Navigate(url, name="open", required=True),
        Extract.title(name="title"),
        Screenshot(
            Path(output_dir) / "example.png", full_page=True, name="screenshot"
        ),
        ExpectText(
            "title", contains=expect_title, name="title-check", required=True
        ),
        ExpectText("body", min_length=1, name="content", required=True),
        ExpectCount("a", minimum=1, name="links", required=True),
    ]


def hacker_news_steps(
    output_dir: str | Path = ".",
    limit: int = DEFAULT_STORY_LIMIT,
    url: str = HACKER_NEWS_URL,
) -> list[Step]:
    """Collect title, absolute URL and score of the top Hacker News stories."""
    if limit <= 0:
        raise StepDefinitionError(f"limit must be positive, got {limit}")
    return [
        Navigate(url, wait_until="networkidle", name="open", required=True),
        WaitForElement(".titleline", name="stories-loaded", required=True),
        Evaluate(COLLECT_STORIES_JS, arg={"limit": limit}, name="stories"),
        Screenshot(
            Path(output_dir) / "hackernews.png", full_page=True, name="screenshot"
        ),
    ]


def form_steps(
    output_dir: str | Path = ".",
    customer: str = "John Doe",
    phone: str = "123-456-7890",
    email: str = "john@example.com",
    url: str = HTTPBIN_FORM_URL,
) -> list[Step]:
    """Fill and submit the httpbin pizza order form, then check the echo."""
    return [
        Navigate(url, name="open", required=True),
        FillForm.by_name(
            {"custname": customer, "custtel": phone, "custemail": email},
            name="customer",
            required=True,
        ),
        Check('input[name="size"][value="medium"]', name="size"),
        Check('input[name="topping"][value="bacon"]', name="topping"),
        FillForm.by_name(
            {"comments": "Test comment from scripted-browser"}, name="comments"
        ),
        Click('form button, input[type="submit"]', name="submit", required=True),
        WaitForElement("pre", name="response", required=True),
        ExpectText("pre", contains=[customer, email], name="echo", required=True),
        Screenshot(Path(output_dir) / "form-response.png", name="screenshot"),
    ]


def search_steps(
    output_dir: str | Path = ".",
    query: str = DEFAULT_SEARCH_QUERY,
    url: str = GOOGLE_URL,
) -> list[Step]:
    """Run a Google search and check that results mention every query word."""
    return [
        Navigate(url, name="open", required=True),
        Click(
            'button:has-text("Accept all")',
            timeout=OPTIONAL_ELEMENT_TIMEOUT,
            name="accept-cookies",
        ),
        FillForm({'[name="q"]': query}, name="query", required=True),
        Press('[name="q"]', "Enter", name="submit", required=True),
        WaitForElement("#search", name="results", required=True),
        ExpectText(
            "#search",
            contains=query.lower().split(),
            case_sensitive=False,
            name="relevant",
        ),
        Screenshot(Path(output_dir) / "google-search-results.png", name="screenshot"),
    ]


SCENARIOS: dict[str, Callable[..., list[Step]]] = {
    "basic": basic_steps,
    "hacker-news": hacker_news_steps,
    "form": form_steps,
    "search": search_steps,
}


def build_scenario(name: str, **options: Any) -> list[Step]:
    """Build the steps of a named scenario; unknown names raise KeyError."""
    try:
        builder = SCENARIOS[name]
    except KeyError:
        raise KeyError(
            f"Unknown scenario '{name}'. Available: {', '.join(SCENARIOS)}"
        ) from None
    return builder(**options)
