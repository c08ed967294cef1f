"""Command-line interface for Scripted Browser."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from scripted_browser import __version__
from scripted_browser.core.runner import run_steps
from scripted_browser.exceptions import AcquisitionError
from scripted_browser.models.result import RunResult, StepOutcome
from scripted_browser.scenarios import SCENARIOS, build_scenario
from scripted_browser.utils.config import BrowserSettings, get_settings
from scripted_browser.utils.logging import scenario_context, setup_logging


app = typer.Typer(
    name="scripted-browser",
    help="Run scripted Playwright browser sessions and report every step",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

OUTCOME_STYLES = {
    StepOutcome.PASSED: "green",
    StepOutcome.FAILED: "red",
    StepOutcome.SKIPPED: "yellow",
    StepOutcome.NOT_RUN: "dim",
}


# =============================================================================
# Helper Functions
# =============================================================================


def run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def _shorten(value: object, width: int = 60) -> str:
    text = " ".join(str(value).split())
    return text if len(text) <= width else text[: width - 3] + "..."


def display_result(title: str, result: RunResult) -> None:
    """Display every step outcome in a table."""
    table = Table(title=title)
    table.add_column("Step", style="cyan")
    table.add_column("Action", style="white")
    table.add_column("Outcome")
    table.add_column("Detail", max_width=60)

    for step in result:
        style = OUTCOME_STYLES[step.outcome]
        if step.error:
            detail = f"[{style}]{step.error_type}: {_shorten(step.error)}[/{style}]"
        elif step.value is None:
            detail = ""
        else:
            detail = _shorten(step.value)
        label = step.outcome.value.upper()
        if step.required:
            label += " *"
        table.add_row(step.name, step.action, f"[{style}]{label}[/{style}]", detail)

    console.print(table)
    if result.ok:
        console.print("[green]✓ Run passed[/green]")
    else:
        console.print(f"[red]✗ Run failed[/red] at [bold]{result.aborted_at}[/bold]")


def _browser_settings(headless: bool | None) -> BrowserSettings:
    settings = get_settings().browser
    if headless is None:
        return settings
    return settings.model_copy(update={"headless": headless})


def _scenario_options(
    scenario: str, output: Path, limit: int | None, query: str | None
) -> dict:
    options: dict = {"output_dir": output}
    if scenario == "hacker-news" and limit is not None:
        options["limit"] = limit
    if scenario == "search" and query:
        options["query"] = query
    return options


def _check_scenario(scenario: str) -> None:
    if scenario not in SCENARIOS:
        console.print(
            f"[red]Unknown scenario '{scenario}'.[/red] "
            f"Available: {', '.join(SCENARIOS)}"
        )
        raise typer.Exit(code=2)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]scripted-browser[/bold blue] v{__version__}")


@app.command()
def scenarios() -> None:
    """List available scenarios."""
    table = Table(title="Scenarios")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")
    for name, builder in SCENARIOS.items():
        doc = (builder.__doc__ or "").strip().splitlines()
        table.add_row(name, doc[0] if doc else "")
    console.print(table)


@app.command()
def run(
    scenario: str = typer.Argument(..., help="Scenario name (see 'scenarios')"),
    output: Path = typer.Option(
        None, "--output", "-o", help="Directory for screenshots"
    ),
    headless: bool = typer.Option(
        None, "--headless/--no-headless", help="Run headless (default from settings)"
    ),
    limit: int = typer.Option(
        None, "--limit", "-l", min=1, help="Number of stories (hacker-news)"
    ),
    query: str = typer.Option(None, "--query", "-q", help="Search query (search)"),
    json_output: bool = typer.Option(False, "--json", help="Print result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run one scenario in a fresh browser session."""
    _check_scenario(scenario)
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )
    output_dir = output or settings.output_dir
    steps = build_scenario(
        scenario, **_scenario_options(scenario, output_dir, limit, query)
    )

    if not json_output:
        console.print(f"[bold]Running:[/bold] {scenario}")
        console.print(f"[dim]Steps: {len(steps)}, Output: {output_dir}[/dim]\n")

    try:
        with scenario_context(scenario):
            result = run_async(run_steps(steps, _browser_settings(headless)))
    except AcquisitionError as e:
        console.print(f"[red]✗ Could not start browser:[/red] {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(data=result.to_dict(), default=str)
    else:
        display_result(f"Scenario: {scenario}", result)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def suite(
    names: list[str] = typer.Argument(
        None, help="Scenarios to run (default: form search)"
    ),
    output: Path = typer.Option(
        None, "--output", "-o", help="Directory for screenshots"
    ),
    headless: bool = typer.Option(
        None, "--headless/--no-headless", help="Run headless (default from settings)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run several scenarios, each in its own independent session."""
    names = names or ["form", "search"]
    for name in names:
        _check_scenario(name)

    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )
    output_dir = output or settings.output_dir
    browser_settings = _browser_settings(headless)

    verdicts: dict[str, bool] = {}
    for name in names:
        steps = build_scenario(name, output_dir=output_dir)
        try:
            with scenario_context(name):
                result = run_async(run_steps(steps, browser_settings))
        except AcquisitionError as e:
            console.print(f"[red]✗ {name}: could not start browser:[/red] {e}")
            verdicts[name] = False
            continue
        display_result(f"Scenario: {name}", result)
        verdicts[name] = result.ok

    console.print("\n[bold]Results[/bold]")
    for name, ok in verdicts.items():
        status = "[green]PASSED[/green]" if ok else "[red]FAILED[/red]"
        console.print(f"  {name}: {status}")

    if all(verdicts.values()):
        console.print("[green]✓ All scenarios passed[/green]")
    else:
        console.print("[red]✗ Some scenarios failed[/red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
