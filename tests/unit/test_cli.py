"""Unit tests for the command-line interface."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest
import structlog
from typer.testing import CliRunner

from scripted_browser import __version__, cli
from scripted_browser.exceptions import AcquisitionError
from scripted_browser.models.result import RunResult, StepOutcome, StepResult


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from scripted_browser.steps import Step
    from scripted_browser.utils.config import BrowserSettings


runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo the logging setup each command performs."""
    yield
    structlog.reset_defaults()


def ok_result() -> RunResult:
    result = RunResult()
    result.add(
        StepResult(
            name="title",
            action="extract",
            outcome=StepOutcome.PASSED,
            value="Example Domain",
        )
    )
    result.finalize()
    return result


def failed_result() -> RunResult:
    result = RunResult()
    result.add(
        StepResult(
            name="open",
            action="navigate",
            outcome=StepOutcome.FAILED,
            required=True,
            error="Navigation to https://example.com failed",
            error_type="NavigationError",
        )
    )
    result.abort("open", None)
    result.finalize()
    return result


class FakeRunSteps:
    """Records the sessions the CLI would run."""

    def __init__(self, *results: RunResult | Exception) -> None:
        self.results = list(results)
        self.calls: list[tuple[list[Step], BrowserSettings]] = []

    async def __call__(self, steps: list[Step], settings: BrowserSettings) -> Any:
        self.calls.append((steps, settings))
        outcome = self.results.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> Any:
    def install(*results: RunResult | Exception) -> FakeRunSteps:
        fake = FakeRunSteps(*results)
        monkeypatch.setattr(cli, "run_steps", fake)
        return fake

    return install


class TestInfoCommands:
    """Tests for version and scenarios."""

    def test_version(self) -> None:
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_scenarios_lists_all(self) -> None:
        result = runner.invoke(cli.app, ["scenarios"])

        assert result.exit_code == 0
        for name in ("basic", "hacker-news", "form", "search"):
            assert name in result.output


class TestRunCommand:
    """Tests for the run command."""

    def test_run_passes(self, fake_run: Any, tmp_path: Path) -> None:
        fake = fake_run(ok_result())

        result = runner.invoke(cli.app, ["run", "basic", "--output", str(tmp_path)])

        assert result.exit_code == 0
        assert "Run passed" in result.output
        steps, _ = fake.calls[0]
        assert [s.name for s in steps] == [
            "open",
            "title",
            "screenshot",
            "title-check",
            "content",
            "links",
        ]

    def test_run_failure_exit_code(self, fake_run: Any, tmp_path: Path) -> None:
        fake_run(failed_result())

        result = runner.invoke(cli.app, ["run", "basic", "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Run failed" in result.output

    def test_run_unknown_scenario(self, fake_run: Any) -> None:
        fake = fake_run()

        result = runner.invoke(cli.app, ["run", "checkout"])

        assert result.exit_code == 2
        assert "Unknown scenario" in result.output
        assert fake.calls == []

    def test_run_acquisition_error(self, fake_run: Any, tmp_path: Path) -> None:
        fake_run(AcquisitionError("Could not start browser: executable missing"))

        result = runner.invoke(cli.app, ["run", "basic", "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "executable missing" in result.output

    def test_run_options_reach_scenario(self, fake_run: Any, tmp_path: Path) -> None:
        fake = fake_run(ok_result())

        runner.invoke(
            cli.app,
            [
                "run",
                "hacker-news",
                "-o",
                str(tmp_path),
                "--limit",
                "3",
                "--no-headless",
            ],
        )

        steps, settings = fake.calls[0]
        stories = next(s for s in steps if s.name == "stories")
        assert stories.arg == {"limit": 3}
        assert settings.headless is False

    def test_run_rejects_non_positive_limit(
        self, fake_run: Any, tmp_path: Path
    ) -> None:
        fake = fake_run()

        result = runner.invoke(
            cli.app, ["run", "hacker-news", "-o", str(tmp_path), "--limit", "0"]
        )

        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert fake.calls == []

    def test_run_json(self, fake_run: Any, tmp_path: Path) -> None:
        fake_run(ok_result())

        result = runner.invoke(
            cli.app, ["run", "basic", "-o", str(tmp_path), "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["steps"][0]["value"] == "Example Domain"


class TestSuiteCommand:
    """Tests for the suite command."""

    def test_default_suite_runs_independent_sessions(
        self, fake_run: Any, tmp_path: Path
    ) -> None:
        fake = fake_run(ok_result(), ok_result())

        result = runner.invoke(cli.app, ["suite", "-o", str(tmp_path)])

        assert result.exit_code == 0
        assert len(fake.calls) == 2
        assert "All scenarios passed" in result.output

    def test_suite_continues_after_failure(
        self, fake_run: Any, tmp_path: Path
    ) -> None:
        fake = fake_run(
            AcquisitionError("Could not start browser"), failed_result(), ok_result()
        )

        result = runner.invoke(
            cli.app, ["suite", "basic", "form", "search", "-o", str(tmp_path)]
        )

        assert result.exit_code == 1
        assert len(fake.calls) == 3
        assert "Some scenarios failed" in result.output
