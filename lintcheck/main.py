"""lintcheck CLI — GitHub Actions entrypoint plus local helpers."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.table import Table

from lintcheck import workflow
from lintcheck.checks import CheckReporter
from lintcheck.engine import run_eslint
from lintcheck.github import GitHubClient
from lintcheck.mapper import ACTION_NAME, relative_path, summarize
from lintcheck.mapper import lint as lint_targets
from lintcheck.models import LintResult, PullRequest, Push, TriggerContext
from lintcheck.selector import resolve_targets, select_files
from lintcheck.settings import ActionSettings, get_settings

app = typer.Typer(help="Lint changed files with ESLint and report them as a GitHub check run", no_args_is_help=True)

_SEVERITY_STYLE = {1: "[yellow]warning[/yellow]", 2: "[red]error[/red]"}


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def load_trigger(settings: ActionSettings) -> TriggerContext:
    """Read the event payload; anything carrying a pull request number is a PR, the rest is a push."""
    payload: dict = {}
    if settings.github_event_path and settings.github_event_path.exists():
        payload = json.loads(settings.github_event_path.read_text())

    number = (
        (payload.get("pull_request") or {}).get("number")
        or (payload.get("issue") or {}).get("number")
        or payload.get("number")
    )
    if number:
        return PullRequest(number=number)
    return Push(commit_sha=settings.github_sha)


def run_action(settings: ActionSettings, client: GitHubClient) -> LintResult:
    """Select files, lint them, and report the outcome on a check run.

    Remote failures only degrade reporting. An exception from the lint step
    marks the check run failed before it propagates.
    """
    trigger = load_trigger(settings)
    selection = select_files(trigger, client, settings)
    workflow.debug(f"Commit: {selection.head_sha}")

    reporter = CheckReporter(client, settings)
    run_id = reporter.acquire(selection.head_sha)

    try:
        result = lint_targets(resolve_targets(selection, settings), settings)
    except Exception:
        if run_id is not None:
            reporter.mark_failed(run_id)
        raise

    if run_id is not None:
        reporter.finalize(run_id, result)
    workflow.debug(result.output.summary)
    return result


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("run")
def run_cmd() -> None:
    """Run inside GitHub Actions: lint the changed files and update the check run."""
    settings = get_settings()
    typer.echo(f"## Running {ACTION_NAME}")
    try:
        result = run_action(settings, GitHubClient(settings))
    except Exception as exc:
        workflow.set_failed(str(exc))
        raise typer.Exit(1) from exc

    if result.conclusion == "failure":
        workflow.set_failed(result.output.summary)
        raise typer.Exit(1)


@app.command("lint")
def lint_cmd(
    targets: Annotated[list[str] | None, typer.Argument(help="Files, directories or globs to lint")] = None,
) -> None:
    """Lint locally and print the diagnostics, without talking to GitHub."""
    settings = ActionSettings()
    report = run_eslint(targets or [settings.default_target], settings)
    result = summarize(report, settings.github_workspace)

    if report.diagnostics:
        table = Table(title=result.output.summary)
        table.add_column("File", style="cyan")
        table.add_column("Pos")
        table.add_column("Level")
        table.add_column("Message")
        table.add_column("Rule", style="dim")
        for d in report.diagnostics:
            table.add_row(
                relative_path(d.file_path, settings.github_workspace),
                f"{d.line}:{d.column}",
                _SEVERITY_STYLE.get(d.severity, "notice"),
                d.message,
                d.rule_id or "—",
            )
        rprint(table)
    else:
        rprint(f"[green]✓[/green] {result.output.summary}")

    if result.conclusion == "failure":
        raise typer.Exit(1)


@app.command("config-show")
def config_show() -> None:
    """Show resolved configuration (masks credentials)."""
    settings = ActionSettings()

    def mask(val: str | None) -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    def show(val: str | Path | None) -> str:
        return str(val) if val else "[dim](not set)[/dim]"

    table = Table(title="lintcheck Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("github_token", mask(settings.github_token.get_secret_value() if settings.github_token else None))
    table.add_row("github_repository", show(settings.github_repository))
    table.add_row("github_sha", show(settings.github_sha))
    table.add_row("github_workspace", show(settings.github_workspace))
    table.add_row("github_event_path", show(settings.github_event_path))
    table.add_row("job-name", show(settings.job_name))
    table.add_row("lint-all", "yes" if settings.lint_everything else "no")
    table.add_row("custom-glob", show(settings.custom_glob))
    table.add_row("eslint_bin", settings.eslint_bin)
    table.add_row("ignore_path", show(settings.ignore_path))
    table.add_row("default_target", settings.default_target)

    rprint(table)
