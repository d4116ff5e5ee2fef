"""Turn ESLint diagnostics into a check-run conclusion, summary and annotations."""

from pathlib import Path

import typer

from lintcheck import workflow
from lintcheck.engine import run_eslint
from lintcheck.models import Annotation, AnnotationLevel, CheckOutput, LintDiagnostic, LintReport, LintResult
from lintcheck.settings import ActionSettings

ACTION_NAME = "ESLint"
RULE_DOCS_URL = "https://eslint.org/docs/rules/{rule_id}"

_ANNOTATION_LEVELS: dict[int, AnnotationLevel] = {1: "warning", 2: "failure"}
_CONSOLE_LEVELS = {1: "warning", 2: "error"}


def relative_path(file_path: str, workspace: Path) -> str:
    """Rebase an absolute ESLint path onto the checkout root; paths outside it pass through."""
    try:
        return Path(file_path).relative_to(workspace).as_posix()
    except ValueError:
        return file_path


def to_annotation(diagnostic: LintDiagnostic, workspace: Path) -> Annotation:
    end_line = diagnostic.end_line or diagnostic.line
    single_line = end_line == diagnostic.line
    message = diagnostic.message
    if diagnostic.rule_id:
        message += "\n" + RULE_DOCS_URL.format(rule_id=diagnostic.rule_id)
    return Annotation(
        path=relative_path(diagnostic.file_path, workspace),
        start_line=diagnostic.line,
        end_line=end_line,
        start_column=diagnostic.column if single_line else None,
        end_column=(diagnostic.end_column or diagnostic.column) if single_line else None,
        annotation_level=_ANNOTATION_LEVELS.get(diagnostic.severity, "notice"),
        title=diagnostic.rule_id or ACTION_NAME,
        message=message,
    )


def format_console(report: LintReport, workspace: Path) -> str:
    """Group diagnostics per file, keeping the order ESLint reported them in."""
    blocks: dict[str, list[str]] = {}
    for d in report.diagnostics:
        path = relative_path(d.file_path, workspace)
        level = _CONSOLE_LEVELS.get(d.severity, "notice")
        entry = f"##[{level}]  {d.line}:{d.column}  {level}  {d.message}  {d.rule_id or ''}"
        blocks.setdefault(path, [path]).append(entry.rstrip())
    return "\n\n".join("\n".join(lines) for lines in blocks.values())


def summarize(report: LintReport, workspace: Path) -> LintResult:
    summary = f"{report.error_count} error(s), {report.warning_count} warning(s) found"
    return LintResult(
        conclusion="failure" if report.error_count > 0 else "success",
        output=CheckOutput(
            title=ACTION_NAME,
            summary=summary,
            annotations=[to_annotation(d, workspace) for d in report.diagnostics],
        ),
        console=format_console(report, workspace),
    )


def lint(targets: list[str], settings: ActionSettings) -> LintResult:
    """Run ESLint over targets and write the grouped diagnostics to the log."""
    report = run_eslint(targets, settings)
    result = summarize(report, settings.github_workspace)
    if result.console:
        with workflow.group(f"{ACTION_NAME}: {result.output.summary}"):
            typer.echo(result.console)
    return result
