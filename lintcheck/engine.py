"""Run ESLint through its JSON formatter and read the report back."""

import json
import subprocess

from lintcheck.models import LintDiagnostic, LintReport
from lintcheck.selector import EXTENSIONS
from lintcheck.settings import ActionSettings


class LintEngineError(RuntimeError):
    pass


def build_command(targets: list[str], settings: ActionSettings) -> list[str]:
    cmd = [
        settings.eslint_bin,
        "--format",
        "json",
        "--ext",
        ",".join(EXTENSIONS),
        "--no-error-on-unmatched-pattern",
    ]
    if settings.ignore_path:
        cmd += ["--ignore-path", settings.ignore_path]
    return cmd + targets


def parse_report(raw: str) -> LintReport:
    """Flatten ESLint's per-file JSON results into one LintReport.

    Messages without a position (e.g. "File ignored" warnings) are placed on
    line 1, column 1 so they can still be annotated.
    """
    try:
        results = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LintEngineError(f"ESLint produced unreadable output: {exc}") from exc

    diagnostics: list[LintDiagnostic] = []
    errors = warnings = 0
    for result in results:
        errors += result.get("errorCount", 0)
        warnings += result.get("warningCount", 0)
        for msg in result.get("messages", []):
            diagnostics.append(
                LintDiagnostic(
                    file_path=result["filePath"],
                    line=msg.get("line") or 1,
                    end_line=msg.get("endLine"),
                    column=msg.get("column") or 1,
                    end_column=msg.get("endColumn"),
                    severity=msg.get("severity", 0),
                    rule_id=msg.get("ruleId"),
                    message=msg["message"],
                )
            )
    return LintReport(diagnostics=diagnostics, error_count=errors, warning_count=warnings)


def run_eslint(targets: list[str], settings: ActionSettings) -> LintReport:
    if not targets:
        return LintReport()

    try:
        result = subprocess.run(
            build_command(targets, settings),
            cwd=settings.github_workspace,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise LintEngineError(f"ESLint not found at '{settings.eslint_bin}'. Run npm install first.") from exc

    # 0: clean, 1: lint errors found, anything else: ESLint itself failed
    if result.returncode not in (0, 1):
        raise LintEngineError(f"ESLint exited with {result.returncode}: {result.stderr.strip()}")
    return parse_report(result.stdout)
