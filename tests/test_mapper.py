"""Tests for mapping diagnostics to annotations, console text and a verdict."""

from pathlib import Path
from unittest.mock import patch

import pytest

from lintcheck.mapper import format_console, lint, relative_path, summarize, to_annotation
from lintcheck.models import LintReport
from tests.conftest import WORKSPACE, diagnostic, make_settings


def _report(errors: int, warnings: int) -> LintReport:
    diagnostics = [diagnostic(2, line=i + 1) for i in range(errors)]
    diagnostics += [diagnostic(1, line=100 + i, rule_id="semi") for i in range(warnings)]
    return LintReport(diagnostics=diagnostics, error_count=errors, warning_count=warnings)


class TestRelativePath:
    def test_strips_workspace(self) -> None:
        assert relative_path(f"{WORKSPACE}/src/a.ts", WORKSPACE) == "src/a.ts"

    def test_outside_workspace_unchanged(self) -> None:
        assert relative_path("/tmp/other.ts", WORKSPACE) == "/tmp/other.ts"


class TestToAnnotation:
    @pytest.mark.parametrize(("severity", "level"), [(2, "failure"), (1, "warning"), (0, "notice"), (7, "notice")])
    def test_levels(self, severity: int, level: str) -> None:
        assert to_annotation(diagnostic(severity), WORKSPACE).annotation_level == level

    def test_missing_end_is_single_point(self) -> None:
        a = to_annotation(diagnostic(line=5, column=9), WORKSPACE)
        assert (a.start_line, a.end_line) == (5, 5)
        assert (a.start_column, a.end_column) == (9, 9)

    def test_explicit_span_kept(self) -> None:
        a = to_annotation(diagnostic(line=5, column=2, end_line=5, end_column=14), WORKSPACE)
        assert (a.start_column, a.end_column) == (2, 14)

    def test_multiline_span_drops_columns(self) -> None:
        a = to_annotation(diagnostic(line=5, column=2, end_line=8, end_column=1), WORKSPACE)
        assert (a.start_line, a.end_line) == (5, 8)
        assert a.start_column is None
        assert a.end_column is None

    def test_rule_title_and_docs_link(self) -> None:
        a = to_annotation(diagnostic(rule_id="eqeqeq", message="Expected '==='."), WORKSPACE)
        assert a.title == "eqeqeq"
        assert a.message == "Expected '==='.\nhttps://eslint.org/docs/rules/eqeqeq"
        assert a.path == "src/a.ts"

    def test_no_rule_uses_action_name(self) -> None:
        a = to_annotation(diagnostic(rule_id=None, message="Parsing error"), WORKSPACE)
        assert a.title == "ESLint"
        assert a.message == "Parsing error"


class TestFormatConsole:
    def test_groups_by_file_in_reported_order(self, mixed_report: LintReport) -> None:
        text = format_console(mixed_report, WORKSPACE)
        assert text == (
            "src/a.ts\n"
            "##[error]  3:7  error  'x' is assigned a value but never used.  no-unused-vars\n"
            "##[error]  9:2  error  Parsing error: Unexpected token\n"
            "\n"
            "src/b.tsx\n"
            "##[warning]  10:1  warning  Expected '==='.  eqeqeq"
        )

    def test_empty(self) -> None:
        assert format_console(LintReport(), WORKSPACE) == ""


class TestSummarize:
    def test_warnings_only_succeed(self) -> None:
        result = summarize(_report(0, 2), WORKSPACE)
        assert result.conclusion == "success"
        assert result.output.summary == "0 error(s), 2 warning(s) found"

    def test_errors_fail(self) -> None:
        result = summarize(_report(3, 1), WORKSPACE)
        assert result.conclusion == "failure"
        assert result.output.summary == "3 error(s), 1 warning(s) found"
        assert result.output.title == "ESLint"

    def test_one_annotation_per_diagnostic(self, mixed_report: LintReport) -> None:
        result = summarize(mixed_report, WORKSPACE)
        assert len(result.output.annotations) == len(mixed_report.diagnostics)

    def test_deterministic(self, mixed_report: LintReport) -> None:
        first = summarize(mixed_report, WORKSPACE)
        second = summarize(mixed_report, WORKSPACE)
        assert (first.conclusion, first.output.summary) == (second.conclusion, second.output.summary)
        assert first == second


class TestLint:
    def test_logs_grouped_console(self, mixed_report: LintReport, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("lintcheck.mapper.run_eslint", return_value=mixed_report) as run:
            result = lint(["src/a.ts"], make_settings())
        run.assert_called_once()
        out = capsys.readouterr().out
        assert "::group::ESLint: 2 error(s), 1 warning(s) found" in out
        assert "##[warning]  10:1  warning" in out
        assert out.rstrip().endswith("::endgroup::")
        assert result.conclusion == "failure"

    def test_clean_run_logs_nothing(self, capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
        with patch("lintcheck.mapper.run_eslint", return_value=LintReport()):
            result = lint(["src"], make_settings(github_workspace=tmp_path))
        assert capsys.readouterr().out == ""
        assert result.conclusion == "success"
