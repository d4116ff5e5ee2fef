"""Shared test fixtures."""

from pathlib import Path

import pytest

from lintcheck.models import LintDiagnostic, LintReport
from lintcheck.settings import ActionSettings

WORKSPACE = Path("/github/workspace")


def make_settings(**kwargs) -> ActionSettings:
    defaults = {
        "github_token": "ghs_test",
        "github_sha": "abc123",
        "github_workspace": WORKSPACE,
        "github_repository": "octo/widgets",
        "github_event_path": None,
        "github_api_url": "https://api.github.com",
        "github_graphql_url": "https://api.github.com/graphql",
        "job_name": "",
        "lint_all": "",
        "custom_glob": "",
        "eslint_bin": "node_modules/.bin/eslint",
        "ignore_path": None,
        "default_target": "src",
    }
    defaults.update(kwargs)
    return ActionSettings(_env_file=None, **defaults)  # type: ignore[call-arg]


def diagnostic(severity: int = 2, **kwargs) -> LintDiagnostic:
    fields = {
        "file_path": f"{WORKSPACE}/src/a.ts",
        "line": 3,
        "column": 7,
        "severity": severity,
        "rule_id": "no-unused-vars",
        "message": "'x' is assigned a value but never used.",
    }
    fields.update(kwargs)
    return LintDiagnostic(**fields)


@pytest.fixture
def settings() -> ActionSettings:
    return make_settings()


@pytest.fixture
def mixed_report() -> LintReport:
    return LintReport(
        diagnostics=[
            diagnostic(2, line=3, column=7, end_line=3, end_column=8),
            diagnostic(
                1, file_path=f"{WORKSPACE}/src/b.tsx", line=10, column=1, rule_id="eqeqeq", message="Expected '==='."
            ),
            diagnostic(2, line=9, column=2, rule_id=None, message="Parsing error: Unexpected token"),
        ],
        error_count=2,
        warning_count=1,
    )
