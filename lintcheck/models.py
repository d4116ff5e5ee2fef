"""Shared pydantic models — the contract between the selector, engine, mapper and reporter."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

AnnotationLevel = Literal["notice", "warning", "failure"]
Conclusion = Literal["success", "failure"]
FileStatus = Literal["added", "modified", "removed", "renamed", "copied", "changed", "unchanged"]


class PullRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["pull_request"] = "pull_request"
    number: int


class Push(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["push"] = "push"
    commit_sha: str


TriggerContext = Annotated[PullRequest | Push, Field(discriminator="kind")]


class FileChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatus


class FileSelection(BaseModel):
    """Files picked from the trigger's diff and the commit the check run belongs to."""

    model_config = ConfigDict(frozen=True)

    files: list[str] | None  # None when the diff could not be fetched
    head_sha: str


class LintDiagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int
    end_line: int | None = None
    column: int
    end_column: int | None = None
    severity: int  # 0 off, 1 warning, 2 error
    rule_id: str | None = None
    message: str


class LintReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    diagnostics: list[LintDiagnostic] = []
    error_count: int = 0
    warning_count: int = 0


class Annotation(BaseModel):
    """One check-run annotation, field names as the Checks API expects them."""

    model_config = ConfigDict(frozen=True)

    path: str
    start_line: int
    end_line: int
    start_column: int | None = None  # omitted for multi-line spans
    end_column: int | None = None
    annotation_level: AnnotationLevel
    title: str
    message: str


class CheckOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    annotations: list[Annotation] = []


class LintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    conclusion: Conclusion
    output: CheckOutput
    console: str = ""  # grouped human-readable diagnostics


class CheckRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    status: str
