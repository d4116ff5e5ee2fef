"""Pick the files to lint from the pull request or pushed commit."""

from pathlib import PurePosixPath

from lintcheck.github import GitHubClient, attempt
from lintcheck.models import FileChange, FileSelection, PullRequest, Push, TriggerContext
from lintcheck.settings import ActionSettings

EXTENSIONS = (".ts", ".js", ".tsx", ".jsx")
DECLARATION_SUFFIX = ".d.ts"
# Only added, modified or copied paths carry new content to lint at the pushed commit.
SKIPPED_STATUSES = {"removed", "renamed", "changed", "unchanged"}

_NO_DIFF_WARNING = "Token doesn't have permission to access this resource. Running lint over custom glob or all files."


def is_lintable(path: str) -> bool:
    return PurePosixPath(path).suffix in EXTENSIONS and DECLARATION_SUFFIX not in path


def filter_lintable(paths: list[str]) -> list[str]:
    return [p for p in paths if is_lintable(p)]


def filter_commit_changes(changes: list[FileChange]) -> list[str]:
    return [c.path for c in changes if c.status not in SKIPPED_STATUSES and is_lintable(c.path)]


def select_files(trigger: TriggerContext, client: GitHubClient, settings: ActionSettings) -> FileSelection:
    """Resolve the changed files for the trigger and the sha to report against.

    When the diff cannot be fetched the selection carries ``files=None`` and
    falls back to the sha the workflow was triggered for.
    """
    match trigger:
        case PullRequest(number=number):
            info = attempt(lambda: client.pull_request_files(number), _NO_DIFF_WARNING)
            if info is None:
                return FileSelection(files=None, head_sha=settings.github_sha)
            paths, head_sha = info
            return FileSelection(files=filter_lintable(paths), head_sha=head_sha)
        case Push(commit_sha=sha) if not sha:
            return FileSelection(files=None, head_sha=sha)
        case Push(commit_sha=sha):
            changes = attempt(lambda: client.commit_files(sha), _NO_DIFF_WARNING)
            files = filter_commit_changes(changes) if changes is not None else None
            return FileSelection(files=files, head_sha=sha)
        case _:
            raise TypeError(f"Unsupported trigger: {trigger!r}")


def resolve_targets(selection: FileSelection, settings: ActionSettings) -> list[str]:
    """Apply input precedence: custom glob, then lint-all, then the diff, then the default target."""
    if settings.custom_glob.strip():
        return [entry.strip() for entry in settings.custom_glob.split(",") if entry.strip()]
    if settings.lint_everything or selection.files is None:
        return [settings.default_target]
    return selection.files
