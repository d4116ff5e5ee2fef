"""Check run lifecycle: acquire one run per invocation, then complete it once."""

from datetime import datetime, timezone

from lintcheck.github import GitHubClient, attempt
from lintcheck.mapper import ACTION_NAME
from lintcheck.models import LintResult
from lintcheck.settings import ActionSettings

_NO_ANNOTATIONS_WARNING = "Token doesn't have permission to access this resource. Running without annotations."


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class CheckReporter:
    def __init__(self, client: GitHubClient, settings: ActionSettings) -> None:
        self._client = client
        self._job_name = settings.job_name.strip()

    def _find_in_progress(self, head_sha: str) -> int | None:
        runs = attempt(lambda: self._client.list_in_progress_check_runs(head_sha), _NO_ANNOTATIONS_WARNING)
        for run in runs or []:
            if run.name.lower() == self._job_name.lower():
                return run.id
        return None

    def acquire(self, head_sha: str) -> int | None:
        """Return the id of the check run to report on, or None if the token cannot create one.

        With a job name configured, an in-progress run of that name on the
        same commit is reused instead of creating a separate "ESLint" run.
        """
        if self._job_name:
            run_id = self._find_in_progress(head_sha)
            if run_id is not None:
                return run_id

        run = attempt(
            lambda: self._client.create_check_run(ACTION_NAME, head_sha, started_at=_now()),
            _NO_ANNOTATIONS_WARNING,
        )
        return run.id if run is not None else None

    def finalize(self, run_id: int, result: LintResult) -> bool:
        run = attempt(
            lambda: self._client.update_check_run(run_id, _now(), result.conclusion, result.output),
            _NO_ANNOTATIONS_WARNING,
        )
        return run is not None

    def mark_failed(self, run_id: int) -> bool:
        run = attempt(lambda: self._client.update_check_run(run_id, _now(), "failure"), _NO_ANNOTATIONS_WARNING)
        return run is not None
