"""GitHub REST v3 and GraphQL v4 client for changed files and check runs."""

from collections.abc import Callable
from typing import TypeVar

import httpx

from lintcheck import workflow
from lintcheck.models import CheckOutput, CheckRun, Conclusion, FileChange
from lintcheck.settings import ActionSettings

T = TypeVar("T")

# Checks API rejects more than this many annotations in a single request.
MAX_ANNOTATIONS = 50
PR_FILES_PAGE = 100

_PULL_REQUEST_FILES = """
query PullRequestFiles($owner: String!, $name: String!, $prNumber: Int!, $first: Int!) {
  repository(owner: $owner, name: $name) {
    pullRequest(number: $prNumber) {
      files(first: $first) {
        nodes {
          path
        }
      }
      commits(last: 1) {
        nodes {
          commit {
            oid
          }
        }
      }
    }
  }
}
"""


class GitHubError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def attempt(call: Callable[[], T], message: str) -> T | None:
    """Run a GitHub call once; on an API failure emit a warning and return None.

    Only transport errors and GitHub error responses are absorbed. Anything
    else (malformed payloads, bugs) propagates to the caller.
    """
    try:
        return call()
    except (httpx.HTTPError, GitHubError) as exc:
        workflow.debug(f"{type(exc).__name__}: {exc}")
        workflow.warning(message)
        return None


class GitHubClient:
    def __init__(self, settings: ActionSettings) -> None:
        token = settings.github_token.get_secret_value() if settings.github_token else ""
        self._owner = settings.owner
        self._repo = settings.repo
        self._base_url = settings.github_api_url.rstrip("/")
        self._graphql_url = settings.github_graphql_url
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _check(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            raise GitHubError("GitHub API returned 401. Check the GITHUB_TOKEN passed to the action.", 401)
        if response.is_error:
            try:
                detail = response.json().get("message", response.text)
            except ValueError:
                detail = response.text
            raise GitHubError(
                f"GitHub API returned {response.status_code} for {response.request.url}: {detail}",
                response.status_code,
            )

    def _get(self, path: str, params: dict | None = None) -> dict:
        response = httpx.get(
            f"{self._base_url}{path}",
            headers=self._headers,
            params=params or {},
            timeout=30,
        )
        self._check(response)
        return response.json()

    def _post(self, path: str, body: dict) -> dict:
        response = httpx.post(
            f"{self._base_url}{path}",
            headers=self._headers,
            json=body,
            timeout=30,
        )
        self._check(response)
        return response.json()

    def _patch(self, path: str, body: dict) -> dict:
        response = httpx.patch(
            f"{self._base_url}{path}",
            headers=self._headers,
            json=body,
            timeout=30,
        )
        self._check(response)
        return response.json()

    def _gql(self, query: str, variables: dict | None = None) -> dict:
        response = httpx.post(
            self._graphql_url,
            json={"query": query, "variables": variables or {}},
            headers=self._headers,
            timeout=30,
        )
        self._check(response)
        data = response.json()
        if data.get("errors"):
            raise GitHubError(f"GitHub GraphQL error: {data['errors']}")
        return data["data"]

    def pull_request_files(self, number: int) -> tuple[list[str], str]:
        """Return the first page of changed paths and the latest commit oid of a pull request."""
        data = self._gql(
            _PULL_REQUEST_FILES,
            {"owner": self._owner, "name": self._repo, "prNumber": number, "first": PR_FILES_PAGE},
        )
        pull_request = data["repository"]["pullRequest"]
        paths = [node["path"] for node in pull_request["files"]["nodes"]]
        head_sha = pull_request["commits"]["nodes"][0]["commit"]["oid"]
        return paths, head_sha

    def commit_files(self, sha: str) -> list[FileChange]:
        node = self._get(f"/repos/{self._owner}/{self._repo}/commits/{sha}")
        return [FileChange(path=f["filename"], status=f["status"]) for f in node.get("files", [])]

    def list_in_progress_check_runs(self, ref: str) -> list[CheckRun]:
        node = self._get(
            f"/repos/{self._owner}/{self._repo}/commits/{ref}/check-runs",
            params={"status": "in_progress", "per_page": "100"},
        )
        return [self._run_from_node(r) for r in node.get("check_runs", [])]

    def create_check_run(self, name: str, head_sha: str, started_at: str) -> CheckRun:
        node = self._post(
            f"/repos/{self._owner}/{self._repo}/check-runs",
            {
                "name": name,
                "head_sha": head_sha,
                "status": "in_progress",
                "started_at": started_at,
            },
        )
        return self._run_from_node(node)

    def update_check_run(
        self,
        check_run_id: int,
        completed_at: str,
        conclusion: Conclusion,
        output: CheckOutput | None = None,
    ) -> CheckRun:
        """Complete a check run, sending annotations in batches the API accepts.

        The first request carries the conclusion and the first batch; each
        following request appends the next batch to the same output.
        """
        path = f"/repos/{self._owner}/{self._repo}/check-runs/{check_run_id}"
        body: dict = {"status": "completed", "completed_at": completed_at, "conclusion": conclusion}
        if output is None:
            return self._run_from_node(self._patch(path, body))

        annotations = [a.model_dump(exclude_none=True) for a in output.annotations]
        batches = [annotations[i : i + MAX_ANNOTATIONS] for i in range(0, len(annotations), MAX_ANNOTATIONS)] or [[]]
        node: dict = {}
        for index, batch in enumerate(batches):
            payload = {"title": output.title, "summary": output.summary, "annotations": batch}
            node = self._patch(path, {**body, "output": payload} if index == 0 else {"output": payload})
        return self._run_from_node(node)

    def _run_from_node(self, node: dict) -> CheckRun:
        return CheckRun(id=node["id"], name=node["name"], status=node["status"])
