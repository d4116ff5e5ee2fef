"""Settings resolved from the GitHub Actions environment."""

from pathlib import Path

import typer
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_FALSY = {"", "false", "0", "no", "off"}


class ActionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Runner environment
    github_token: SecretStr | None = None
    github_sha: str = ""
    github_workspace: Path = Field(default_factory=Path.cwd)
    github_repository: str = ""  # "owner/repo"
    github_event_path: Path | None = None
    github_api_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"

    # Action inputs (the runner exports them as INPUT_<NAME> with dashes kept)
    job_name: str = Field("", validation_alias="INPUT_JOB-NAME")
    lint_all: str = Field("", validation_alias="INPUT_LINT-ALL")
    custom_glob: str = Field("", validation_alias="INPUT_CUSTOM-GLOB")

    # Lint engine
    eslint_bin: str = Field("node_modules/.bin/eslint", validation_alias="LINTCHECK_ESLINT_BIN")
    ignore_path: str | None = Field(None, validation_alias="LINTCHECK_IGNORE_PATH")
    default_target: str = Field("src", validation_alias="LINTCHECK_DEFAULT_TARGET")

    @property
    def lint_everything(self) -> bool:
        return self.lint_all.strip().lower() not in _FALSY

    @property
    def owner(self) -> str:
        return self.github_repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.github_repository.split("/", 1)[1]


def get_settings() -> ActionSettings:
    """Build ActionSettings from the environment and validate what the run needs.

    The token and repository are required; everything else has a default so
    the action can still lint when the event payload or sha are missing.
    """
    settings = ActionSettings()

    if not settings.github_token:
        typer.echo("Missing GitHub credentials. Pass GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }} in the step env.")
        raise typer.Exit(1)
    owner, _, repo = settings.github_repository.partition("/")
    if not owner or not repo:
        typer.echo(f"GITHUB_REPOSITORY must look like 'owner/repo', got '{settings.github_repository}'.")
        raise typer.Exit(1)

    return settings
