"""Runner log commands understood by the GitHub Actions log viewer.

These lines go straight to stdout through typer.echo; rich would treat the
bracketed ``##[level]`` prefixes as markup.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import typer


def _escape(message: str) -> str:
    # Workflow command data must not contain raw newlines.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def debug(message: str) -> None:
    typer.echo(f"::debug::{_escape(message)}")


def warning(message: str) -> None:
    typer.echo(f"::warning::{_escape(message)}")


def set_failed(message: str) -> None:
    """Report a step failure; the caller is responsible for the exit code."""
    typer.echo(f"::error::{_escape(message)}")


@contextmanager
def group(name: str) -> Iterator[None]:
    """Fold everything echoed inside the block into one collapsible log group."""
    typer.echo(f"::group::{name}")
    try:
        yield
    finally:
        typer.echo("::endgroup::")
