"""Implementation of the 'preview' and 'show-changelog' commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from release_prep.operations import preview, show_changelog

if TYPE_CHECKING:
    from rich.console import Console

    from release_prep.repository import RepositoryHandle


def run_preview(repo: RepositoryHandle, err_console: Console) -> str:
    """Print the unreleased changelog block to stdout."""
    content = preview(repo)
    err_console.print("📋 Preview of next release changelog:\n")
    click.echo(content, nl=False)
    return content


def run_show_changelog(repo: RepositoryHandle, console: Console, err_console: Console) -> bool:
    """Print the persisted changelog. Returns False when there is none."""
    content = show_changelog(repo)
    if content is None:
        console.print(f"[yellow]No {repo.changelog.relative_path} found[/]")
        return False
    err_console.print("📖 Current changelog:\n")
    click.echo(content, nl=not content.endswith("\n"))
    return True
