"""Shared CLI helpers: consoles, context, and error reporting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from rich.console import Console
from rich.markup import escape

from release_prep.exceptions import ReleasePrepError, ReleaseStepError
from release_prep.repository import RepositoryHandle

if TYPE_CHECKING:
    import click

console = Console()
err_console = Console(stderr=True)


@dataclass
class CLIContext:
    path: Path
    verbose: bool = False

    def open_repository(self) -> RepositoryHandle:
        try:
            return RepositoryHandle.open(self.path)
        except ReleasePrepError as e:
            fail(e)


def get_context(ctx: click.Context) -> CLIContext:
    obj = ctx.find_object(CLIContext)
    if obj is None:
        obj = CLIContext(path=Path.cwd())
    return obj


def fail(error: ReleasePrepError, *, console: Console | None = None) -> NoReturn:
    """Print ``error`` with its remediation and exit with status 1."""
    out = console or err_console
    if isinstance(error, ReleaseStepError):
        out.print(f"[red]❌ Release failed during {error.step}:[/] {escape(error.message)}")
    else:
        out.print(f"[red]❌ Error:[/] {escape(error.message)}")
    if error.remediation:
        out.print(f"[yellow]→[/] {escape(error.remediation)}")
    raise SystemExit(1) from error
