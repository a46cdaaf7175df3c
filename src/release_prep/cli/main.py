"""Command line entry point for release-prep."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from release_prep import __version__
from release_prep.cli._common import CLIContext, console, err_console, fail, get_context
from release_prep.cli.commands.analyze import run_analyze
from release_prep.cli.commands.changelog import run_preview, run_show_changelog
from release_prep.cli.commands.release import run_prepare_release
from release_prep.core.decision import parse_bump_type
from release_prep.exceptions import InvalidInputError, ReleasePrepError
from release_prep.log import configure_logging


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--path",
    "-C",
    type=click.Path(path_type=Path, exists=True, file_okay=False),
    default=None,
    help="Project directory (defaults to the current directory).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="release-prep")
@click.pass_context
def cli(ctx: click.Context, path: Path | None, verbose: bool) -> None:
    """Decide the next version, render the changelog, and prepare releases."""
    configure_logging(verbose, console=err_console)
    ctx.obj = CLIContext(path=path or Path.cwd(), verbose=verbose)


@cli.command("analyze")
@click.pass_context
def analyze_cmd(ctx: click.Context) -> None:
    """Recommend a version bump from the commits since the last release."""
    repo = get_context(ctx).open_repository()
    try:
        run_analyze(repo, console)
    except ReleasePrepError as e:
        fail(e)


@cli.command("prepare-release")
@click.argument("bump_kind", required=False, metavar="[major|minor|patch]")
@click.pass_context
def prepare_release_cmd(ctx: click.Context, bump_kind: str | None) -> None:
    """Bump the version, regenerate the changelog, commit and tag (no push)."""
    try:
        parse_bump_type(bump_kind)
    except InvalidInputError as e:
        fail(e)

    repo = get_context(ctx).open_repository()
    try:
        run_prepare_release(repo, bump_kind, console, err_console)
    except ReleasePrepError as e:
        fail(e)


@cli.command("preview")
@click.pass_context
def preview_cmd(ctx: click.Context) -> None:
    """Render the changelog for unreleased commits without writing anything."""
    repo = get_context(ctx).open_repository()
    try:
        run_preview(repo, err_console)
    except ReleasePrepError as e:
        fail(e)


@cli.command("show-changelog")
@click.pass_context
def show_changelog_cmd(ctx: click.Context) -> None:
    """Display the current changelog file."""
    repo = get_context(ctx).open_repository()
    try:
        run_show_changelog(repo, console, err_console)
    except ReleasePrepError as e:
        fail(e)


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(args=args, prog_name="release-prep", standalone_mode=False)
    except click.ClickException as exc:
        exc.show(file=sys.stderr)
        return exc.exit_code
    except click.exceptions.Abort:
        err_console.print("[red]Operation cancelled by user.[/]")
        return 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    return 0
