"""Implementation of the 'prepare-release' command.

Runs the release state machine and reports advisory checks once preflight has
passed. The resulting commit and tag stay local; pushing them is left to the
operator.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from release_prep.core.decision import parse_bump_type
from release_prep.operations import prepare_release

if TYPE_CHECKING:
    from rich.console import Console

    from release_prep.checks import CheckResult
    from release_prep.core.release import ReleaseResult
    from release_prep.repository import RepositoryHandle


def run_prepare_release(
    repo: RepositoryHandle,
    bump_kind: str | None,
    console: Console,
    err_console: Console,
    *,
    today: date | None = None,
) -> ReleaseResult:
    """Run the prepare-release command.

    Args:
        repo: Repository to release
        bump_kind: Operator-chosen bump kind (major, minor or patch)
        console: Console for standard output
        err_console: Console for warnings

    Raises:
        ReleasePrepError: Any failure; the caller reports it
    """
    bump_type = parse_bump_type(bump_kind)
    console.print(f"🚀 Creating {bump_type} release...\n")

    def report_check(check: CheckResult) -> None:
        if check.passed:
            console.print(f"  [green]✓[/] {escape(check.command)}")
        else:
            err_console.print(
                f"  [yellow]⚠️  {escape(check.command)} failed "
                f"(exit code {check.returncode}, not blocking)[/]"
            )

    result = prepare_release(repo, bump_type.value, today=today, on_check=report_check)
    if result.checks:
        console.print()

    plan = result.plan
    if plan.initial:
        console.print(f"🎉 First release! Version [green]{plan.to_version}[/]")
    else:
        console.print(
            f"Updated from [cyan]{plan.current_version}[/] to [green]{plan.to_version}[/]"
        )
    console.print(f"  [green]✓[/] Updated version in {repo.manifest.relative_path}")
    console.print(f"  [green]✓[/] Regenerated {repo.changelog.relative_path}")
    console.print(f"  [green]✓[/] Committed {escape(plan.commit_message)}")
    console.print(f"  [green]✓[/] Tagged {plan.tag_name}\n")

    push_branch, push_tag = result.follow_up_commands
    console.print(
        Panel(
            f"[green]Release {plan.tag_name} prepared![/]\n\n"
            "Next steps:\n"
            f"  1. Review the changes: [cyan]git log -1 && git show {plan.tag_name}[/]\n"
            f"  2. Push the commit: [cyan]{push_branch}[/]\n"
            f"  3. Push the tag: [cyan]{push_tag}[/]\n\n"
            f"[dim]To undo: {result.undo_command}[/]",
            title="[green]Release Prepared[/]",
            border_style="green",
        )
    )
    return result
