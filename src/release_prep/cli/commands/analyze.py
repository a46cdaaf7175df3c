"""Implementation of the 'analyze' command.

Reports what the next release would be without changing anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from release_prep.core.decision import BumpRecommendation
from release_prep.operations import analyze

if TYPE_CHECKING:
    from rich.console import Console

    from release_prep.operations import AnalysisReport
    from release_prep.repository import RepositoryHandle

RECOMMENDATION_MESSAGES = {
    BumpRecommendation.MAJOR: "⚠️  Breaking changes detected → [red]MAJOR[/] bump needed",
    BumpRecommendation.MINOR: "✨ Features detected → [green]MINOR[/] bump suggested",
    BumpRecommendation.PATCH: "🐛 Patches/fixes detected → [cyan]PATCH[/] bump suggested",
    BumpRecommendation.NONE: "ℹ️  No releasable conventional commits found",
    BumpRecommendation.INITIAL_RELEASE: (
        "🎉 No previous tags found - this will be the initial release → "
        "[green]MINOR[/] bump suggested"
    ),
}


def run_analyze(repo: RepositoryHandle, console: Console) -> AnalysisReport:
    """Run the analyze command.

    Args:
        repo: Repository to analyze
        console: Console for standard output

    Returns:
        The analysis report that was printed
    """
    report = analyze(repo)

    console.print(f"Current version: [cyan]{report.current_version}[/]")
    if report.last_tag:
        console.print(f"Last tag: [cyan]{report.last_tag}[/]")
    console.print()

    if report.classified:
        heading = "Commits since last release:" if report.last_tag else "Commits:"
        console.print(f"[bold]{heading}[/]")
        for cc in report.classified:
            console.print(f"  [dim]{cc.commit.short_sha}[/] {escape(cc.commit.subject)}")
        console.print()

        table = Table(title="Categories", show_header=True, header_style="bold")
        table.add_column("Category")
        table.add_column("Commits", justify="right")
        for category, count in report.summary.items():
            table.add_row(str(category), str(count))
        console.print(table)
        console.print()
    else:
        console.print("[yellow]No commits found since last release.[/]\n")

    console.print(RECOMMENDATION_MESSAGES[report.recommendation])
    if report.next_version is not None:
        console.print(
            f"[dim]Run [cyan]release-prep prepare-release {report.suggested_bump}[/] "
            f"to prepare {report.next_version.tag_name}. The bump kind is always your "
            "choice.[/]"
        )
    return report
