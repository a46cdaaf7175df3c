"""The four operations exposed to the command line.

``analyze``, ``preview`` and ``show_changelog`` only read. ``prepare_release``
runs the release state machine and is the only operation that writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from release_prep.core.changelog import render_release
from release_prep.core.commits import classify_commits, releasable_commits, summarize
from release_prep.core.decision import (
    BumpRecommendation,
    parse_bump_type,
    recommend_bump,
    suggested_bump_type,
)
from release_prep.core.history import read_unreleased
from release_prep.core.release import ReleaseResult, ReleaseStateMachine
from release_prep.project.manifest import read_version

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from release_prep.checks import CheckResult
    from release_prep.core.commits import Category, ClassifiedCommit
    from release_prep.core.version import BumpType, Version
    from release_prep.repository import RepositoryHandle
    from release_prep.vcs.git import Commit


def _releasable(repo: RepositoryHandle, commits: Sequence[Commit]) -> list[Commit]:
    return releasable_commits(commits, repo.config.commits.skip_release_patterns)


@dataclass(frozen=True)
class AnalysisReport:
    current_version: Version
    last_tag: str | None
    initial: bool
    classified: tuple[ClassifiedCommit, ...]
    summary: dict[Category, int]
    recommendation: BumpRecommendation

    @property
    def suggested_bump(self) -> BumpType:
        return suggested_bump_type(self.recommendation)

    @property
    def next_version(self) -> Version | None:
        """The version ``prepare-release`` would produce following the recommendation."""
        if self.recommendation is BumpRecommendation.NONE:
            return None
        return self.current_version.bump(self.suggested_bump)


def analyze(repo: RepositoryHandle) -> AnalysisReport:
    """Report the current version, the last release and a bump recommendation."""
    current_version = read_version(repo.manifest)
    unreleased = read_unreleased(repo.history)
    classified = tuple(classify_commits(_releasable(repo, unreleased.commits)))
    return AnalysisReport(
        current_version=current_version,
        last_tag=unreleased.since,
        initial=unreleased.initial,
        classified=classified,
        summary=summarize(classified),
        recommendation=recommend_bump(classified, initial=unreleased.initial),
    )


def prepare_release(
    repo: RepositoryHandle,
    bump_kind: str | None,
    *,
    today: date | None = None,
    on_check: Callable[[CheckResult], None] | None = None,
) -> ReleaseResult:
    """Bump the version, regenerate the changelog, commit and tag.

    ``on_check`` is called with each advisory check result as soon as the
    checks have run, i.e. after preflight and before anything is written.

    Raises:
        InvalidInputError: If ``bump_kind`` is missing or invalid, before
            anything else runs
    """
    bump_type = parse_bump_type(bump_kind)
    machine = ReleaseStateMachine(
        repo,
        bump_type,
        today=today or date.today(),
        on_check=on_check,
    )
    return machine.run()


def preview(repo: RepositoryHandle) -> str:
    """Render the changelog block for unreleased commits without writing anything."""
    unreleased = read_unreleased(repo.history)
    classified = classify_commits(_releasable(repo, unreleased.commits))
    return render_release(classified, options=repo.config.changelog) + "\n"


def show_changelog(repo: RepositoryHandle) -> str | None:
    """Return the persisted changelog, or None if there is none."""
    return repo.changelog.read()
