"""Release preparation state machine.

A run moves through::

    IDLE -> PREFLIGHT_CHECKING -> BLOCKED
                               -> PREFLIGHTED -> VERSION_BUMPING
                               -> CHANGELOG_GENERATING -> COMMITTING
                               -> TAGGING -> DONE

Advisory checks run once preflight has passed, never before it.
Nothing is written before VERSION_BUMPING. The whole release plan (new
version, manifest content, changelog) is computed in memory while
PREFLIGHTED, so history or manifest problems abort with no side effects.

Commit and tag are two separate git operations and cannot be made atomic.
They run back to back, and every failure after the first write raises an
error carrying the failed step and the manual steps needed to recover.
Nothing is retried and nothing is pushed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from release_prep.checks import run_advisory_checks
from release_prep.core.changelog import ReleaseNotes, render_changelog
from release_prep.core.commits import (
    RELEASE_COMMIT_TEMPLATE,
    classify_commits,
    releasable_commits,
)
from release_prep.core.history import read_history, release_tags, released_ranges, tag_exists
from release_prep.exceptions import (
    BranchNotAllowedError,
    ChangelogGenerationError,
    CommitError,
    DirtyWorkingTreeError,
    GitError,
    HistoryUnavailableError,
    ManifestWriteError,
    TagError,
    VersionConflictError,
)
from release_prep.project.manifest import get_manifest_version, replace_manifest_version

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from release_prep.checks import CheckResult
    from release_prep.core.commits import ClassifiedCommit
    from release_prep.core.version import BumpType, Version
    from release_prep.repository import RepositoryHandle

logger = logging.getLogger(__name__)

COMMIT_MESSAGE_TEMPLATE = RELEASE_COMMIT_TEMPLATE
TAG_MESSAGE_TEMPLATE = "Release {tag}"


class ReleaseState(str, Enum):
    IDLE = "idle"
    PREFLIGHT_CHECKING = "preflight-checking"
    BLOCKED = "blocked"
    PREFLIGHTED = "preflighted"
    VERSION_BUMPING = "version-bumping"
    CHANGELOG_GENERATING = "changelog-generating"
    COMMITTING = "committing"
    TAGGING = "tagging"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ReleasePlan:
    """Everything a release will write, computed before writing any of it."""

    from_version: Version | None
    current_version: Version
    to_version: Version
    bump_type: BumpType
    classified: tuple[ClassifiedCommit, ...]
    changelog: str
    previous_tag: str | None
    branch: str
    manifest_content: str = field(repr=False)

    @property
    def initial(self) -> bool:
        return self.previous_tag is None

    @property
    def tag_name(self) -> str:
        return self.to_version.tag_name

    @property
    def commit_message(self) -> str:
        return COMMIT_MESSAGE_TEMPLATE.format(version=self.to_version)

    @property
    def tag_message(self) -> str:
        return TAG_MESSAGE_TEMPLATE.format(tag=self.tag_name)


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of a successful run, with the steps left to the operator."""

    plan: ReleasePlan
    commit_sha: str
    checks: tuple[CheckResult, ...] = ()

    @property
    def version(self) -> Version:
        return self.plan.to_version

    @property
    def tag_name(self) -> str:
        return self.plan.tag_name

    @property
    def follow_up_commands(self) -> tuple[str, str]:
        return (
            f"git push origin {self.plan.branch}",
            f"git push origin {self.tag_name}",
        )

    @property
    def undo_command(self) -> str:
        return f"git reset --hard HEAD~1 && git tag -d {self.tag_name}"


class ReleaseStateMachine:
    """Runs one release preparation. Instances are single-use."""

    def __init__(
        self,
        repo: RepositoryHandle,
        bump_type: BumpType,
        *,
        today: date,
        on_check: Callable[[CheckResult], None] | None = None,
    ) -> None:
        self.repo = repo
        self.bump_type = bump_type
        self.today = today
        self.on_check = on_check
        self.state = ReleaseState.IDLE
        self.history: list[ReleaseState] = [ReleaseState.IDLE]
        self.plan: ReleasePlan | None = None

    def _enter(self, state: ReleaseState) -> None:
        logger.debug("release state %s -> %s", self.state, state)
        self.state = state
        self.history.append(state)

    def run(self) -> ReleaseResult:
        """Execute every step in order and return the result.

        Raises:
            BranchNotAllowedError: Preflight, current branch not allowed
            DirtyWorkingTreeError: Preflight, uncommitted changes present
            HistoryUnavailableError: Repository could not be queried
            ManifestParseError: Manifest version missing or malformed
            VersionConflictError: Bumped version not newer than latest release, or
                its tag already exists elsewhere
            ManifestWriteError: Manifest could not be written
            ChangelogGenerationError: Changelog could not be written
            CommitError: Release commit could not be created
            TagError: Release tag could not be created
        """
        if self.state is not ReleaseState.IDLE:
            raise RuntimeError(f"release state machine already used (state: {self.state})")

        branch = self._preflight()
        checks = self._run_advisory_checks()
        plan = self._build_plan(branch)
        self.plan = plan
        self._bump_version(plan)
        self._write_changelog(plan)
        commit_sha = self._commit(plan)
        self._tag(plan, commit_sha)
        self._enter(ReleaseState.DONE)
        logger.info("release %s prepared", plan.tag_name)
        return ReleaseResult(plan=plan, commit_sha=commit_sha, checks=checks)

    # -- steps ----------------------------------------------------------------

    def _preflight(self) -> str:
        self._enter(ReleaseState.PREFLIGHT_CHECKING)
        allowed = self.repo.config.allowed_branches
        try:
            branch = self.repo.worktree.current_branch()
            if branch is None or branch not in allowed:
                raise BranchNotAllowedError(branch, allowed)
            dirty = self.repo.worktree.dirty_paths()
            if dirty:
                raise DirtyWorkingTreeError(dirty)
        except (BranchNotAllowedError, DirtyWorkingTreeError):
            self._enter(ReleaseState.BLOCKED)
            raise
        except GitError as e:
            self._enter(ReleaseState.BLOCKED)
            raise HistoryUnavailableError(
                f"Cannot inspect the working tree: {e.message}",
                "Make sure the project is a git repository.",
            ) from e

        self._enter(ReleaseState.PREFLIGHTED)
        logger.info("preflight checks passed on branch %s", branch)
        return branch

    def _run_advisory_checks(self) -> tuple[CheckResult, ...]:
        commands = self.repo.config.advisory_checks
        if not commands:
            return ()
        results = tuple(run_advisory_checks(commands, self.repo.root))
        if self.on_check is not None:
            for result in results:
                self.on_check(result)
        return results

    def _build_plan(self, branch: str) -> ReleasePlan:
        manifest = self.repo.manifest
        manifest_text = manifest.read_text()
        current_version = get_manifest_version(manifest_text, manifest.relative_path)
        to_version = current_version.bump(self.bump_type)

        tags = release_tags(self.repo.history)
        previous_tag = tags[0][0] if tags else None
        if tags and to_version <= tags[0][1]:
            raise VersionConflictError(
                f"Next version {to_version} is not newer than the latest release {previous_tag}",
                f"Update the version in {manifest.relative_path} to at least {tags[0][1]} "
                "and retry.",
            )
        if tag_exists(self.repo.history, to_version.tag_name):
            raise VersionConflictError(
                f"Tag {to_version.tag_name} already exists but is not reachable from HEAD",
                f"Inspect it with `git show {to_version.tag_name}`. Delete it with "
                f"`git tag -d {to_version.tag_name}` if it is stale, or choose another "
                "bump kind.",
            )

        unreleased = read_history(self.repo.history, since=previous_tag)
        skip = self.repo.config.commits.skip_release_patterns
        classified = tuple(classify_commits(releasable_commits(unreleased.commits, skip)))
        if not classified:
            logger.warning("no commits since %s; the release will be empty", previous_tag)

        releases = [ReleaseNotes(classified, to_version, self.today)]
        releases.extend(
            ReleaseNotes(
                tuple(classify_commits(releasable_commits(r.history.commits, skip))),
                r.version,
                r.date,
            )
            for r in released_ranges(self.repo.history)
        )
        changelog = render_changelog(releases, options=self.repo.config.changelog)

        logger.info("planned release %s -> %s (%s)", current_version, to_version, self.bump_type)
        return ReleasePlan(
            from_version=None if previous_tag is None else current_version,
            current_version=current_version,
            to_version=to_version,
            bump_type=self.bump_type,
            classified=classified,
            changelog=changelog,
            previous_tag=previous_tag,
            branch=branch,
            manifest_content=replace_manifest_version(
                manifest_text, to_version, manifest.relative_path
            ),
        )

    def _bump_version(self, plan: ReleasePlan) -> None:
        self._enter(ReleaseState.VERSION_BUMPING)
        path = self.repo.manifest.relative_path
        try:
            self.repo.manifest.write_text(plan.manifest_content)
        except OSError as e:
            raise ManifestWriteError(
                f"Failed to write {path}: {e}",
                f"Check that {path} is writable and unchanged (`git diff -- {path}`), "
                "then retry.",
                self.state,
            ) from e
        logger.info("updated version in %s to %s", path, plan.to_version)

    def _write_changelog(self, plan: ReleasePlan) -> None:
        self._enter(ReleaseState.CHANGELOG_GENERATING)
        manifest_path = self.repo.manifest.relative_path
        changelog_path = self.repo.changelog.relative_path
        try:
            self.repo.changelog.write(plan.changelog)
        except OSError as e:
            raise ChangelogGenerationError(
                f"Failed to write {changelog_path}: {e}",
                f"{manifest_path} was already updated to {plan.to_version}. Revert it with "
                f"`git checkout -- {manifest_path}` before retrying.",
                self.state,
            ) from e
        logger.info("regenerated %s", changelog_path)

    def _commit(self, plan: ReleasePlan) -> str:
        self._enter(ReleaseState.COMMITTING)
        paths = [self.repo.manifest.relative_path, self.repo.changelog.relative_path]
        try:
            self.repo.vcs.stage(paths)
            commit_sha = self.repo.vcs.commit(plan.commit_message)
        except GitError as e:
            raise CommitError(
                f"Failed to commit the release: {e.message}",
                f"{' and '.join(paths)} were modified but not committed. Inspect them with "
                "`git status`, then either commit manually with "
                f"`git commit -m \"{plan.commit_message}\"` or discard them with "
                "`git reset --hard HEAD`.",
                self.state,
            ) from e
        logger.info("created release commit %s", commit_sha[:7])
        return commit_sha

    def _tag(self, plan: ReleasePlan, commit_sha: str) -> None:
        self._enter(ReleaseState.TAGGING)
        try:
            self.repo.vcs.create_tag(plan.tag_name, plan.tag_message, commit_sha)
        except GitError as e:
            raise TagError(
                f"Failed to create tag {plan.tag_name}: {e.message}",
                f"The release commit {commit_sha[:7]} exists but is not tagged. Create the "
                f"tag manually with `git tag -a {plan.tag_name} -m \"{plan.tag_message}\" "
                f"{commit_sha[:7]}`, or undo the commit with `git reset --hard HEAD~1` "
                f"(and `git tag -d {plan.tag_name}` if the tag was partially created) "
                "and retry.",
                self.state,
            ) from e
        logger.info("created tag %s", plan.tag_name)
