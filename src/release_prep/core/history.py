"""Reading commit history between releases.

Release markers are ``vX.Y.Z`` tags reachable from ``HEAD``; they are ordered
by version, not by name. Commits are returned newest first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_prep.core.version import TAG_PREFIX, Version
from release_prep.exceptions import GitError, HistoryUnavailableError

if TYPE_CHECKING:
    from datetime import date

    from release_prep.ports import HistoryReaderPort
    from release_prep.vcs.git import Commit

logger = logging.getLogger(__name__)

TAG_PATTERN = f"{TAG_PREFIX}*"


@dataclass(frozen=True)
class HistoryRange:
    """Commits in ``since..until``.

    ``initial`` is set when there was no release marker to start from and the
    range therefore covers the whole history.
    """

    commits: tuple[Commit, ...]
    since: str | None
    until: str
    initial: bool


@dataclass(frozen=True)
class ReleasedRange:
    """The commits that went into one past release."""

    tag: str
    version: Version
    date: date
    history: HistoryRange


def _unavailable(e: GitError) -> HistoryUnavailableError:
    return HistoryUnavailableError(
        f"Cannot read repository history: {e.message}",
        "Make sure the project is a git repository with at least one commit.",
    )


def release_tags(history: HistoryReaderPort, until: str = "HEAD") -> list[tuple[str, Version]]:
    """Return ``(tag, version)`` for release tags reachable from ``until``, newest first."""
    try:
        tags = history.list_tags(TAG_PATTERN, merged_into=until)
    except GitError as e:
        raise _unavailable(e) from e

    releases = []
    for tag in tags:
        version = Version.from_tag(tag)
        if version is None:
            logger.debug("ignoring non-release tag %s", tag)
            continue
        releases.append((tag, version))
    releases.sort(key=lambda item: item[1], reverse=True)
    return releases


def latest_release_tag(history: HistoryReaderPort, until: str = "HEAD") -> str | None:
    """Return the most recent release tag, or None before the first release."""
    releases = release_tags(history, until)
    return releases[0][0] if releases else None


def tag_exists(history: HistoryReaderPort, name: str) -> bool:
    """True if tag ``name`` exists anywhere in the repository, reachable or not."""
    try:
        return name in history.list_tags(name, merged_into=None)
    except GitError as e:
        raise _unavailable(e) from e


def read_history(
    history: HistoryReaderPort,
    *,
    since: str | None = None,
    until: str = "HEAD",
) -> HistoryRange:
    """Read commits after ``since`` up to ``until``.

    Raises:
        HistoryUnavailableError: If the repository cannot be queried
    """
    try:
        commits = history.get_commits(since, until)
    except GitError as e:
        raise _unavailable(e) from e
    logger.debug("read %d commits in %s..%s", len(commits), since or "<root>", until)
    return HistoryRange(
        commits=tuple(commits),
        since=since,
        until=until,
        initial=since is None,
    )


def read_unreleased(history: HistoryReaderPort, until: str = "HEAD") -> HistoryRange:
    """Read the commits since the latest release tag."""
    return read_history(history, since=latest_release_tag(history, until), until=until)


def released_ranges(history: HistoryReaderPort, until: str = "HEAD") -> list[ReleasedRange]:
    """Return one range per past release, newest first.

    Each release covers the commits after the previous release tag up to and
    including its own tag.
    """
    releases = release_tags(history, until)
    ranges = []
    for index, (tag, version) in enumerate(releases):
        previous = releases[index + 1][0] if index + 1 < len(releases) else None
        try:
            released_on = history.tag_date(tag)
        except GitError as e:
            raise _unavailable(e) from e
        ranges.append(
            ReleasedRange(
                tag=tag,
                version=version,
                date=released_on,
                history=read_history(history, since=previous, until=tag),
            )
        )
    return ranges
