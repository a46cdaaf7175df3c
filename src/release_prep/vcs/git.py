"""Git repository access through the ``git`` executable.

All commands run with ``subprocess`` in the repository root. Failures are
raised as :class:`GitError`; callers decide which domain error they map to.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from release_prep.exceptions import GitError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Unit and record separators keep multi-line bodies intact.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%an", "%ae", "%aI", "%B"]) + _RECORD_SEP


@dataclass(frozen=True)
class Commit:
    """A single commit read from history."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def subject(self) -> str:
        lines = self.message.strip().splitlines()
        return lines[0].strip() if lines else ""

    @property
    def body(self) -> str:
        _, _, rest = self.message.strip().partition("\n")
        return rest.strip()

    @property
    def author(self) -> str:
        return self.author_name


def parse_log_output(output: str) -> list[Commit]:
    """Parse ``git log`` output produced with the internal format."""
    commits = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, author_name, author_email, timestamp, message = record.split(_FIELD_SEP, 4)
        commits.append(
            Commit(
                sha=sha,
                message=message.strip(),
                author_name=author_name,
                author_email=author_email,
                date=datetime.fromisoformat(timestamp),
            )
        )
    return commits


class GitRepository:
    """Thin wrapper around a git working copy."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        toplevel = self._run("rev-parse", "--show-toplevel", cwd=self.path)
        self.root = Path(toplevel.strip())

    def _run(self, *args: str, cwd: Path | None = None) -> str:
        command = ["git", *args]
        logger.debug("running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=cwd or self.root,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git is required but was not found in PATH") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {args[0]} failed with exit code {e.returncode}", e.stderr) from e
        return result.stdout

    # -- working tree ---------------------------------------------------------

    def current_branch(self) -> str | None:
        """Return the checked-out branch, or None when HEAD is detached."""
        branch = self._run("rev-parse", "--abbrev-ref", "HEAD").strip()
        if not branch or branch == "HEAD":
            return None
        return branch

    def dirty_paths(self) -> list[str]:
        """Return paths with uncommitted changes, including untracked files."""
        output = self._run("status", "--porcelain")
        return [line[3:] for line in output.splitlines() if line.strip()]

    def is_dirty(self) -> bool:
        return bool(self.dirty_paths())

    # -- history --------------------------------------------------------------

    def list_tags(self, pattern: str = "v*", merged_into: str | None = "HEAD") -> list[str]:
        """List tags matching ``pattern``, optionally only those reachable from a ref."""
        args = ["tag", "--list", pattern]
        if merged_into:
            args.extend(["--merged", merged_into])
        return [line.strip() for line in self._run(*args).splitlines() if line.strip()]

    def get_commits(self, since: str | None = None, until: str = "HEAD") -> list[Commit]:
        """Return commits in ``since..until`` (or all of ``until``), newest first."""
        revision = f"{since}..{until}" if since else until
        output = self._run("log", f"--format={_LOG_FORMAT}", revision)
        return parse_log_output(output)

    def tag_date(self, tag: str) -> date:
        """Return the creation date of ``tag`` (tagger date for annotated tags)."""
        output = self._run(
            "for-each-ref", "--format=%(creatordate:short)", f"refs/tags/{tag}"
        ).strip()
        if not output:
            raise GitError(f"tag {tag!r} not found")
        return date.fromisoformat(output)

    def head_sha(self) -> str:
        return self._run("rev-parse", "HEAD").strip()

    # -- mutation -------------------------------------------------------------

    def stage(self, paths: Sequence[str]) -> None:
        self._run("add", "--", *paths)

    def commit(self, message: str) -> str:
        """Commit the staged changes and return the new commit's SHA."""
        self._run("commit", "-m", message)
        return self.head_sha()

    def create_tag(self, name: str, message: str, ref: str = "HEAD") -> None:
        """Create an annotated tag pointing at ``ref``."""
        self._run("tag", "-a", name, "-m", message, ref)
