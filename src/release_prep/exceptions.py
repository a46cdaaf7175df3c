"""Exception hierarchy for release-prep.

Every error carries a human-readable message and, where the operator has
something to do about it, a remediation hint. Errors raised by the release
state machine also record the step at which the run halted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from release_prep.core.release import ReleaseState


class ReleasePrepError(Exception):
    """Base class for all release-prep errors."""

    def __init__(self, message: str, remediation: str = "") -> None:
        self.message = message
        self.remediation = remediation
        super().__init__(message)


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ReleasePrepError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """A configuration file was expected but not found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# =============================================================================
# Input and preflight
# =============================================================================


class InvalidInputError(ReleasePrepError):
    """The requested bump kind is missing or not recognized."""

    def __init__(self, value: str | None) -> None:
        self.value = value
        shown = "nothing" if value is None or not value.strip() else repr(value)
        super().__init__(
            f"Invalid bump kind: got {shown}, expected one of major, minor, patch",
            "Pass an explicit bump kind, e.g. `release-prep prepare-release minor`.",
        )


class BranchNotAllowedError(ReleasePrepError):
    """Releases may only be prepared from allow-listed branches."""

    def __init__(self, branch: str | None, allowed: Sequence[str]) -> None:
        self.branch = branch
        self.allowed = tuple(allowed)
        current = branch if branch else "detached HEAD"
        super().__init__(
            f"Releases must be created from one of: {', '.join(self.allowed)} "
            f"(current branch: {current})",
            f"Check out one of {', '.join(self.allowed)} and retry.",
        )


class DirtyWorkingTreeError(ReleasePrepError):
    """The working tree has uncommitted modifications."""

    def __init__(self, paths: Sequence[str]) -> None:
        self.paths = tuple(paths)
        listing = "\n".join(f"  {p}" for p in self.paths)
        super().__init__(
            f"Working directory is not clean:\n{listing}",
            "Commit or stash your changes first.",
        )


# =============================================================================
# Repository and project files
# =============================================================================


class GitError(ReleasePrepError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str = "") -> None:
        self.stderr = stderr.strip()
        full = f"{message}: {self.stderr}" if self.stderr else message
        super().__init__(full)


class HistoryUnavailableError(ReleasePrepError):
    """The repository history cannot be queried."""


class ManifestParseError(ReleasePrepError):
    """The manifest has no parseable version field."""


class VersionConflictError(ReleasePrepError):
    """The bumped version would not be newer than the latest release."""


class ChangelogReadError(ReleasePrepError):
    """The existing changelog file cannot be read or is not valid UTF-8."""


# =============================================================================
# Release steps
# =============================================================================


class ReleaseStepError(ReleasePrepError):
    """A mutating release step failed; the machine halted at ``step``."""

    def __init__(self, message: str, remediation: str, step: ReleaseState) -> None:
        self.step = step
        super().__init__(message, remediation)


class ManifestWriteError(ReleaseStepError):
    """Writing the bumped version back to the manifest failed."""


class ChangelogGenerationError(ReleaseStepError):
    """Writing the changelog failed after the manifest was updated."""


class CommitError(ReleaseStepError):
    """Staging or committing the release files failed."""


class TagError(ReleaseStepError):
    """Creating the release tag failed after the release commit was made."""
