"""Version control access for release-prep."""

from __future__ import annotations

from release_prep.vcs.git import Commit, GitRepository, parse_log_output

__all__ = ["Commit", "GitRepository", "parse_log_output"]
