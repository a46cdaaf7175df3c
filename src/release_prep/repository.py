"""The repository handle passed into every operation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from release_prep.config import ReleasePrepConfig, load_config
from release_prep.exceptions import GitError, HistoryUnavailableError
from release_prep.project import ChangelogFile, ManifestFile
from release_prep.vcs import GitRepository

if TYPE_CHECKING:
    from release_prep.ports import (
        ChangelogStorePort,
        CommitAndTagPort,
        HistoryReaderPort,
        ManifestIOPort,
        WorkingTreePort,
    )


@dataclass(frozen=True)
class RepositoryHandle:
    """Everything an operation may read or mutate, bundled explicitly.

    Production handles come from :meth:`open`; tests build one from
    in-memory fakes.
    """

    root: Path
    config: ReleasePrepConfig
    history: HistoryReaderPort
    worktree: WorkingTreePort
    vcs: CommitAndTagPort
    manifest: ManifestIOPort
    changelog: ChangelogStorePort

    @classmethod
    def open(cls, path: Path, config: ReleasePrepConfig | None = None) -> RepositoryHandle:
        """Open the git repository containing ``path``.

        Configuration is loaded from the repository root unless given.

        Raises:
            HistoryUnavailableError: If ``path`` is not inside a git repository
        """
        try:
            git = GitRepository(path)
        except GitError as e:
            raise HistoryUnavailableError(
                f"Not a git repository: {path} ({e.message})",
                "Run release-prep from inside the project's git working copy.",
            ) from e

        if config is None:
            config = load_config(git.root)

        return cls(
            root=git.root,
            config=config,
            history=git,
            worktree=git,
            vcs=git,
            manifest=ManifestFile(git.root, config.manifest_path),
            changelog=ChangelogFile(git.root, config.changelog.path),
        )
