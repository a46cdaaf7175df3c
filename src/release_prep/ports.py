"""Interfaces the release engine depends on.

The engine never shells out or touches files directly. It talks to these
protocols, implemented in production by :class:`~release_prep.vcs.GitRepository`,
:class:`~release_prep.project.manifest.ManifestFile` and
:class:`~release_prep.project.changelog_file.ChangelogFile`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from release_prep.vcs.git import Commit


class HistoryReaderPort(Protocol):
    def list_tags(self, pattern: str = ..., merged_into: str | None = ...) -> list[str]: ...

    def get_commits(self, since: str | None = ..., until: str = ...) -> list[Commit]: ...

    def tag_date(self, tag: str) -> date: ...


class WorkingTreePort(Protocol):
    def current_branch(self) -> str | None: ...

    def dirty_paths(self) -> list[str]: ...


class CommitAndTagPort(Protocol):
    def stage(self, paths: Sequence[str]) -> None: ...

    def commit(self, message: str) -> str: ...

    def create_tag(self, name: str, message: str, ref: str = ...) -> None: ...


class ManifestIOPort(Protocol):
    @property
    def relative_path(self) -> str: ...

    def read_text(self) -> str: ...

    def write_text(self, content: str) -> None: ...


class ChangelogStorePort(Protocol):
    @property
    def relative_path(self) -> str: ...

    def read(self) -> str | None: ...

    def write(self, content: str) -> None: ...
