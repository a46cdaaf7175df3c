"""Shared fixtures for release-prep tests.

Unit tests run against in-memory fakes of the repository ports; integration
tests use a real git repository in a temporary directory.
"""

from __future__ import annotations

import dataclasses
import fnmatch
import logging
import subprocess
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from release_prep.config.models import ReleasePrepConfig
from release_prep.exceptions import GitError
from release_prep.log import LOGGER_NAME
from release_prep.repository import RepositoryHandle
from release_prep.vcs.git import Commit

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_commit(message: str, sha: str = "abc1234def", author: str = "Test") -> Commit:
    return Commit(
        sha=sha,
        message=message,
        author_name=author,
        author_email=f"{author.lower()}@example.com",
        date=BASE_TIME,
    )


class FakeGit:
    """In-memory implementation of the history, working tree and commit/tag ports."""

    def __init__(self) -> None:
        self.log: list[Commit] = []
        self.tags: dict[str, tuple[int, date]] = {}
        self.tag_messages: dict[str, str] = {}
        self.unreachable: set[str] = set()
        self.branch: str | None = "main"
        self.dirty: list[str] = []
        self.staged: list[str] = []
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    # -- setup helpers --------------------------------------------------------

    def add_commit(self, message: str, author: str = "Test") -> Commit:
        index = len(self.log)
        commit = Commit(
            sha=f"{index:07x}{'0' * 33}",
            message=message,
            author_name=author,
            author_email=f"{author.lower()}@example.com",
            date=BASE_TIME + timedelta(hours=index),
        )
        self.log.append(commit)
        return commit

    def tag(self, name: str, on: date = date(2024, 1, 1)) -> None:
        self.tags[name] = (len(self.log) - 1, on)

    def tag_elsewhere(self, name: str) -> None:
        """Create a tag on a commit that is not an ancestor of HEAD."""
        self.tags[name] = (0, date(2024, 1, 1))
        self.unreachable.add(name)

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise GitError(f"git {operation} failed", "simulated failure")

    # -- HistoryReaderPort ----------------------------------------------------

    def list_tags(self, pattern: str = "v*", merged_into: str | None = "HEAD") -> list[str]:
        self._check("tag-list")
        return [
            name
            for name in self.tags
            if fnmatch.fnmatch(name, pattern)
            and not (merged_into and name in self.unreachable)
        ]

    def get_commits(self, since: str | None = None, until: str = "HEAD") -> list[Commit]:
        self._check("log")
        start = self.tags[since][0] + 1 if since else 0
        end = len(self.log) if until == "HEAD" else self.tags[until][0] + 1
        return list(reversed(self.log[start:end]))

    def tag_date(self, tag: str) -> date:
        return self.tags[tag][1]

    # -- WorkingTreePort ------------------------------------------------------

    def current_branch(self) -> str | None:
        self._check("branch")
        return self.branch

    def dirty_paths(self) -> list[str]:
        self._check("status")
        return list(self.dirty)

    # -- CommitAndTagPort -----------------------------------------------------

    def stage(self, paths: list[str]) -> None:
        self._check("add")
        self.staged = list(paths)

    def commit(self, message: str) -> str:
        self._check("commit")
        return self.add_commit(message).sha

    def create_tag(self, name: str, message: str, ref: str = "HEAD") -> None:
        self._check("tag")
        shas = [c.sha for c in self.log]
        index = shas.index(ref) if ref in shas else len(self.log) - 1
        self.tags[name] = (index, date(2024, 6, 1))
        self.tag_messages[name] = message


class FakeManifest:
    def __init__(self, content: str, relative_path: str = "Cargo.toml") -> None:
        self.content = content
        self.relative_path = relative_path
        self.fail_write = False
        self.writes = 0

    def read_text(self) -> str:
        return self.content

    def write_text(self, content: str) -> None:
        if self.fail_write:
            raise OSError("read-only file system")
        self.writes += 1
        self.content = content


class FakeChangelog:
    def __init__(self, content: str | None = None, relative_path: str = "CHANGELOG.md") -> None:
        self.content = content
        self.relative_path = relative_path
        self.fail_write = False
        self.writes = 0

    def read(self) -> str | None:
        return self.content

    def write(self, content: str) -> None:
        if self.fail_write:
            raise OSError("disk full")
        self.writes += 1
        self.content = content


MANIFEST_TEMPLATE = """\
[package]
# the project version
name = "demo"
version = "{version}"
edition = "2021"

[dependencies]
serde = {{ version = "1.0" }}
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo the handler and propagation changes made by the CLI."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def fake_manifest() -> FakeManifest:
    return FakeManifest(MANIFEST_TEMPLATE.format(version="0.3.0"))


@pytest.fixture
def fake_changelog() -> FakeChangelog:
    return FakeChangelog()


@pytest.fixture
def fake_repo(
    tmp_path: Path,
    fake_git: FakeGit,
    fake_manifest: FakeManifest,
    fake_changelog: FakeChangelog,
) -> RepositoryHandle:
    return RepositoryHandle(
        root=tmp_path,
        config=ReleasePrepConfig(),
        history=fake_git,
        worktree=fake_git,
        vcs=fake_git,
        manifest=fake_manifest,
        changelog=fake_changelog,
    )


@pytest.fixture
def with_config(fake_repo: RepositoryHandle):
    """Return a copy of the fake repository with configuration overrides."""

    def factory(**overrides) -> RepositoryHandle:
        config = fake_repo.config.model_copy(update=overrides)
        return dataclasses.replace(fake_repo, config=config)

    return factory


@pytest.fixture
def scenario_a(fake_git: FakeGit) -> FakeGit:
    """Prior tag v0.3.0 followed by a feature, a fix and a chore."""
    fake_git.add_commit("feat: initial import")
    fake_git.tag("v0.3.0", date(2024, 3, 1))
    fake_git.add_commit("feat: add X", author="Alice")
    fake_git.add_commit("fix: correct Y", author="Bob")
    fake_git.add_commit("chore: tidy")
    return fake_git


# =============================================================================
# Commit fixtures
# =============================================================================


@pytest.fixture
def feat_commit() -> Commit:
    return make_commit("feat: add user authentication", sha="feat1234567")


@pytest.fixture
def fix_commit() -> Commit:
    return make_commit("fix(core): handle empty input", sha="fix12345678")


@pytest.fixture
def breaking_commit() -> Commit:
    return make_commit(
        "refactor(api): rename endpoints\n\nBREAKING CHANGE: /v1 paths are gone",
        sha="brk12345678",
    )


@pytest.fixture
def sample_commits() -> list[Commit]:
    return [
        make_commit("feat: add login", sha="a000001"),
        make_commit("fix(api): handle null response", sha="a000002"),
        make_commit("docs: update readme", sha="a000003"),
        make_commit("chore: bump deps", sha="a000004"),
        make_commit("feat(core): new config\n\nBREAKING CHANGE: format changed", sha="a000005"),
        make_commit("Merge branch 'main'", sha="a000006"),
    ]


# =============================================================================
# Real git repositories
# =============================================================================


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """An initialized repository on branch ``main`` with one commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    (repo / "pyproject.toml").write_text(
        '[project]\nname = "demo"\nversion = "0.3.0"\n# keep this comment\n'
    )
    git(repo, "add", "pyproject.toml")
    git(repo, "commit", "-q", "-m", "chore: initial commit")
    return repo


def commit_file(repo: Path, name: str, message: str) -> None:
    (repo / name).write_text(f"{message}\n")
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)


@pytest.fixture
def run_git():
    return git


@pytest.fixture
def add_commit():
    return commit_file


@pytest.fixture
def commit_factory():
    return make_commit
