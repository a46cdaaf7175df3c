"""Configuration models for release-prep.

Configuration lives in ``[tool.release-prep]`` of the project's
``pyproject.toml``. Every field has a default, so a project without that
section gets the standard behavior.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangelogConfig(BaseModel):
    """Changelog file and rendering options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path = Path("CHANGELOG.md")
    title: str = "Changelog"
    include_sha: bool = True
    include_author: bool = True


class CommitsConfig(BaseModel):
    """Commit selection options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Case-insensitive markers; commits carrying one are left out of releases.
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"]
    )


class ReleasePrepConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    allowed_branches: list[str] = Field(default_factory=lambda: ["main", "development"])
    manifest_path: Path = Path("pyproject.toml")
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    # Shell commands whose failure is reported but never blocks a release,
    # e.g. dependency staleness scanners.
    advisory_checks: list[str] = Field(default_factory=list)

    @field_validator("allowed_branches")
    @classmethod
    def _require_branches(cls, value: list[str]) -> list[str]:
        branches = [branch.strip() for branch in value if branch.strip()]
        if not branches:
            raise ValueError("at least one release branch must be allowed")
        return branches

    @property
    def changelog_path(self) -> Path:
        return self.changelog.path
