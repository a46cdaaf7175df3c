"""Project file handling: the version manifest and the changelog."""

from __future__ import annotations

from release_prep.project.changelog_file import ChangelogFile
from release_prep.project.manifest import (
    ManifestFile,
    get_manifest_version,
    read_version,
    replace_manifest_version,
)

__all__ = [
    "ChangelogFile",
    "ManifestFile",
    "get_manifest_version",
    "read_version",
    "replace_manifest_version",
]
