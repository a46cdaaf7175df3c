"""Manifest version manipulation.

The manifest is any text file carrying a line of the form
``version = "X.Y.Z"`` (``pyproject.toml``, ``Cargo.toml``, ...). The first
such line is the project version.

Formatting, comments and line endings are preserved by replacing only the
quoted version string instead of parsing and re-serializing the file.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from release_prep.core.version import Version
from release_prep.exceptions import ManifestParseError

if TYPE_CHECKING:
    from release_prep.ports import ManifestIOPort

VERSION_LINE_PATTERN = re.compile(
    r'^(?P<prefix>version\s*=\s*")(?P<version>[^"\r\n]*)(?P<suffix>")',
    re.MULTILINE,
)


def _find_version(content: str, source: str) -> re.Match[str]:
    match = VERSION_LINE_PATTERN.search(content)
    if match is None:
        raise ManifestParseError(
            f"Could not find a version field in {source}. "
            'Expected a line like: version = "1.2.3"'
        )
    return match


def get_manifest_version(content: str, source: str = "manifest") -> Version:
    """Return the version declared in manifest ``content``.

    Raises:
        ManifestParseError: If the field is missing or not ``X.Y.Z``
    """
    match = _find_version(content, source)
    raw = match.group("version")
    try:
        return Version.parse(raw)
    except ValueError as e:
        raise ManifestParseError(f"Malformed version {raw!r} in {source}: {e}") from e


def replace_manifest_version(content: str, new_version: Version, source: str = "manifest") -> str:
    """Return ``content`` with the version string replaced by ``new_version``.

    Every byte outside the quoted version string is kept as is.
    """
    match = _find_version(content, source)
    start, end = match.span("version")
    return content[:start] + str(new_version) + content[end:]


def read_version(manifest: ManifestIOPort) -> Version:
    """Read and parse the current version from a manifest port."""
    return get_manifest_version(manifest.read_text(), manifest.relative_path)


class ManifestFile:
    """Manifest stored on disk, read and written without newline translation."""

    def __init__(self, root: Path, relative_path: str | Path) -> None:
        self.root = Path(root)
        self._relative_path = Path(relative_path)

    @property
    def path(self) -> Path:
        return self.root / self._relative_path

    @property
    def relative_path(self) -> str:
        return self._relative_path.as_posix()

    def read_text(self) -> str:
        if not self.path.is_file():
            raise ManifestParseError(f"Manifest not found: {self.path}")
        try:
            return self.path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestParseError(f"Manifest {self.path} is not valid UTF-8") from e

    def write_text(self, content: str) -> None:
        self.path.write_bytes(content.encode("utf-8"))
