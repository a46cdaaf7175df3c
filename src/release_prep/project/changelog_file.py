"""Changelog file storage."""

from __future__ import annotations

from pathlib import Path

from release_prep.exceptions import ChangelogReadError


class ChangelogFile:
    """The persisted changelog document, regenerated in full on each release."""

    def __init__(self, root: Path, relative_path: str | Path) -> None:
        self.root = Path(root)
        self._relative_path = Path(relative_path)

    @property
    def path(self) -> Path:
        return self.root / self._relative_path

    @property
    def relative_path(self) -> str:
        return self._relative_path.as_posix()

    def read(self) -> str | None:
        """Return the changelog content, or None if the file does not exist.

        Raises:
            ChangelogReadError: If the file exists but cannot be read as UTF-8
        """
        if not self.path.is_file():
            return None
        try:
            return self.path.read_bytes().decode("utf-8")
        except OSError as e:
            raise ChangelogReadError(
                f"Cannot read {self.relative_path}: {e}",
                f"Check the permissions of {self.relative_path}.",
            ) from e
        except UnicodeDecodeError as e:
            raise ChangelogReadError(
                f"{self.relative_path} is not valid UTF-8",
                f"Fix the encoding of {self.relative_path}, or delete it and let "
                "the next release regenerate it.",
            ) from e

    def write(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(content.encode("utf-8"))
