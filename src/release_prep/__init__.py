"""release-prep: rule-driven version bumps, changelogs and release tags."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as metadata_version

__all__ = ["__version__"]

try:
    __version__ = metadata_version("release-prep")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"
