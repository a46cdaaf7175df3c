"""Configuration management for release-prep."""

from __future__ import annotations

from release_prep.config.loader import load_config
from release_prep.config.models import ChangelogConfig, CommitsConfig, ReleasePrepConfig

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "ReleasePrepConfig",
    "load_config",
]
