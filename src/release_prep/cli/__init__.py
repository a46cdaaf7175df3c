"""Command line interface for release-prep."""

from __future__ import annotations

from release_prep.cli.main import cli, main

__all__ = ["cli", "main"]
