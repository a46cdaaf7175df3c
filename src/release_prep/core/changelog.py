"""Changelog rendering.

Rendering is a pure function of its inputs: commits are grouped into a fixed
sequence of sections, empty sections are dropped, and commits keep the order
they were read in (newest first). Dates are passed in by the caller, so the
same input always yields byte-identical Markdown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_prep.config.models import ChangelogConfig
from release_prep.core.commits import Category, group_by_category

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from release_prep.core.commits import ClassifiedCommit
    from release_prep.core.version import Version

UNRELEASED = "Unreleased"

SECTIONS: tuple[tuple[Category, str], ...] = (
    (Category.BREAKING, "### ⚠️ Breaking Changes"),
    (Category.FEATURE, "### ✨ Features"),
    (Category.FIX, "### 🐛 Bug Fixes"),
    (Category.PERFORMANCE, "### ⚡ Performance"),
    (Category.REFACTOR, "### ♻️ Refactoring"),
    (Category.BUILD, "### 📦 Build"),
    (Category.CI, "### 🔧 CI"),
    (Category.DOCS, "### 📚 Documentation"),
    (Category.CHORE, "### 🔨 Chores"),
    (Category.OTHER, "### 📝 Other"),
)

DOCUMENT_INTRO = "All notable changes to this project will be documented in this file."


@dataclass(frozen=True)
class ReleaseNotes:
    """Input for one release block. ``version=None`` means unreleased."""

    classified: tuple[ClassifiedCommit, ...]
    version: Version | None = None
    date: date | None = None


def format_entry(cc: ClassifiedCommit, options: ChangelogConfig) -> str:
    """Format one changelog bullet."""
    scope = f"**{cc.scope}:** " if cc.scope else ""
    line = f"- {scope}{cc.description}"
    if options.include_sha:
        line += f" (`{cc.commit.short_sha}`)"
    if options.include_author and cc.commit.author:
        line += f" by {cc.commit.author}"
    return line


def format_release_header(version: Version | None, release_date: date | None) -> str:
    if version is None:
        return f"## [{UNRELEASED}]"
    if release_date is None:
        return f"## [{version}]"
    return f"## [{version}] - {release_date.isoformat()}"


def render_release(
    classified: Iterable[ClassifiedCommit],
    version: Version | None = None,
    release_date: date | None = None,
    *,
    options: ChangelogConfig | None = None,
) -> str:
    """Render the Markdown block for one release.

    Args:
        classified: Commits of the release, newest first
        version: Released version, or None for the unreleased pseudo-version
        release_date: Date shown in the header
        options: Rendering options

    Returns:
        The release block without a trailing newline
    """
    options = options or ChangelogConfig()
    grouped = group_by_category(classified)

    lines = [format_release_header(version, release_date)]
    if not grouped:
        lines.extend(["", "_No changes._"])

    for category, label in SECTIONS:
        entries = grouped.get(category)
        if not entries:
            continue
        lines.extend(["", label, ""])
        lines.extend(format_entry(cc, options) for cc in entries)

    return "\n".join(lines)


def render_changelog(
    releases: Sequence[ReleaseNotes],
    *,
    options: ChangelogConfig | None = None,
) -> str:
    """Render a complete changelog document, releases in the given order."""
    options = options or ChangelogConfig()
    blocks = [f"# {options.title}\n\n{DOCUMENT_INTRO}"]
    blocks.extend(
        render_release(notes.classified, notes.version, notes.date, options=options)
        for notes in releases
    )
    return "\n\n".join(blocks) + "\n"
