"""Core business logic for release-prep.

This module contains the fundamental building blocks:
- Version parsing and bumping
- Commit history reading and classification
- Bump recommendation
- Changelog rendering
"""

from __future__ import annotations

from release_prep.core.changelog import ReleaseNotes, render_changelog, render_release
from release_prep.core.commits import (
    CLASSIFICATION_RULES,
    Category,
    ClassificationRule,
    ClassifiedCommit,
    categorize,
    classify_commit,
    classify_commits,
    group_by_category,
    summarize,
)
from release_prep.core.decision import BumpRecommendation, parse_bump_type, recommend_bump
from release_prep.core.history import HistoryRange, read_history, read_unreleased
from release_prep.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    # Classification
    "CLASSIFICATION_RULES",
    "Category",
    "ClassificationRule",
    "ClassifiedCommit",
    # Decision
    "BumpRecommendation",
    # History
    "HistoryRange",
    # Changelog
    "ReleaseNotes",
    "Version",
    "categorize",
    "classify_commit",
    "classify_commits",
    "group_by_category",
    "parse_bump_type",
    "parse_version",
    "read_history",
    "read_unreleased",
    "recommend_bump",
    "render_changelog",
    "render_release",
    "summarize",
]
