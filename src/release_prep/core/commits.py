"""Commit classification.

Each commit is mapped to exactly one :class:`Category` by walking
:data:`CLASSIFICATION_RULES` in order; the first rule whose predicate
matches wins and unmatched commits fall through to ``Category.OTHER``.

Type tokens follow the conventional commit prefix ``type:`` or
``type(scope):``. Matching is exact and case-sensitive, so ``fixing things``
or ``Fix: typo`` are not fixes.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from release_prep.vcs.git import Commit

BREAKING_MARKER = "BREAKING CHANGE"

RELEASE_COMMIT_TEMPLATE = "chore(release): {version} [skip ci]"
RELEASE_COMMIT_PATTERN = re.compile(r"^chore\(release\): \d+\.\d+\.\d+ \[skip ci\]$")

# type token, optional (scope), then the colon
TYPE_PREFIX_PATTERN = re.compile(
    r"^(?P<type>[A-Za-z]+)(?:\((?P<scope>[^()]*)\))?:\s*(?P<description>.*)$"
)


class Category(str, Enum):
    """Semantic category of a commit."""

    BREAKING = "breaking"
    FEATURE = "feature"
    FIX = "fix"
    PERFORMANCE = "performance"
    REFACTOR = "refactor"
    DOCS = "docs"
    CHORE = "chore"
    CI = "ci"
    BUILD = "build"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit together with its category and display fields."""

    commit: Commit
    category: Category
    scope: str | None
    description: str


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Callable[[Commit], bool]
    category: Category


def _type_token(commit: Commit) -> str | None:
    match = TYPE_PREFIX_PATTERN.match(commit.subject)
    return match.group("type") if match else None


def has_breaking_marker(commit: Commit) -> bool:
    """True if the subject or body carries the breaking change marker."""
    return BREAKING_MARKER in commit.subject or BREAKING_MARKER in commit.body


def is_release_commit(commit: Commit) -> bool:
    """True for the version bump commits created by ``prepare-release``."""
    return RELEASE_COMMIT_PATTERN.match(commit.subject) is not None


def filter_skip_release_commits(
    commits: Iterable[Commit],
    patterns: Sequence[str],
) -> list[Commit]:
    """Drop commits whose message contains one of ``patterns``.

    Markers are matched case-insensitively anywhere in the message, so
    ``[Skip Release]`` in a commit body counts as well.

    Args:
        commits: Commits to filter
        patterns: Skip markers such as ``[skip release]``

    Returns:
        The remaining commits in their original order
    """
    lowered = [pattern.lower() for pattern in patterns]
    return [
        commit
        for commit in commits
        if not any(pattern in commit.message.lower() for pattern in lowered)
    ]


def releasable_commits(
    commits: Iterable[Commit],
    skip_patterns: Sequence[str] = (),
) -> list[Commit]:
    """Commits that belong in a release: no release commits, no skip markers."""
    kept = [commit for commit in commits if not is_release_commit(commit)]
    return filter_skip_release_commits(kept, skip_patterns)


def type_token_is(token: str) -> Callable[[Commit], bool]:
    """Build a predicate matching commits whose type token is exactly ``token``."""

    def predicate(commit: Commit) -> bool:
        return _type_token(commit) == token

    predicate.__name__ = f"type_token_is_{token}"
    return predicate


TYPE_TOKENS: dict[str, Category] = {
    "feat": Category.FEATURE,
    "fix": Category.FIX,
    "perf": Category.PERFORMANCE,
    "refactor": Category.REFACTOR,
    "docs": Category.DOCS,
    "chore": Category.CHORE,
    "ci": Category.CI,
    "build": Category.BUILD,
}

CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("breaking-marker", has_breaking_marker, Category.BREAKING),
    *(
        ClassificationRule(f"type:{token}", type_token_is(token), category)
        for token, category in TYPE_TOKENS.items()
    ),
)


def categorize(
    commit: Commit,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> Category:
    """Return the category of the first rule matching ``commit``."""
    for rule in rules:
        if rule.predicate(commit):
            return rule.category
    return Category.OTHER


def classify_commit(
    commit: Commit,
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> ClassifiedCommit:
    """Classify one commit and extract its scope and description."""
    category = categorize(commit, rules)
    subject = commit.subject
    match = TYPE_PREFIX_PATTERN.match(subject)
    if match and match.group("type") in TYPE_TOKENS:
        scope = match.group("scope") or None
        description = match.group("description").strip() or subject
    else:
        scope = None
        description = subject
    return ClassifiedCommit(
        commit=commit,
        category=category,
        scope=scope,
        description=description,
    )


def classify_commits(
    commits: Iterable[Commit],
    rules: Sequence[ClassificationRule] = CLASSIFICATION_RULES,
) -> list[ClassifiedCommit]:
    """Classify commits, keeping their order."""
    return [classify_commit(commit, rules) for commit in commits]


def group_by_category(
    classified: Iterable[ClassifiedCommit],
) -> dict[Category, list[ClassifiedCommit]]:
    """Group classified commits by category, preserving order within each group."""
    grouped: dict[Category, list[ClassifiedCommit]] = {}
    for cc in classified:
        grouped.setdefault(cc.category, []).append(cc)
    return grouped


def summarize(classified: Iterable[ClassifiedCommit]) -> dict[Category, int]:
    """Count commits per category, in category declaration order."""
    counts = Counter(cc.category for cc in classified)
    return {category: counts[category] for category in Category if counts[category]}
