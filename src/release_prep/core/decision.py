"""Version bump recommendation.

The recommendation is advisory. It is reported by ``analyze`` to help the
operator choose a bump kind and is never applied automatically.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from release_prep.core.commits import Category
from release_prep.core.version import BumpType
from release_prep.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from release_prep.core.commits import ClassifiedCommit


class BumpRecommendation(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"
    INITIAL_RELEASE = "initial-release"

    def __str__(self) -> str:
        return self.value


PATCH_CATEGORIES = frozenset({Category.FIX, Category.PERFORMANCE, Category.REFACTOR})

RELEASE_BUMP_TYPES = (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH)


def recommend_bump(
    classified: Iterable[ClassifiedCommit],
    *,
    initial: bool = False,
) -> BumpRecommendation:
    """Recommend a bump level from the set of categories present.

    Args:
        classified: Commits since the last release
        initial: True when no previous release tag exists

    Returns:
        INITIAL_RELEASE for a first release regardless of the categories,
        otherwise MAJOR, MINOR, PATCH or NONE by precedence.
    """
    if initial:
        return BumpRecommendation.INITIAL_RELEASE

    categories = {cc.category for cc in classified}
    if Category.BREAKING in categories:
        return BumpRecommendation.MAJOR
    if Category.FEATURE in categories:
        return BumpRecommendation.MINOR
    if categories & PATCH_CATEGORIES:
        return BumpRecommendation.PATCH
    return BumpRecommendation.NONE


def suggested_bump_type(recommendation: BumpRecommendation) -> BumpType:
    """Return the bump kind an operator would pass to follow ``recommendation``.

    An initial release is conventionally a minor bump.
    """
    if recommendation is BumpRecommendation.INITIAL_RELEASE:
        return BumpType.MINOR
    return BumpType(recommendation.value)


def parse_bump_type(value: str | None) -> BumpType:
    """Validate operator input for ``prepare-release``.

    Raises:
        InvalidInputError: If ``value`` is missing or not major/minor/patch
    """
    if value is None:
        raise InvalidInputError(value)
    normalized = value.strip().lower()
    for bump_type in RELEASE_BUMP_TYPES:
        if normalized == bump_type.value:
            return bump_type
    raise InvalidInputError(value)
