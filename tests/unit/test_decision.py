"""Tests for the bump recommendation."""

from __future__ import annotations

import itertools

import pytest

from release_prep.core.commits import classify_commits
from release_prep.core.decision import (
    BumpRecommendation,
    parse_bump_type,
    recommend_bump,
    suggested_bump_type,
)
from release_prep.core.version import BumpType
from release_prep.exceptions import InvalidInputError


def _recommend(commit_factory, *subjects, initial=False):
    commits = [commit_factory(s) for s in subjects]
    return recommend_bump(classify_commits(commits), initial=initial)


class TestRecommendBump:
    """Tests for recommend_bump()."""

    def test_empty_returns_none(self):
        """No commits recommends no release."""
        assert recommend_bump([]) == BumpRecommendation.NONE

    def test_breaking_returns_major(self, commit_factory):
        """A breaking change recommends a major bump."""
        result = _recommend(commit_factory, "fix: a\n\nBREAKING CHANGE: b")
        assert result == BumpRecommendation.MAJOR

    def test_feat_returns_minor(self, commit_factory):
        """A feature recommends a minor bump."""
        assert _recommend(commit_factory, "feat: add X") == BumpRecommendation.MINOR

    @pytest.mark.parametrize("subject", ["fix: a", "perf: b", "refactor: c"])
    def test_patch_categories(self, commit_factory, subject):
        """Fixes, performance work and refactors recommend a patch."""
        assert _recommend(commit_factory, subject) == BumpRecommendation.PATCH

    @pytest.mark.parametrize(
        "subject", ["docs: a", "chore: b", "ci: c", "build: d", "random message"]
    )
    def test_non_release_categories(self, commit_factory, subject):
        """Docs, chores, ci, build and unknown commits recommend nothing."""
        assert _recommend(commit_factory, subject) == BumpRecommendation.NONE

    def test_breaking_takes_precedence(self, commit_factory):
        """Breaking wins over everything else."""
        result = _recommend(
            commit_factory, "feat: a", "fix: b", "chore: c\n\nBREAKING CHANGE: d"
        )
        assert result == BumpRecommendation.MAJOR

    def test_feat_takes_precedence_over_fix(self, commit_factory):
        """A feature wins over a fix."""
        assert _recommend(commit_factory, "fix: a", "feat: b") == BumpRecommendation.MINOR

    def test_scenario_a(self, commit_factory):
        """feat + fix + chore recommends a minor bump."""
        result = _recommend(commit_factory, "feat: add X", "fix: correct Y", "chore: tidy")
        assert result == BumpRecommendation.MINOR

    def test_initial_release(self, commit_factory):
        """Without a prior release the recommendation is an initial release."""
        result = _recommend(commit_factory, "fix: a", initial=True)
        assert result == BumpRecommendation.INITIAL_RELEASE

    def test_initial_release_ignores_breaking(self, commit_factory):
        """An initial release is reported even when breaking markers exist."""
        result = _recommend(commit_factory, "feat: a\n\nBREAKING CHANGE: b", initial=True)
        assert result == BumpRecommendation.INITIAL_RELEASE

    def test_order_independent(self, sample_commits):
        """The recommendation depends only on the set of categories."""
        classified = classify_commits(sample_commits)
        results = {
            recommend_bump(list(permutation))
            for permutation in itertools.permutations(classified)
        }
        assert results == {BumpRecommendation.MAJOR}

    def test_duplicates_do_not_matter(self, commit_factory):
        """Repeated categories do not change the result."""
        once = _recommend(commit_factory, "fix: a")
        many = _recommend(commit_factory, "fix: a", "fix: a", "fix: a")
        assert once == many


class TestSuggestedBumpType:
    """Tests for suggested_bump_type()."""

    def test_initial_release_is_minor(self):
        """An initial release is suggested as a minor bump."""
        assert suggested_bump_type(BumpRecommendation.INITIAL_RELEASE) == BumpType.MINOR

    @pytest.mark.parametrize("bump", list(BumpType))
    def test_maps_by_value(self, bump):
        """Other recommendations map to the bump of the same name."""
        assert suggested_bump_type(BumpRecommendation(bump.value)) == bump


class TestParseBumpType:
    """Tests for parse_bump_type()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("major", BumpType.MAJOR),
            ("minor", BumpType.MINOR),
            ("patch", BumpType.PATCH),
            (" Patch ", BumpType.PATCH),
        ],
    )
    def test_valid(self, value, expected):
        """Bump kinds are parsed case-insensitively."""
        assert parse_bump_type(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "none", "huge", "1.0.0"])
    def test_invalid(self, value):
        """Anything else is rejected with the accepted values listed."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse_bump_type(value)

        assert "major, minor, patch" in exc_info.value.message
        assert exc_info.value.remediation
