"""Tests for version parsing and bumping."""

from __future__ import annotations

import pytest

from release_prep.core.version import BumpType, Version, parse_version


class TestVersionParse:
    """Tests for Version parsing."""

    def test_parse(self):
        """X.Y.Z strings parse into a Version."""
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_parse_strips_whitespace(self):
        """Surrounding whitespace is ignored."""
        assert parse_version(" 0.10.0\n") == Version(0, 10, 0)

    @pytest.mark.parametrize(
        "value", ["1.2", "1.2.3.4", "v1.2.3", "1.2.3-rc.1", "01.2.3", "", "a.b.c"]
    )
    def test_parse_invalid(self, value):
        """Anything but plain X.Y.Z is rejected."""
        with pytest.raises(ValueError):
            Version.parse(value)

    def test_negative_components_rejected(self):
        """Components cannot be negative."""
        with pytest.raises(ValueError):
            Version(1, -1, 0)

    def test_str(self):
        """str() renders X.Y.Z."""
        assert str(Version(2, 0, 1)) == "2.0.1"


class TestVersionTags:
    """Tests for release tag names."""

    def test_tag_name(self):
        """Tags carry a v prefix."""
        assert Version(0, 4, 0).tag_name == "v0.4.0"

    def test_from_tag(self):
        """vX.Y.Z tags parse back into a Version."""
        assert Version.from_tag("v1.2.3") == Version(1, 2, 3)

    @pytest.mark.parametrize("tag", ["1.2.3", "release-1.2.3", "v1.2", "vnext"])
    def test_from_tag_rejects_other_tags(self, tag):
        """Other tag shapes are not versions."""
        assert Version.from_tag(tag) is None


class TestVersionOrdering:
    """Tests for Version comparison."""

    def test_numeric_ordering(self):
        """Components compare as numbers, not strings."""
        assert Version(0, 10, 0) > Version(0, 9, 9)
        assert Version(1, 0, 0) > Version(0, 99, 99)

    def test_sorting(self):
        """sorted() orders versions numerically."""
        versions = [Version(1, 0, 0), Version(0, 2, 0), Version(0, 10, 1)]
        assert sorted(versions) == [Version(0, 2, 0), Version(0, 10, 1), Version(1, 0, 0)]


class TestVersionBump:
    """Tests for Version.bump()."""

    @pytest.mark.parametrize(
        ("bump", "expected"),
        [
            (BumpType.MAJOR, Version(2, 0, 0)),
            (BumpType.MINOR, Version(1, 3, 0)),
            (BumpType.PATCH, Version(1, 2, 4)),
        ],
    )
    def test_bump(self, bump, expected):
        """Each bump resets the lower components."""
        assert Version(1, 2, 3).bump(bump) == expected

    def test_bump_is_monotonic(self):
        """Every bump produces a greater version."""
        current = Version(0, 3, 7)
        for bump in (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH):
            assert current.bump(bump) > current

    def test_bump_none_raises(self):
        """NONE is not a bump."""
        with pytest.raises(ValueError):
            Version(1, 0, 0).bump(BumpType.NONE)
