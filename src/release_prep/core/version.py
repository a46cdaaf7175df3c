"""Semantic version numbers and bump kinds.

Versions are plain ``MAJOR.MINOR.PATCH`` triples. Pre-release and build
metadata are not supported; a manifest carrying them is treated as malformed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

VERSION_PATTERN = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")

TAG_PREFIX = "v"


class BumpType(str, Enum):
    """Magnitude of a version increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Version:
    """A ``MAJOR.MINOR.PATCH`` version number.

    Instances compare numerically, so ``Version(0, 10, 0) > Version(0, 9, 1)``.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"Version components must be non-negative: {self!r}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a strict ``X.Y.Z`` string.

        Raises:
            ValueError: If the string is not a plain semantic version
        """
        match = VERSION_PATTERN.match(value.strip())
        if not match:
            raise ValueError(f"Invalid version {value!r}: expected MAJOR.MINOR.PATCH")
        return cls(*(int(part) for part in match.groups()))

    @classmethod
    def from_tag(cls, tag: str) -> Version | None:
        """Return the version encoded in a ``vX.Y.Z`` tag, or None."""
        if not tag.startswith(TAG_PREFIX):
            return None
        try:
            return cls.parse(tag[len(TAG_PREFIX) :])
        except ValueError:
            return None

    @property
    def tag_name(self) -> str:
        return f"{TAG_PREFIX}{self}"

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for ``bump_type``.

        Major and minor bumps reset the lower components to zero.
        """
        if bump_type is BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type is BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type is BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        raise ValueError(f"Cannot bump version by {bump_type}")


def parse_version(value: str) -> Version:
    """Parse a version string. Shorthand for :meth:`Version.parse`."""
    return Version.parse(value)
