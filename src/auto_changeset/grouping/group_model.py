"""
Data models for grouping commits by package.

An :class:`AttributedCommit` ties a commit to the files it changed inside
one package. The classifier turns a package's attributed commits into a
:class:`Changeset`: the recommended :class:`VersionBump` plus the commit
summaries sorted into :class:`Category` buckets.
"""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from auto_changeset.history.commit_loader import Commit


@functools.total_ordering
class VersionBump(enum.Enum):
    """Semantic-version bump, ordered ``PATCH < MINOR < MAJOR``."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return _BUMP_RANK[self]

    def __lt__(self, other: "VersionBump") -> bool:
        if not isinstance(other, VersionBump):
            return NotImplemented
        return self.rank < other.rank


_BUMP_RANK = {VersionBump.PATCH: 0, VersionBump.MINOR: 1, VersionBump.MAJOR: 2}


class Category(enum.Enum):
    """Changelog section of a commit. Declaration order is display order."""

    FEATURES = "features"
    BUG_FIXES = "bugFixes"
    REFACTORING = "refactoring"
    PERFORMANCE = "performance"
    DOCUMENTATION = "documentation"
    CHORES = "chores"
    OTHERS = "others"


@dataclass(frozen=True)
class AttributedCommit:
    """A commit together with the files it changed in one package.

    Attributes
    ----------
    commit : Commit
        The attributed commit.
    matched_files : FrozenSet[str]
        Subset of ``commit.changed_files`` under the package root.
    """

    commit: Commit
    matched_files: FrozenSet[str]


# Package name -> attributed commits in history order.
Attribution = Dict[str, List[AttributedCommit]]


@dataclass
class Changeset:
    """Release note content derived for one package.

    Attributes
    ----------
    package : str
        Package name from its manifest.
    bump : VersionBump
        Recommended version bump.
    items : Dict[Category, List[str]]
        Formatted items per category. Only non-empty categories are
        present, in display order.
    related_link : str, optional
        URL of the related change (e.g. the pull request).
    """

    package: str
    bump: VersionBump
    items: Dict[Category, List[str]] = field(default_factory=dict)
    related_link: Optional[str] = None
