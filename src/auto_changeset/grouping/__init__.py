"""
Grouping logic for changesets.

This package attributes commits to packages and classifies each
package's commits into a version bump and changelog categories. See
:mod:`auto_changeset.grouping.attribution`,
:mod:`auto_changeset.grouping.commit_classifier` and
:mod:`auto_changeset.grouping.group_model` for details.
"""

from .attribution import attribute_commits  # noqa: F401
from .commit_classifier import classify  # noqa: F401
from .group_model import AttributedCommit, Category, Changeset, VersionBump  # noqa: F401
