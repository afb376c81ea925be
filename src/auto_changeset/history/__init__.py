"""
History analysis: which commits a branch adds on top of its target.

See :mod:`auto_changeset.history.range_resolver` for how the range is
chosen and :mod:`auto_changeset.history.commit_loader` for how commits
and their changed files are read.
"""

from .commit_loader import Commit, CommitHistoryLoader  # noqa: F401
from .range_resolver import ComparisonRange, RangeResolver  # noqa: F401
