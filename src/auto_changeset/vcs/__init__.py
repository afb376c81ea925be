"""
Version control system (VCS) integrations.

This package contains the query interface used by the changeset pipeline
and the Git client that implements it on top of the ``git`` executable.
"""

from .base import HistoryQueries  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
