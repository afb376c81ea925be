"""Interface of the version-control queries used by the pipeline."""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple


class HistoryQueries(Protocol):
    """Read-only history queries consumed by range resolution and loading.

    :class:`~auto_changeset.vcs.git_client.GitClient` is the production
    implementation. Tests substitute an in-memory history with the same
    methods.
    """

    def list_commits(self, lower: str, upper: str) -> List[Tuple[str, str]]:
        """Return ``(hash, subject)`` pairs of the non-merge commits in
        ``lower..upper``, most recent first."""
        ...

    def changed_files(self, commit_hash: str) -> List[str]:
        """Return the repository-relative paths changed by a commit."""
        ...

    def merge_base(self, first: str, second: str) -> str:
        """Return the best common ancestor of two refs."""
        ...

    def upstream_of(self, branch: str) -> Optional[str]:
        """Return the configured upstream of ``branch`` or ``None``."""
        ...

    def ref_exists(self, ref: str) -> bool:
        """Return True if ``ref`` resolves to an object."""
        ...
