"""Loading of the commits in a comparison range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from auto_changeset.report import Degradation
from auto_changeset.vcs.base import HistoryQueries
from auto_changeset.vcs.git_client import GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Commit:
    """A non-merge commit with the files it changed."""

    hash: str
    subject: str
    changed_files: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


class CommitHistoryLoader:
    """Read commits and their changed files from the history.

    Query failures do not raise. They are logged and appended to
    :attr:`degradations`, which is reset at the start of every
    :meth:`load`.
    """

    def __init__(self, client: HistoryQueries) -> None:
        self.client = client
        self.degradations: List[Degradation] = []

    def load(self, lower_bound: str, upper_bound: str) -> List[Commit]:
        """Return the commits in ``lower_bound..upper_bound``, newest first.

        An empty list means there is nothing to generate.
        """
        self.degradations = []
        try:
            entries = self.client.list_commits(lower_bound, upper_bound)
        except GitError as exc:
            self._degrade("commit-list", f"cannot list commits in {lower_bound}..{upper_bound}: {exc}",
                          "empty commit range")
            return []

        if not entries:
            logger.info("No commits in range %s..%s", lower_bound, upper_bound)
            return []

        commits: List[Commit] = []
        for commit_hash, subject in entries:
            try:
                files = tuple(self.client.changed_files(commit_hash))
            except GitError as exc:
                self._degrade("changed-files", f"cannot list files of commit {commit_hash[:7]}: {exc}",
                              "empty file list")
                files = ()
            commits.append(Commit(hash=commit_hash, subject=subject, changed_files=files))
        return commits

    def _degrade(self, stage: str, detail: str, fallback: str) -> None:
        degradation = Degradation(stage=stage, detail=detail, fallback=fallback)
        logger.warning("%s", degradation)
        self.degradations.append(degradation)
