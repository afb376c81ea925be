"""
Git client implementation for auto_changeset.

This module wraps the read-only Git queries required to build changesets:
listing commits in a range, listing the files a commit touched, computing
merge-bases and probing refs. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Separator between hash and subject in ``git log`` output. A tab cannot
# appear in a hash, and splitting only once keeps tabs inside subjects.
_LOG_FORMAT = "--format=%H%x09%s"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for querying a Git repository's history."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is inside a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. ``.git`` may be a file for worktrees.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if the ``git`` executable cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Failed to run git: {e}") from e

        if check and result.returncode != 0:
            logger.debug(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def list_commits(self, lower: str, upper: str) -> List[Tuple[str, str]]:
        """List non-merge commits reachable from ``upper`` but not ``lower``.

        Returns
        -------
        List[Tuple[str, str]]
            ``(hash, subject)`` pairs in Git's native order (most recent
            first).

        Raises
        ------
        GitError
            If the log command fails (e.g. unknown revision).
        """
        result = self._run(["log", "--no-merges", _LOG_FORMAT, f"{lower}..{upper}"], check=True)
        commits: List[Tuple[str, str]] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            commit_hash, _, subject = line.partition("\t")
            commits.append((commit_hash.strip(), subject))
        return commits

    def changed_files(self, commit_hash: str) -> List[str]:
        """Return the paths changed by ``commit_hash``.

        ``-z`` makes Git print raw NUL-separated paths; without it, paths
        with non-ASCII or special characters come back C-quoted.

        Raises
        ------
        GitError
            If the show command fails.
        """
        result = self._run(["show", "--name-only", "-z", "--format=", commit_hash], check=True)
        return [path.strip("\n") for path in result.stdout.split("\0") if path.strip()]

    def merge_base(self, first: str, second: str) -> str:
        """Return the merge-base of two refs.

        Raises
        ------
        GitError
            If no common ancestor exists or a ref is unknown.
        """
        result = self._run(["merge-base", first, second], check=True)
        base = result.stdout.strip()
        if not base:
            raise GitError(f"No merge-base between {first} and {second}")
        return base

    # ------------------------------------------------------------------
    # Ref operations
    # ------------------------------------------------------------------
    def upstream_of(self, branch: str) -> Optional[str]:
        """Return the upstream ref configured for ``branch``, if any."""
        result = self._run(
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}"],
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def ref_exists(self, ref: str) -> bool:
        """Check whether ``ref`` resolves to a valid object."""
        result = self._run(["rev-parse", "--verify", "--quiet", ref], check=False)
        return result.returncode == 0
