"""
Attribution of commits to the packages whose files they changed.

A file belongs to a package when its path starts with the package root
followed by ``/``. Changes outside every package root (repository
configuration, CI files, ...) are not attributed to anything.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from auto_changeset.grouping.group_model import AttributedCommit, Attribution
from auto_changeset.history.commit_loader import Commit
from auto_changeset.workspace.registry import Package


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def files_in_package(files: Iterable[str], package: Package) -> frozenset:
    """Return the subset of ``files`` located inside ``package``."""
    prefix = package.root_path.rstrip("/") + "/"
    return frozenset(f for f in files if f.startswith(prefix))


def attribute_commits(commits: Sequence[Commit], packages: Sequence[Package]) -> Attribution:
    """Map each package name to the commits that touched it.

    Commit order is preserved within each package. A commit is listed once
    for every package it touched; commits with equal subjects are kept as
    separate entries. Packages without commits are omitted.
    """
    attribution: Attribution = {}
    for commit in commits:
        touched = []
        for package in packages:
            matched = files_in_package(commit.changed_files, package)
            if not matched:
                continue
            attribution.setdefault(package.name, []).append(
                AttributedCommit(commit=commit, matched_files=matched)
            )
            touched.append(package.name)
        if touched:
            logger.debug("Commit %s touches %s", commit.short_hash, ", ".join(touched))
        else:
            logger.debug("Commit %s touches no package", commit.short_hash)
    return attribution
