"""
Resolution of the commit range to analyse.

The range is ``merge-base(target, source)..source``. The target branch is
taken from the command line when given, otherwise from the source branch's
upstream, otherwise from the first candidate ref that exists, otherwise
from a fixed fallback. If no merge-base can be computed the target branch
itself becomes the lower bound, which widens the range instead of
aborting the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from auto_changeset.config.loader import DEFAULT_BASE_CANDIDATES, DEFAULT_FALLBACK_BASE
from auto_changeset.report import Degradation
from auto_changeset.vcs.base import HistoryQueries
from auto_changeset.vcs.git_client import GitError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class ComparisonRange:
    """The commits to analyse: ``lower_bound..source_branch``.

    Attributes
    ----------
    source_branch : str
        Branch whose new commits are analysed (the upper bound).
    target_branch : str
        Branch the source is compared against.
    lower_bound : str
        Merge-base of target and source, or ``target_branch`` when the
        merge-base could not be computed.
    degradation : Degradation, optional
        Set when the lower bound fell back to the target branch.
    """

    source_branch: str
    target_branch: str
    lower_bound: str
    degradation: Optional[Degradation] = None

    @property
    def degraded(self) -> bool:
        return self.degradation is not None

    def __str__(self) -> str:
        return f"{self.lower_bound}..{self.source_branch}"


class RangeResolver:
    """Determine the target branch and lower bound for a source branch."""

    def __init__(
        self,
        client: HistoryQueries,
        candidates: Iterable[str] = DEFAULT_BASE_CANDIDATES,
        fallback: str = DEFAULT_FALLBACK_BASE,
    ) -> None:
        self.client = client
        self.candidates: Tuple[str, ...] = tuple(candidates)
        self.fallback = fallback

    def default_target(self, source_branch: str) -> str:
        """Auto-discover the branch ``source_branch`` will be merged into."""
        try:
            upstream = self.client.upstream_of(source_branch)
        except GitError as exc:
            logger.debug("Upstream lookup for %s failed: %s", source_branch, exc)
            upstream = None
        if upstream:
            logger.debug("Using upstream of %s: %s", source_branch, upstream)
            return upstream

        for candidate in self.candidates:
            try:
                if self.client.ref_exists(candidate):
                    logger.debug("Using candidate target branch %s", candidate)
                    return candidate
            except GitError as exc:
                logger.debug("Probing %s failed: %s", candidate, exc)

        logger.debug("No candidate target branch resolved; falling back to %s", self.fallback)
        return self.fallback

    def resolve(self, source_branch: str, target_override: Optional[str] = None) -> ComparisonRange:
        """Compute the comparison range for ``source_branch``.

        Never raises for a missing merge-base; see :class:`ComparisonRange`.
        """
        target_branch = target_override or self.default_target(source_branch)
        try:
            lower_bound = self.client.merge_base(target_branch, source_branch)
        except GitError as exc:
            degradation = Degradation(
                stage="merge-base",
                detail=f"cannot compute merge-base of {target_branch} and {source_branch}: {exc}",
                fallback=f"target branch {target_branch} as lower bound",
            )
            logger.warning("%s", degradation)
            return ComparisonRange(source_branch, target_branch, target_branch, degradation)

        return ComparisonRange(source_branch, target_branch, lower_bound)
