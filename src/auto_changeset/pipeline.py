"""
End-to-end changeset generation.

:class:`ChangesetPipeline` runs the stages strictly in order: discover
packages, resolve the comparison range, load the commits, attribute them
to packages, classify each package's commits, then render and write one
document per package. Fatal problems (no packages) raise; everything else
is collected on the returned :class:`~auto_changeset.report.RunReport`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from auto_changeset.changeset.renderer import render_changeset
from auto_changeset.changeset.writer import ChangesetWriter
from auto_changeset.config.loader import Settings
from auto_changeset.grouping.attribution import attribute_commits
from auto_changeset.grouping.commit_classifier import classify
from auto_changeset.grouping.group_model import Changeset
from auto_changeset.history.commit_loader import Commit, CommitHistoryLoader
from auto_changeset.history.range_resolver import ComparisonRange, RangeResolver
from auto_changeset.report import RunReport, WriteResult
from auto_changeset.vcs.base import HistoryQueries
from auto_changeset.workspace.registry import Package, discover_packages


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Invocation:
    """What to analyse and where the result belongs.

    Attributes
    ----------
    source_branch : str
        Branch whose commits are analysed.
    pr_number : str
        Pull request identifier used to name the output files.
    target_branch : str, optional
        Branch the source is merged into; auto-discovered when omitted.
    related_link : str, optional
        URL appended to every document.
    """

    source_branch: str
    pr_number: str
    target_branch: Optional[str] = None
    related_link: Optional[str] = None


class ChangesetPipeline:
    """Generate changesets for the repository at ``repo_root``."""

    def __init__(self, client: HistoryQueries, repo_root: Path, settings: Optional[Settings] = None) -> None:
        self.client = client
        self.repo_root = repo_root
        self.settings = settings or Settings()

    def discover(self) -> List[Package]:
        return discover_packages(self.repo_root, self.settings.packages_dir, self.settings.manifest)

    def resolve(self, invocation: Invocation) -> ComparisonRange:
        resolver = RangeResolver(self.client, self.settings.base_candidates, self.settings.fallback_base)
        return resolver.resolve(invocation.source_branch, invocation.target_branch)

    def build(self, commits: List[Commit], packages: List[Package], related_link: Optional[str]) -> List[Changeset]:
        """Attribute and classify; one changeset per affected package."""
        attribution = attribute_commits(commits, packages)
        return [classify(name, entries, related_link) for name, entries in attribution.items()]

    def run(
        self,
        invocation: Invocation,
        output_dir: Optional[Path] = None,
        dry_run: bool = False,
    ) -> RunReport:
        """Run every stage and report the outcome.

        Parameters
        ----------
        invocation : Invocation
            Branches, PR number and related link of this run.
        output_dir : Path, optional
            Directory for the documents; defaults to the configured
            changeset directory inside the repository.
        dry_run : bool
            Render the documents without writing them.

        Raises
        ------
        NoPackagesFound
            If the repository contains no package.
        """
        report = RunReport()
        packages = self.discover()
        report.packages = [f"{p.name} ({p.root_path})" for p in packages]

        comparison = self.resolve(invocation)
        report.range_description = str(comparison)
        if comparison.degradation is not None:
            report.degradations.append(comparison.degradation)

        loader = CommitHistoryLoader(self.client)
        commits = loader.load(comparison.lower_bound, comparison.source_branch)
        report.degradations.extend(loader.degradations)
        report.commits = [f"{c.short_hash} {c.subject}" for c in commits]
        if not commits:
            logger.info("Nothing to generate for %s", comparison)
            return report

        changesets = self.build(commits, packages, invocation.related_link)
        if not changesets:
            logger.info("No commit in %s touches a package", comparison)
            return report

        writer = ChangesetWriter(output_dir or self.repo_root / self.settings.changeset_dir)
        # Distinct package names may sanitize to the same file name.
        owners: Dict[Path, str] = {}
        for changeset in changesets:
            document = render_changeset(changeset)
            report.documents[changeset.package] = document
            path = writer.path_for(changeset.package, invocation.pr_number)
            owner = owners.setdefault(path, changeset.package)
            if owner != changeset.package:
                logger.warning("Changesets for %s and %s would share %s", owner, changeset.package, path.name)
                if not dry_run:
                    report.writes.append(
                        WriteResult(
                            package=changeset.package,
                            path=path,
                            error=f"file name already used by {owner}",
                        )
                    )
                continue
            if dry_run:
                continue
            report.writes.append(writer.write(changeset.package, invocation.pr_number, document))

        if report.failed_packages:
            logger.warning("Changesets could not be written for: %s", ", ".join(report.failed_packages))
        return report
