"""
Result objects collected while generating changesets.

Recoverable problems never cross stage boundaries as exceptions. Each
stage records what went wrong as a :class:`Degradation` (the stage used a
fallback value) or a failed :class:`WriteResult` (one package could not
be written), and the pipeline gathers them into a :class:`RunReport`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


class RunStatus(str, enum.Enum):
    """Final outcome of a run that did not fail fatally."""

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"


@dataclass(frozen=True)
class Degradation:
    """A query that failed and was replaced by a fallback value.

    Attributes
    ----------
    stage : str
        Pipeline stage that degraded, e.g. ``"merge-base"``.
    detail : str
        The underlying error message.
    fallback : str
        Human-readable description of the value used instead.
    """

    stage: str
    detail: str
    fallback: str

    def __str__(self) -> str:
        return f"[{self.stage}] {self.detail} -> using {self.fallback}"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of persisting the changeset of one package."""

    package: str
    path: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Everything a run produced, successful or not."""

    range_description: str = ""
    # Display lines: "name (root path)" and "<hash7> <subject>".
    packages: List[str] = field(default_factory=list)
    commits: List[str] = field(default_factory=list)
    writes: List[WriteResult] = field(default_factory=list)
    degradations: List[Degradation] = field(default_factory=list)
    # Rendered documents keyed by package name, in processing order.
    documents: Dict[str, str] = field(default_factory=dict)

    @property
    def written(self) -> List[WriteResult]:
        return [w for w in self.writes if w.ok]

    @property
    def failed_packages(self) -> List[str]:
        return [w.package for w in self.writes if not w.ok]

    @property
    def status(self) -> RunStatus:
        if self.failed_packages:
            return RunStatus.PARTIAL_SUCCESS
        return RunStatus.SUCCESS
