"""
Classification of commit subjects by Conventional Commit prefix.

Two independent decisions are made for a package's commits:

* the version bump for the whole set, where the first rule that matches
  *any* commit wins: ``major`` for ``BREAKING CHANGE`` or ``!:`` anywhere
  in a subject, ``minor`` for a subject starting with ``feat``, and
  ``patch`` otherwise;
* the changelog category of each commit, from the first type token its
  subject starts with.

Matching is plain prefix matching on the trimmed, lower-cased subject and
is deliberately simple: ``!:`` anywhere (``fix: allow a!:b``) counts as a
breaking marker, and ``fixes ...`` counts as a fix.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from auto_changeset.grouping.group_model import AttributedCommit, Category, Changeset, VersionBump


BREAKING_MARKERS = ("BREAKING CHANGE", "!:")

# Type token -> category, tested in order.
CATEGORY_PREFIXES: Tuple[Tuple[str, Category], ...] = (
    ("feat", Category.FEATURES),
    ("fix", Category.BUG_FIXES),
    ("refactor", Category.REFACTORING),
    ("perf", Category.PERFORMANCE),
    ("docs", Category.DOCUMENTATION),
    ("chore", Category.CHORES),
)

_PREFIX_PATTERNS = {
    token: re.compile(rf"^{token}:\s*", re.IGNORECASE) for token, _ in CATEGORY_PREFIXES
}


def is_breaking(subject: str) -> bool:
    """Return True if ``subject`` carries a breaking-change marker."""
    return any(marker in subject for marker in BREAKING_MARKERS)


def determine_bump(subjects: Sequence[str]) -> VersionBump:
    """Derive one version bump from all commit subjects of a package."""
    if any(is_breaking(s) for s in subjects):
        return VersionBump.MAJOR
    normalized = [s.strip().lower() for s in subjects]
    if any(s.startswith("feat") for s in normalized):
        return VersionBump.MINOR
    # fix and everything else
    return VersionBump.PATCH


def _matches_type(lowered: str, token: str) -> bool:
    # "fix!: ..." is a breaking marker, not a plain fix
    return lowered.startswith(token) and not lowered[len(token):].startswith("!")


def categorize_subject(subject: str) -> Tuple[Category, str]:
    """Return the category of ``subject`` and its text for the changelog.

    For recognised types a leading ``<type>:`` is removed; unrecognised
    subjects are returned verbatim under :attr:`Category.OTHERS`.
    """
    text = subject.strip()
    lowered = text.lower()
    for token, category in CATEGORY_PREFIXES:
        if _matches_type(lowered, token):
            return category, _PREFIX_PATTERNS[token].sub("", text)
    return Category.OTHERS, text


def categorize_commits(commits: Sequence[AttributedCommit]) -> Dict[Category, List[str]]:
    """Sort commits into categories, formatted as ``"<text> (<hash7>)"``.

    The result holds only non-empty categories, in display order; items
    keep the order of ``commits``.
    """
    buckets: Dict[Category, List[str]] = {category: [] for category in Category}
    for entry in commits:
        category, text = categorize_subject(entry.commit.subject)
        buckets[category].append(f"{text} ({entry.commit.short_hash})")
    return {category: items for category, items in buckets.items() if items}


def classify(
    package: str,
    commits: Sequence[AttributedCommit],
    related_link: Optional[str] = None,
) -> Changeset:
    """Build the changeset of ``package`` from its attributed commits."""
    bump = determine_bump([entry.commit.subject for entry in commits])
    return Changeset(
        package=package,
        bump=bump,
        items=categorize_commits(commits),
        related_link=related_link,
    )
