"""
Rendering of changesets as Markdown documents.

The document uses the Changesets file format: a front matter block that
maps the package name to its bump, followed by the categorized summary
and, when known, a link to the related pull request::

    ---
    "@scope/ui": minor
    ---

    -   **New Features**
        -   add button (1a2b3c4)

    **Related PR**: [#42](https://github.com/org/repo/pull/42)
"""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import urlsplit

from auto_changeset.grouping.group_model import Category, Changeset


CATEGORY_TITLES: Dict[Category, str] = {
    Category.FEATURES: "New Features",
    Category.BUG_FIXES: "Bug Fixes",
    Category.REFACTORING: "Refactoring",
    Category.PERFORMANCE: "Performance Improvements",
    Category.DOCUMENTATION: "Documentation",
    Category.CHORES: "Chores",
    Category.OTHERS: "Other Changes",
}


def link_label(url: str) -> str:
    """Return the trailing path segment of ``url`` (the PR number)."""
    return urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1]


def render_summary(items: Dict[Category, List[str]]) -> str:
    """Render the category bullets in display order, skipping empty ones."""
    lines: List[str] = []
    for category in Category:
        entries = items.get(category)
        if not entries:
            continue
        lines.append(f"-   **{CATEGORY_TITLES[category]}**")
        lines.extend(f"    -   {entry}" for entry in entries)
    return "\n".join(lines)


def render_changeset(changeset: Changeset, related_link: Optional[str] = None) -> str:
    """Render ``changeset`` as a Changesets Markdown document.

    ``related_link`` overrides ``changeset.related_link``. The output
    depends only on the arguments.
    """
    link = related_link or changeset.related_link
    parts = [
        "---",
        f'"{changeset.package}": {changeset.bump.value}',
        "---",
        "",
        render_summary(changeset.items),
    ]
    text = "\n".join(parts) + "\n"
    if link:
        text += f"\n**Related PR**: [#{link_label(link)}]({link})\n"
    return text
