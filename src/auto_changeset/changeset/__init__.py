"""Rendering and writing of changeset documents."""

from .renderer import render_changeset  # noqa: F401
from .writer import ChangesetWriter, changeset_filename, sanitize_package_name  # noqa: F401
