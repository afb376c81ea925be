"""
Top-level package for auto_changeset.

Generates per-package changeset files for a multi-package repository from
the commits of a branch. The command line entry point lives in
``auto_changeset.cli``; programmatic use goes through
``auto_changeset.pipeline.ChangesetPipeline``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
