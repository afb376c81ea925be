#!/usr/bin/env python
"""
Thin wrapper script to invoke the auto_changeset CLI.

Running ``python auto_changeset_cli.py`` is equivalent to running the
``auto-changeset`` console script installed via ``pyproject.toml``.
"""

from auto_changeset.cli import main


if __name__ == "__main__":
    main(prog_name="auto-changeset")
