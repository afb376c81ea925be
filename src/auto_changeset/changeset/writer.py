"""
Persistence of rendered changesets.

Each package of a pull request owns exactly one file,
``auto-pr-<pr>-<sanitized package name>.md``. Re-running for the same pull
request overwrites that file, so commits pushed later replace the earlier
content instead of adding a second changeset.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from auto_changeset.report import WriteResult


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


FILENAME_PREFIX = "auto-pr"

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\s]+')


def sanitize_package_name(name: str) -> str:
    """Make a package name usable as part of a file name.

    ``@scope/name`` becomes ``scope-name``.
    """
    return _UNSAFE_CHARS.sub("-", name.replace("@", "")).strip("-")


def changeset_filename(pr_number: str, package_name: str) -> str:
    """Return the file name owned by ``package_name`` for ``pr_number``.

    Path separators and other characters invalid in file names are
    replaced in ``pr_number`` as well, so the file stays in one directory.
    """
    safe_pr = _UNSAFE_CHARS.sub("-", pr_number).strip("-")
    return f"{FILENAME_PREFIX}-{safe_pr}-{sanitize_package_name(package_name)}.md"


class ChangesetWriter:
    """Write changeset documents into ``output_dir``."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def path_for(self, package_name: str, pr_number: str) -> Path:
        return self.output_dir / changeset_filename(pr_number, package_name)

    def write(self, package_name: str, pr_number: str, text: str) -> WriteResult:
        """Create or overwrite the changeset file of ``package_name``.

        File system errors are logged and reported in the returned
        :class:`WriteResult` instead of being raised.
        """
        path = self.path_for(package_name, pr_number)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            # newline="\n" keeps the bytes identical across platforms
            with open(path, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
        except OSError as exc:
            logger.error("Failed to write changeset for %s to %s: %s", package_name, path, exc)
            return WriteResult(package=package_name, path=path, error=str(exc))
        logger.debug("Wrote changeset for %s to %s", package_name, path)
        return WriteResult(package=package_name, path=path)
