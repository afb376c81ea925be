"""
Package discovery for multi-package repositories.

A package is an immediate subdirectory of the packages directory that
contains a manifest file. The package name is read from the manifest's
``name`` field; the root path is the repository-relative POSIX path of
the directory, which is what commit file lists are matched against.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class DiscoveryError(Exception):
    """Raised when the repository layout cannot be analysed."""

    pass


class NoPackagesFound(DiscoveryError):
    """Raised when no package directory with a manifest exists."""

    pass


@dataclass(frozen=True)
class Package:
    """A package of the repository.

    Attributes
    ----------
    name : str
        Name declared in the package manifest.
    root_path : str
        Repository-relative path of the package directory, using ``/``.
    """

    name: str
    root_path: str


def _read_package_name(manifest_path: Path) -> Optional[str]:
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Skipping %s: cannot read manifest (%s)", manifest_path, exc)
        return None
    name = data.get("name") if isinstance(data, dict) else None
    if not isinstance(name, str) or not name.strip():
        logger.warning("Skipping %s: manifest has no 'name'", manifest_path)
        return None
    return name.strip()


def discover_packages(
    repo_root: Path,
    packages_dir: str = "packages",
    manifest: str = "package.json",
) -> List[Package]:
    """Return the packages found under ``repo_root / packages_dir``.

    Directories are visited in sorted order. Directories without the
    manifest, or whose manifest has no usable name, are skipped.

    Raises
    ------
    NoPackagesFound
        If the packages directory is missing or yields no package.
    """
    base = repo_root / packages_dir
    if not base.is_dir():
        raise NoPackagesFound(f"Packages directory not found: {base}")

    relative_base = Path(packages_dir).as_posix().strip("/")
    packages: List[Package] = []
    seen = set()
    for child in sorted(base.iterdir(), key=lambda p: p.name):
        manifest_path = child / manifest
        if not child.is_dir() or not manifest_path.is_file():
            continue
        name = _read_package_name(manifest_path)
        if name is None:
            continue
        if name in seen:
            logger.warning("Skipping %s: duplicate package name '%s'", child, name)
            continue
        seen.add(name)
        root_path = f"{relative_base}/{child.name}" if relative_base not in ("", ".") else child.name
        packages.append(Package(name=name, root_path=root_path))
        logger.debug("Discovered package %s at %s", name, root_path)

    if not packages:
        raise NoPackagesFound(f"No packages with a {manifest} found under {base}")
    return packages
