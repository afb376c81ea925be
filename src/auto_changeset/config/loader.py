"""
Configuration loader for auto_changeset.

The tool works without any configuration for the common monorepo layout
(``packages/<name>/package.json`` with changesets in ``.changeset/``).
Repositories that deviate from it can place a JSON file named
``auto-changeset.json`` inside their changeset directory::

    {
        "packages_dir": "libs",
        "manifest": "package.json",
        "changeset_dir": ".changeset",
        "base_candidates": ["origin/develop", "develop"],
        "fallback_base": "origin/develop"
    }

Every key is optional. If the file is malformed or a key has the wrong
type, a :class:`ConfigurationError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = "auto-changeset.json"

DEFAULT_BASE_CANDIDATES: Tuple[str, ...] = ("origin/main", "main", "origin/master", "master")
DEFAULT_FALLBACK_BASE = "origin/main"


class ConfigurationError(Exception):
    """Raised when required invocation input or the configuration file is invalid."""

    pass


@dataclass(frozen=True)
class Settings:
    """Effective settings for one run.

    Attributes
    ----------
    packages_dir : str
        Repository-relative directory whose children are packages.
    manifest : str
        File name that marks a directory as a package.
    changeset_dir : str
        Repository-relative directory that receives generated files.
    base_candidates : Tuple[str, ...]
        Refs probed, in order, when no target branch can be determined.
    fallback_base : str
        Target branch used when no candidate resolves.
    """

    packages_dir: str = "packages"
    manifest: str = "package.json"
    changeset_dir: str = ".changeset"
    base_candidates: Tuple[str, ...] = DEFAULT_BASE_CANDIDATES
    fallback_base: str = DEFAULT_FALLBACK_BASE


_STRING_KEYS = ("packages_dir", "manifest", "changeset_dir", "fallback_base")


def _validate(data: Any, source: Path) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source.name} must contain a JSON object")

    values: Dict[str, Any] = {}
    for key in _STRING_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"'{key}' must be a non-empty string")
        values[key] = value.strip()

    if "base_candidates" in data:
        candidates = data["base_candidates"]
        if not isinstance(candidates, list) or not all(isinstance(c, str) and c for c in candidates):
            raise ConfigurationError("'base_candidates' must be a list of non-empty strings")
        values["base_candidates"] = tuple(candidates)

    unknown = sorted(set(data) - set(_STRING_KEYS) - {"base_candidates"})
    if unknown:
        logger.debug("Ignoring unknown configuration keys: %s", unknown)
    return values


def load_config(repo_root: Path, path: Optional[Path] = None) -> Settings:
    """Load the settings for the repository at ``repo_root``.

    Parameters
    ----------
    repo_root : Path
        Root of the repository being analysed.
    path : Path, optional
        Explicit configuration file. When omitted, the default
        ``.changeset/auto-changeset.json`` is used if it exists.

    Returns
    -------
    Settings
        Defaults overlaid with the values found in the file.

    Raises
    ------
    ConfigurationError
        If an explicitly requested file is missing, or any file that is
        read is malformed or invalid.
    """
    defaults = Settings()
    if path is None:
        config_path = repo_root / defaults.changeset_dir / CONFIG_FILENAME
        if not config_path.exists():
            logger.debug("No configuration file at %s; using defaults", config_path)
            return defaults
    else:
        config_path = path if path.is_absolute() else repo_root / path
        if not config_path.exists():
            logger.error("Configuration file '%s' does not exist", config_path)
            raise ConfigurationError(f"Missing configuration file: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigurationError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    settings = replace(defaults, **_validate(data, config_path))
    logger.debug("Loaded configuration from %s: %s", config_path, settings)
    return settings
